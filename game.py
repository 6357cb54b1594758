#!/usr/bin/env python3
"""Nebula Clash - command line entry point.

Runs seeded computer-vs-computer games: both fleets are placed at random and
the opponent controller plays each side in turn. Useful for watching the AI,
reproducing a game from its seed, and producing saved games to resume in the
web server.
"""

import argparse
import logging
import sys

from nebula_clash.agent.advisory import create_collaborators_from_env
from nebula_clash.agent.opponent import OpponentController
from nebula_clash.engine.game_engine import GameEngine
from nebula_clash.engine.placement import new_game
from nebula_clash.interface.renderer import BoardRenderer
from nebula_clash.models.command import PlaceAllRandomly, StartGame
from nebula_clash.models.game import GameSettings, GameState
from nebula_clash.utils.constants import (
    BOARD_SIZES,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    RNG_SEED_DEFAULT,
)
from nebula_clash.utils.serialization import load_game, save_game


class SimulationRunner:
    """Manages the turn loop of a computer-vs-computer game."""

    def __init__(
        self,
        state: GameState,
        controller: OpponentController,
        max_turns: int = 200,
        watch: bool = False,
    ):
        """Initialize runner.

        Args:
            state: Game in the playing phase
            controller: Plays whichever side is active
            max_turns: Stop after this many full turns
            watch: If True, print both boards after every side's turn
        """
        self.state = state
        self.controller = controller
        self.max_turns = max_turns
        self.watch = watch
        self.renderer = BoardRenderer()

    def run(self) -> GameState:
        """Main game loop."""
        try:
            while self.state.phase == "playing" and self.state.turn_number <= self.max_turns:
                side, number = self.state.turn, self.state.turn_number
                self.state, summary = self.controller.play_turn(self.state)
                hits = sum(1 for a in summary.attacks if a["result"] == "hit")
                print(
                    f"Turn {number:>3} {side:>5}: "
                    f"{len(summary.attacks)} shot(s), {hits} hit(s)"
                )
                if self.watch:
                    self._show_boards()
        except KeyboardInterrupt:
            print("\n\nGame interrupted by user.")

        self._show_result()
        return self.state

    def _show_boards(self) -> None:
        print("\nHuman fleet:")
        print(self.renderer.render_own(self.state.player.grid))
        print("\nAI fleet:")
        print(self.renderer.render_own(self.state.ai.grid))
        print()

    def _show_result(self) -> None:
        print("\n" + "=" * 60)
        if self.state.winner:
            print(self.state.message)
        else:
            print(f"No winner after {self.max_turns} turns.")
        print(
            f"Fleet value: human {self.state.player.total_points}, "
            f"ai {self.state.ai.total_points}"
        )
        print("=" * 60)


def setup_game(seed: int, settings: GameSettings, engine: GameEngine) -> GameState:
    """Create a game and place both fleets at random."""
    state = new_game(seed)
    for command in (StartGame(settings), PlaceAllRandomly()):
        result = engine.apply(state, command)
        if not result.ok:
            raise ValueError(result.reason)
        state = result.state
    return state


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Nebula Clash - seeded AI vs AI simulations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # 10x10 board, medium AI, seed 42
  %(prog)s --board-size 15 --difficulty hard # Bigger board, smarter targeting
  %(prog)s --seed 7 --watch                  # Print both boards every turn
  %(prog)s --save game.json                  # Save the final state
  %(prog)s --load game.json                  # Resume a saved game
        """,
    )
    parser.add_argument(
        "--board-size",
        type=int,
        choices=BOARD_SIZES,
        default=DEFAULT_BOARD_SIZE,
        help=f"Board side length (default: {DEFAULT_BOARD_SIZE})",
    )
    parser.add_argument(
        "--difficulty",
        choices=DIFFICULTIES,
        default=DEFAULT_DIFFICULTY,
        help=f"AI targeting difficulty (default: {DEFAULT_DIFFICULTY})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for placement and targeting (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=200,
        help="Stop after this many full turns (default: 200)",
    )
    parser.add_argument("--load", type=str, metavar="FILE", help="Load game from JSON file")
    parser.add_argument(
        "--save", type=str, metavar="FILE", help="Save game to JSON file after completion"
    )
    parser.add_argument(
        "--watch", action="store_true", help="Print both boards after every turn"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Suppress noisy HTTP request logs from the LLM clients
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    engine = GameEngine()
    advisor, _ = create_collaborators_from_env()
    controller = OpponentController(engine=engine, advisor=advisor)

    if args.load:
        print(f"Loading game from {args.load}...")
        state = load_game(args.load)
        if state is None:
            print(f"Error: no usable saved game in {args.load}.")
            sys.exit(1)
        if state.phase != "playing":
            print(f"Error: saved game is in the {state.phase} phase, not playing.")
            sys.exit(1)
        print(f"Game loaded (turn {state.turn_number}, {state.turn} to move, seed {state.seed})")
    else:
        settings = GameSettings(board_size=args.board_size, difficulty=args.difficulty)
        state = setup_game(args.seed, settings, engine)
        print(
            f"New {settings.board_size}x{settings.board_size} game, seed {args.seed}: "
            f"human fleet {state.player.total_points} pts, ai fleet {state.ai.total_points} pts"
        )

    final_state = SimulationRunner(state, controller, args.max_turns, args.watch).run()

    if args.save:
        path = save_game(final_state, args.save)
        print(f"Game saved to {path}")


if __name__ == "__main__":
    main()
