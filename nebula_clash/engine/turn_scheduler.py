"""End-of-turn orchestration.

Ending a turn runs these phases for the side whose turn is over:
1. Repair timers (tick down, finished repairs clear the hit)
2. Repair assignment (energized medical bays start on damaged cells)
3. Turn reset for the side about to act (producers unused, power links dropped)
4. Victory check
5. Hand over the turn

Each phase is an independent method so it can be tested on its own; end_turn
composes them in order.
"""

import logging
from dataclasses import dataclass, field

from ..models.game import GameState
from ..models.player import PlayerState
from ..utils import HUMAN, REPAIR_TURNS
from ..utils.coordinates import Coord
from .errors import InvalidSelection
from .power import is_energized, reset_turn_usage
from .ship_identifier import identify_ships
from .victory import check_victory

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    """Repair activity on one board during an end-of-turn pass.

    Attributes:
        side: Side whose board was repaired
        completed: Cells whose repair finished (no longer hit)
        started: Cells newly assigned to a medical bay
    """

    side: str
    completed: list[Coord] = field(default_factory=list)
    started: list[Coord] = field(default_factory=list)


class TurnScheduler:
    """Runs the end-of-turn state transition."""

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_repair_timers(self, player: PlayerState) -> list[Coord]:
        """Tick every running repair down by one turn.

        A cell whose timer reaches zero is no longer hit.

        Returns:
            Cells whose repair completed
        """
        completed = []
        grid = player.grid
        for coord in grid.coords():
            cell = grid.cell(coord)
            if cell.repair_turns_left > 0:
                cell.repair_turns_left -= 1
                if cell.repair_turns_left == 0:
                    cell.is_hit = False
                    completed.append(coord)
        player.ships = identify_ships(grid)
        return completed

    def execute_phase_repair_assignment(self, player: PlayerState) -> list[Coord]:
        """Start repairs on damaged cells of every ship that is still afloat.

        A ship can run one repair per energized, intact medical bay. Repairs
        already in progress use up capacity. Damaged cells are taken in ship
        cell order. Starting a repair does not clear the hit.

        Returns:
            Cells that started repairing
        """
        grid = player.grid
        started = []
        for ship in identify_ships(grid):
            if ship.is_sunk:
                continue

            # medical_bays only lists bays on non-hit cells
            capacity = sum(1 for bay in ship.medical_bays if is_energized(grid, bay))
            capacity -= sum(1 for coord in ship.cells if grid.cell(coord).repair_turns_left > 0)

            for coord in ship.cells:
                if capacity <= 0:
                    break
                cell = grid.cell(coord)
                if cell.is_hit and cell.repair_turns_left == 0:
                    cell.repair_turns_left = REPAIR_TURNS
                    started.append(coord)
                    capacity -= 1

        player.ships = identify_ships(grid)
        return started

    def execute_phase_turn_reset(self, player: PlayerState) -> None:
        """Prepare a board for its owner's next turn.

        Producers become available again and every power link is cleared;
        power has to be allocated afresh each turn.
        """
        reset_turn_usage(player.grid)
        player.ships = identify_ships(player.grid)

    def execute_phase_victory_check(self, state: GameState) -> GameState:
        """Check whether either fleet has been destroyed."""
        check_victory(state)
        return state

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def end_turn(self, state: GameState, side: str) -> tuple[GameState, RepairReport]:
        """End the active side's turn.

        The turn number advances each time play returns to the human, who
        opens every round.

        Args:
            state: Current game state (mutated in place)
            side: Side requesting the end of turn

        Returns:
            Tuple of (updated game state, repair report for the ending side)

        Raises:
            InvalidSelection: If the game is not being played or it is not side's turn
        """
        if state.phase != "playing":
            raise InvalidSelection("The game is not in progress.")
        if state.turn != side:
            raise InvalidSelection("It is not your turn.", title="Not Your Turn")

        ending = state.player_for(side)
        report = RepairReport(side=side)
        report.completed = self.execute_phase_repair_timers(ending)
        report.started = self.execute_phase_repair_assignment(ending)

        next_side = state.other_side(side)
        self.execute_phase_turn_reset(state.player_for(next_side))

        state.clear_selection()
        self.execute_phase_victory_check(state)
        if state.winner:
            return state, report

        state.turn = next_side
        if next_side == HUMAN:
            state.turn_number += 1
        state.message = "Your turn." if next_side == HUMAN else "Enemy's turn."

        logger.info(
            f"{side} ended turn: {len(report.completed)} repair(s) completed, "
            f"{len(report.started)} started; turn {state.turn_number} -> {next_side}"
        )
        return state, report
