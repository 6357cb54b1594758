"""Hunt/search targeting heuristic for the opponent controller.

Decision order for each shot:
1. Following a hunt direction: walk from the last hit along it and take the
   first untried cell (a miss or the board edge blocks the walk)
2. In search-and-destroy: queue the untried neighbours of the last hit at the
   front of the potential targets
3. Take the first still-untried queued target
4. Otherwise pick from a checkerboard-parity subset of untried cells, asking
   the advisory oracle for a high-value cell on hard difficulty
"""

import logging

from ..interface.renderer import BoardRenderer
from ..models.cell import Grid
from ..models.game import AIMemory, GameState
from ..utils import GameRNG
from ..utils.constants import ADVISORY_SAMPLE_SIZE
from ..utils.coordinates import (
    DIRECTIONS,
    Coord,
    coord_label,
    direction_between,
    orthogonal_neighbors,
)
from .advisory import MoveAdvisor, consult_advisor

logger = logging.getLogger(__name__)


class TargetingHeuristic:
    """Chooses attack targets and learns from their results.

    The heuristic itself is stateless; its memory lives in
    ``GameState.ai_memory`` so it is saved and copied with the game.
    """

    def __init__(self, advisor: MoveAdvisor | None = None, renderer: BoardRenderer | None = None):
        """Initialize heuristic.

        Args:
            advisor: Optional move advisory oracle consulted on hard difficulty
            renderer: Renderer used to build the advisor's board snapshot
        """
        self.advisor = advisor
        self.renderer = renderer or BoardRenderer()

    def choose_target(self, state: GameState, side: str) -> Coord | None:
        """Pick the next cell to fire at on the opponent's board.

        Args:
            state: Current game state (memory and RNG are updated in place)
            side: Side that is shooting

        Returns:
            Target cell, or None if every cell has been tried
        """
        board = state.opponent_for(side).grid
        memory = state.ai_memory[side]
        untried = set(board.untried())
        if not untried:
            return None

        if memory.search_and_destroy and memory.last_hit is not None:
            if memory.hunt_direction:
                target = self._follow_direction(board, memory)
                if target is not None:
                    return target
                memory.hunt_direction = None

            neighbors = [
                n
                for n in orthogonal_neighbors(memory.last_hit, board.size)
                if n in untried and n not in memory.potential_targets
            ]
            memory.potential_targets[:0] = neighbors

        while memory.potential_targets:
            candidate = tuple(memory.potential_targets.pop(0))
            if candidate in untried:
                return candidate

        memory.search_and_destroy = False
        return self._fallback(
            board, sorted(untried), state.settings.difficulty, state.turn_number, state.rng
        )

    def record_result(self, memory: AIMemory, target: Coord, hits: list[Coord]) -> None:
        """Update targeting memory after an attack settles.

        A hit makes the hit cell the new hunting origin. If it lies next to the
        previous hit, the step between them becomes the hunt direction. A miss
        while following a direction drops the direction.

        Args:
            memory: Shooter's targeting memory
            target: Aim point of the attack
            hits: Cells newly hit by the attack
        """
        if hits:
            new_hit = target if target in hits else hits[0]
            previous = memory.last_hit
            if memory.search_and_destroy and previous is not None:
                memory.hunt_direction = direction_between(previous, new_hit)
            else:
                memory.hunt_direction = None
            memory.last_hit = new_hit
            memory.search_and_destroy = True
            memory.potential_targets.clear()
        elif memory.hunt_direction:
            memory.hunt_direction = None

    def _follow_direction(self, board: Grid, memory: AIMemory) -> Coord | None:
        """Walk from the last hit along the hunt direction."""
        d_row, d_col = DIRECTIONS[memory.hunt_direction]
        row, col = memory.last_hit
        while True:
            row, col = row + d_row, col + d_col
            if not board.in_bounds((row, col)):
                return None
            cell = board.cell((row, col))
            if cell.is_miss:
                return None
            if not cell.is_hit:
                return (row, col)

    def _fallback(
        self, board: Grid, untried: list[Coord], difficulty: str, turn_number: int, rng: GameRNG
    ) -> Coord:
        """Random pick, thinned to one checkerboard colour above easy."""
        candidates = untried
        if difficulty != "easy":
            parity = turn_number % 2
            parity_cells = [c for c in untried if (c[0] + c[1]) % 2 == parity]
            if parity_cells:
                candidates = parity_cells

        if difficulty == "hard" and self.advisor is not None:
            advised = self._advised_choice(board, candidates, rng)
            if advised is not None:
                return advised

        return rng.choice(candidates)

    def _advised_choice(self, board: Grid, candidates: list[Coord], rng: GameRNG) -> Coord | None:
        """Return the first sampled candidate the advisor rates as high value."""
        snapshot = self.renderer.render_target(board)
        for candidate in rng.sample(candidates, ADVISORY_SAMPLE_SIZE):
            evaluation = consult_advisor(self.advisor, snapshot, coord_label(candidate))
            if evaluation is not None and evaluation.is_high_value:
                logger.info(
                    f"Advisor rated {coord_label(candidate)} high value: {evaluation.reason}"
                )
                return candidate
        return None
