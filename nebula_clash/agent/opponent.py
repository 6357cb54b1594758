"""Opponent controller: plays one full turn for the active side.

Each turn runs four steps in order:
1. Energize: link every free energy producer to the most urgent consumer on
   its ship (medical bays, then ammo producers, then weapons needing the
   least extra energy)
2. Charge: every free, energized ammo producer adds one charge to the first
   weapon on its ship that still needs ammo
3. Fire: every ready weapon asks the targeting heuristic for a cell and fires;
   each attack settles before the next weapon picks a target
4. End turn

Every action goes through GameEngine.apply with the same commands a human
player issues, so the controller can never break a rule the UI enforces.
"""

import logging
from dataclasses import dataclass, field

from ..engine.attack import can_fire
from ..engine.game_engine import GameEngine
from ..engine.power import energy_source_count
from ..engine.ship_identifier import identify_ships, ship_at
from ..models.cell import Grid
from ..models.command import (
    AllocateAmmo,
    AllocateEnergy,
    Command,
    EndTurn,
    FireWeapon,
    SelectWeapon,
)
from ..models.game import GameState
from ..utils.coordinates import Coord
from .advisory import MoveAdvisor
from .targeting import TargetingHeuristic

logger = logging.getLogger(__name__)


@dataclass
class TurnSummary:
    """What the controller did during one turn."""

    side: str
    energy_links: int = 0
    charges: int = 0
    attacks: list[dict] = field(default_factory=list)
    ended_turn: bool = False


class OpponentController:
    """Automated player for one side of the board."""

    def __init__(
        self,
        engine: GameEngine | None = None,
        heuristic: TargetingHeuristic | None = None,
        advisor: MoveAdvisor | None = None,
    ):
        """Initialize controller.

        Args:
            engine: Command engine (a fresh one by default)
            heuristic: Targeting heuristic (built around ``advisor`` by default)
            advisor: Optional move advisory oracle for the default heuristic
        """
        self.engine = engine or GameEngine()
        self.heuristic = heuristic or TargetingHeuristic(advisor=advisor)

    def play_turn(self, state: GameState) -> tuple[GameState, TurnSummary]:
        """Play the active side's turn to completion.

        Args:
            state: Game state in the playing phase

        Returns:
            Tuple of (state after the turn, summary of actions taken)

        Raises:
            ValueError: If the game is not in the playing phase
        """
        if state.phase != "playing":
            raise ValueError(f"Cannot play a turn during the {state.phase} phase")

        side = state.turn
        summary = TurnSummary(side=side)

        state = self._energize(state, summary)
        state = self._charge(state, summary)
        state = self._fire(state, summary)

        if state.phase == "playing":
            state = self._issue(state, EndTurn())
            summary.ended_turn = True

        logger.info(
            f"{side} turn: {summary.energy_links} energy link(s), {summary.charges} charge(s), "
            f"{len(summary.attacks)} attack(s)"
        )
        return state, summary

    # =========================================================================
    # TURN STEPS
    # =========================================================================

    def _energize(self, state: GameState, summary: TurnSummary) -> GameState:
        for producer_cell, _ in list(state.player_for(state.turn).grid.occupied()):
            grid = state.player_for(state.turn).grid
            cell = grid.cell(producer_cell)
            producer = cell.component
            if not producer.is_energy_producer or cell.is_hit or producer.used_this_turn:
                continue
            if producer.powered_component_id is not None:
                continue

            consumer_cell = self._pick_consumer(grid, producer_cell)
            if consumer_cell is None:
                continue
            before = state
            state = self._issue(state, AllocateEnergy(producer_cell, consumer_cell))
            if state is not before:
                summary.energy_links += 1
        return state

    def _charge(self, state: GameState, summary: TurnSummary) -> GameState:
        for producer_cell, _ in list(state.player_for(state.turn).grid.occupied()):
            grid = state.player_for(state.turn).grid
            cell = grid.cell(producer_cell)
            producer = cell.component
            if not producer.is_ammo_producer or cell.is_hit or producer.used_this_turn:
                continue
            if energy_source_count(grid, producer.id) < producer.spec.energy_cost:
                continue

            weapon_cell = self._pick_weapon_to_charge(grid, producer_cell)
            if weapon_cell is None:
                continue
            before = state
            state = self._issue(state, AllocateAmmo(producer_cell, weapon_cell))
            if state is not before:
                summary.charges += 1
        return state

    def _fire(self, state: GameState, summary: TurnSummary) -> GameState:
        side = state.turn
        weapon_cells = [
            coord
            for coord, cell in state.player_for(side).grid.occupied()
            if cell.component.is_weapon
        ]
        for weapon_cell in weapon_cells:
            if state.phase != "playing":
                break
            grid = state.player_for(side).grid
            if not can_fire(grid, grid.cell(weapon_cell).component):
                continue

            target = self.heuristic.choose_target(state, side)
            if target is None:
                logger.info(f"{side} has no untried cells left to target")
                break

            selected = self._issue(state, SelectWeapon(weapon_cell))
            if selected is state:
                continue
            state = self._issue(selected, FireWeapon(target))
            if state is selected:
                continue

            attack = state.last_attack
            hits = [tuple(c) for c in attack["hits"]]
            self.heuristic.record_result(state.ai_memory[side], target, hits)
            summary.attacks.append(attack)
        return state

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _issue(self, state: GameState, command: Command) -> GameState:
        """Apply a command, keeping the old state if it is rejected."""
        result = self.engine.apply(state, command)
        if not result.ok:
            logger.warning(f"{type(command).__name__} rejected for {state.turn}: {result.reason}")
        return result.state

    def _pick_consumer(self, grid: Grid, producer_cell: Coord) -> Coord | None:
        """First consumer on the producer's ship that still needs energy.

        Order: medical bays, ammo producers with a weapon left to charge,
        then weapons by ascending remaining energy need.
        """
        ship = ship_at(identify_ships(grid), producer_cell)
        if ship is None:
            return None

        def need(component) -> int:
            return component.spec.energy_cost - energy_source_count(grid, component.id)

        weapons_need_ammo = any(w.ammo_needed > 0 for w in ship.weapons)
        candidates = [c for c in ship.medical_bays if need(c) > 0]
        if weapons_need_ammo:
            candidates += [c for c in ship.ammo_producers if need(c) > 0 and not c.used_this_turn]
        candidates += sorted((c for c in ship.weapons if need(c) > 0), key=need)

        for component in candidates:
            located = grid.find_component(component.id)
            if located is not None:
                return located[0]
        return None

    def _pick_weapon_to_charge(self, grid: Grid, producer_cell: Coord) -> Coord | None:
        """First intact weapon on the producer's ship that still needs ammo."""
        ship = ship_at(identify_ships(grid), producer_cell)
        if ship is None:
            return None
        for weapon in ship.weapons:
            if weapon.ammo_needed > 0:
                return grid.find_component(weapon.id)[0]
        return None
