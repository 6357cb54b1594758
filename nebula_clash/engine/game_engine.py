"""Command dispatch: the state transition function of the game.

GameEngine.apply(state, command) never mutates its input. It works on a deep
copy and returns a CommandResult with either the new state and its effects,
or the original state and the reason the command was rejected.

Commands during play are applied on behalf of ``state.turn``; the opponent
controller drives the AI side through exactly the same commands as a human.
"""

import copy
import logging

from ..models.command import (
    AllocateAmmo,
    AllocateEnergy,
    CancelAllocation,
    Command,
    CommandResult,
    Effect,
    EndTurn,
    FinishPlacing,
    FireWeapon,
    PlaceAllRandomly,
    PlaceComponent,
    ResetGame,
    SelectComponentKind,
    SelectResource,
    SelectWeapon,
    StartGame,
    ToggleDebugView,
)
from ..models.game import GameState
from ..utils import HUMAN
from ..utils.coordinates import coord_label
from .attack import begin_attack, ready_weapon, resolve_attack
from .errors import GameRuleError, InvalidPlacement, InvalidSelection
from .placement import check_affordable, new_game, place_component, place_randomly, start_placing
from .power import allocate_ammo, allocate_energy, check_resource_selectable
from .ship_identifier import identify_ships
from .turn_scheduler import TurnScheduler
from .victory import check_victory

logger = logging.getLogger(__name__)


def _toast(title: str, description: str = "", variant: str = "default") -> Effect:
    return Effect(kind="toast", title=title, description=description, variant=variant)


def _require_phase(state: GameState, *phases: str) -> None:
    if state.phase not in phases:
        raise InvalidSelection(f"Not allowed during the {state.phase} phase.")


class GameEngine:
    """Applies commands to game states."""

    def __init__(self, scheduler: TurnScheduler | None = None):
        self.scheduler = scheduler or TurnScheduler()
        self._handlers = {
            StartGame: self._start_game,
            SelectComponentKind: self._select_component_kind,
            PlaceComponent: self._place_component,
            PlaceAllRandomly: self._place_all_randomly,
            FinishPlacing: self._finish_placing,
            SelectWeapon: self._select_weapon,
            SelectResource: self._select_resource,
            AllocateEnergy: self._allocate_energy,
            AllocateAmmo: self._allocate_ammo,
            CancelAllocation: self._cancel_allocation,
            FireWeapon: self._fire_weapon,
            EndTurn: self._end_turn,
            ResetGame: self._reset_game,
            ToggleDebugView: self._toggle_debug_view,
        }

    def apply(self, state: GameState, command: Command) -> CommandResult:
        """Apply one command.

        Args:
            state: Current game state (left untouched)
            command: Command to apply

        Returns:
            CommandResult with the new state on success, or the original state
            and a reason on failure

        Raises:
            TypeError: If the command type is unknown
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {type(command).__name__}")

        new_state = copy.deepcopy(state)
        try:
            result_state, effects = handler(new_state, command)
        except GameRuleError as e:
            logger.debug(f"{type(command).__name__} rejected: {e.message}")
            return CommandResult(
                ok=False,
                state=state,
                effects=[_toast(e.title, e.message, "destructive")],
                reason=e.message,
            )

        result_state.player.ships = identify_ships(result_state.player.grid)
        result_state.ai.ships = identify_ships(result_state.ai.grid)
        return CommandResult(ok=True, state=result_state, effects=effects)

    # =========================================================================
    # SETUP AND PLACEMENT
    # =========================================================================

    def _start_game(self, state: GameState, command: StartGame):
        _require_phase(state, "setup")
        start_placing(state, command.settings)
        settings = command.settings
        return state, [
            _toast(
                "Starting New Game",
                f"Board: {settings.board_size}x{settings.board_size}, AI: {settings.difficulty}",
            )
        ]

    def _select_component_kind(self, state: GameState, command: SelectComponentKind):
        _require_phase(state, "placing")
        check_affordable(state.player, command.kind)
        state.selected_component_kind = command.kind
        return state, []

    def _place_component(self, state: GameState, command: PlaceComponent):
        _require_phase(state, "placing")
        kind = command.kind or state.selected_component_kind
        if kind is None:
            raise InvalidSelection("Select a component type first.")
        place_component(state.player, tuple(command.cell), kind)
        return state, []

    def _place_all_randomly(self, state: GameState, command: PlaceAllRandomly):
        _require_phase(state, "placing")
        state.player = place_randomly(state.player, state.rng)
        return self._finish_placing(state, FinishPlacing())

    def _finish_placing(self, state: GameState, command: FinishPlacing):
        _require_phase(state, "placing")
        if not identify_ships(state.player.grid):
            raise InvalidPlacement(
                "You must place at least one ship part.", title="No Ships Placed"
            )

        state.ai = place_randomly(state.ai, state.rng)
        state.phase = "playing"
        state.turn = HUMAN
        state.turn_number = 1
        state.selected_component_kind = None
        state.message = "All ships placed! Your turn to attack."
        logger.info(
            f"Placement finished: human {state.player.total_points} points, "
            f"ai {state.ai.total_points} points"
        )
        return state, [_toast("Fleet Deployed!", "Your ships are in position. Time to attack.")]

    # =========================================================================
    # RESOURCE ALLOCATION
    # =========================================================================

    def _require_active_play(self, state: GameState) -> None:
        _require_phase(state, "playing")

    def _select_weapon(self, state: GameState, command: SelectWeapon):
        self._require_active_play(state)
        grid = state.player_for(state.turn).grid
        cell = tuple(command.cell)
        if not grid.in_bounds(cell) or grid.cell(cell).component is None:
            raise InvalidSelection("Select one of your ready weapons first.")
        component = grid.cell(cell).component
        if not component.is_weapon:
            raise InvalidSelection(f"A {component.kind.value} is not a weapon.")
        ready_weapon(grid, component.id)

        state.selected_weapon_id = component.id
        state.allocation_mode = None
        state.selected_resource = None
        return state, [_toast("Weapon Selected", "Target an enemy cell to fire.")]

    def _select_resource(self, state: GameState, command: SelectResource):
        self._require_active_play(state)
        cell = tuple(command.cell)
        mode = check_resource_selectable(state.player_for(state.turn), cell)
        state.allocation_mode = mode
        state.selected_resource = cell
        if mode == "energy":
            return state, [_toast("Energy Allocation", "Select a component to power.")]
        return state, [_toast("Ammo Allocation", "Select a weapon to charge.")]

    def _allocate_energy(self, state: GameState, command: AllocateEnergy):
        self._require_active_play(state)
        consumer = allocate_energy(
            state.player_for(state.turn), tuple(command.producer_cell), tuple(command.consumer_cell)
        )
        state.allocation_mode = None
        state.selected_resource = None
        return state, [_toast("Component Energized", f"{consumer.kind.value} is now powered.")]

    def _allocate_ammo(self, state: GameState, command: AllocateAmmo):
        self._require_active_play(state)
        charge = allocate_ammo(
            state.player_for(state.turn),
            tuple(command.producer_cell),
            tuple(command.weapon_cell),
            command.amount,
        )
        state.allocation_mode = None
        state.selected_resource = None
        return state, [_toast("Weapon Charged", f"Charge is now {charge}.")]

    def _cancel_allocation(self, state: GameState, command: CancelAllocation):
        state.allocation_mode = None
        state.selected_resource = None
        return state, []

    # =========================================================================
    # COMBAT AND TURNS
    # =========================================================================

    def _fire_weapon(self, state: GameState, command: FireWeapon):
        self._require_active_play(state)
        if not state.selected_weapon_id:
            raise InvalidSelection(
                "Select one of your ready weapons first.", title="No Weapon Selected"
            )

        side = state.turn
        attacker = state.player_for(side)
        defender = state.opponent_for(side)
        target = tuple(command.target_cell)

        pending = begin_attack(attacker.grid, state.selected_weapon_id, defender.grid, target)
        effects = [Effect(kind="attack_impact", title="Impact", cells=list(pending.impact_cells))]

        result = resolve_attack(attacker.grid, defender.grid, pending)
        defender.ships = identify_ships(defender.grid)
        attacker.ships = identify_ships(attacker.grid)

        actor = "You" if side == HUMAN else "AI"
        state.message = f"{actor} {'scored a HIT!' if result.any_hit else 'missed.'}"
        state.last_attack = {"attacker": side, **result.to_dict()}
        state.selected_weapon_id = None
        effects.append(
            Effect(
                kind="attack_settled",
                title=state.message,
                description=f"Target {coord_label(target)}",
                cells=result.changed,
            )
        )

        if check_victory(state):
            effects.append(_toast("Game Over", state.message))
        return state, effects

    def _end_turn(self, state: GameState, command: EndTurn):
        state, report = self.scheduler.end_turn(state, state.turn)
        effects = []
        if report.completed:
            effects.append(
                _toast("Repairs Complete", f"{len(report.completed)} cell(s) restored.")
            )
        if state.winner:
            effects.append(_toast("Game Over", state.message))
        return state, effects

    def _reset_game(self, state: GameState, command: ResetGame):
        fresh = new_game(seed=state.rng.randrange(2**32), settings=state.settings)
        return fresh, []

    def _toggle_debug_view(self, state: GameState, command: ToggleDebugView):
        state.debug = not state.debug
        return state, []
