"""Game state serialization to/from JSON.

The whole GameState is stored as one JSON snapshot in a single storage slot
(a file). Snapshots carry a version number; a snapshot that is unreadable,
lacks ``phase`` or ``settings``, or has another version is treated as absent
and removed from the slot.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..models.cell import Cell, Grid
from ..models.component import Component, ComponentKind
from ..models.game import AIMemory, GameSettings, GameState
from ..models.player import PlayerState
from .rng import GameRNG
from .constants import DEFAULT_STATE_FILE, SNAPSHOT_VERSION

logger = logging.getLogger(__name__)


def _expect(value: Any, kind: type, what: str) -> Any:
    """Return value if it has the expected JSON shape, else raise ValueError."""
    if not isinstance(value, kind):
        raise ValueError(f"{what} should be a {kind.__name__}, got {type(value).__name__}")
    return value


def _resolve_path(filepath: str | None) -> Path:
    """Map a slot name to a file, placing relative names in the state/ directory."""
    path = Path(filepath or DEFAULT_STATE_FILE)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        state_dir.mkdir(exist_ok=True)
        path = state_dir / path
    return path


def save_game(state: GameState, filepath: str | None = None) -> Path:
    """Save game state to its storage slot.

    Args:
        state: Game state to save
        filepath: Slot file (relative names go to the state/ directory)

    Returns:
        Path written

    Example:
        save_game(state)  # Saves to state/nebula_clash_state.json
        save_game(state, "/absolute/path/game.json")
    """
    path = _resolve_path(filepath)
    with open(path, "w") as f:
        json.dump(serialize_game(state), f, indent=2)
    return path


def load_game(filepath: str | None = None) -> GameState | None:
    """Load game state from its storage slot.

    Args:
        filepath: Slot file (relative names are looked up in the state/ directory)

    Returns:
        Loaded GameState, or None if the slot is empty or holds an unusable snapshot
    """
    path = _resolve_path(filepath)
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = json.load(f)
        return deserialize_game(data)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Discarding saved game at {path}: {e}")
        path.unlink(missing_ok=True)
        return None


def delete_saved_game(filepath: str | None = None) -> None:
    """Empty the storage slot."""
    _resolve_path(filepath).unlink(missing_ok=True)


def serialize_game(state: GameState) -> dict[str, Any]:
    """Convert GameState to a JSON-compatible dictionary."""
    return {
        "version": SNAPSHOT_VERSION,
        "seed": state.seed,
        "phase": state.phase,
        "settings": {
            "board_size": state.settings.board_size,
            "difficulty": state.settings.difficulty,
            "initial_points": state.settings.initial_points,
        },
        "turn": state.turn,
        "turn_number": state.turn_number,
        "winner": state.winner,
        "message": state.message,
        "selected_component_kind": (
            state.selected_component_kind.value if state.selected_component_kind else None
        ),
        "selected_weapon_id": state.selected_weapon_id,
        "allocation_mode": state.allocation_mode,
        "selected_resource": list(state.selected_resource) if state.selected_resource else None,
        "debug": state.debug,
        "player": _serialize_player(state.player),
        "ai": _serialize_player(state.ai),
        "ai_memory": {side: _serialize_memory(m) for side, m in state.ai_memory.items()},
        "last_attack": state.last_attack,
        "rng_state": state.rng.get_state(),  # Save RNG state for determinism
    }


def deserialize_game(data: dict[str, Any]) -> GameState:
    """Reconstruct GameState from a dictionary.

    Raises:
        ValueError: If the snapshot is structurally implausible or from another version
    """
    if not isinstance(data, dict) or "phase" not in data or "settings" not in data:
        raise ValueError("snapshot has no phase or settings")
    if data.get("version") != SNAPSHOT_VERSION:
        raise ValueError(f"snapshot version {data.get('version')} != {SNAPSHOT_VERSION}")

    rng = GameRNG(data["seed"])
    if "rng_state" in data:
        # Convert RNG state from JSON (lists) back to tuples
        rng_state = data["rng_state"]
        if isinstance(rng_state, list):
            rng_state = (rng_state[0], tuple(rng_state[1]), rng_state[2])
        rng.set_state(rng_state)

    kind = data.get("selected_component_kind")
    resource = data.get("selected_resource")
    memory = _expect(data.get("ai_memory", {}), dict, "ai_memory")

    return GameState(
        seed=data["seed"],
        phase=data["phase"],
        settings=GameSettings(**_expect(data["settings"], dict, "settings")),
        player=_deserialize_player(data["player"]),
        ai=_deserialize_player(data["ai"]),
        turn=data["turn"],
        turn_number=data["turn_number"],
        winner=data.get("winner"),
        message=data.get("message", ""),
        selected_component_kind=ComponentKind(kind) if kind else None,
        selected_weapon_id=data.get("selected_weapon_id"),
        allocation_mode=data.get("allocation_mode"),
        selected_resource=tuple(resource) if resource else None,
        debug=data.get("debug", False),
        ai_memory={
            "human": _deserialize_memory(memory.get("human", {})),
            "ai": _deserialize_memory(memory.get("ai", {})),
        },
        last_attack=data.get("last_attack"),
        rng=rng,
    )


def _serialize_player(player: PlayerState) -> dict[str, Any]:
    """Convert PlayerState to dictionary (ships are derived and not stored)."""
    return {
        "budget": player.budget,
        "points": player.points,
        "total_points": player.total_points,
        "board": [[_serialize_cell(cell) for cell in row] for row in player.grid.cells],
    }


def _deserialize_player(data: dict[str, Any]) -> PlayerState:
    """Reconstruct PlayerState from dictionary and re-derive its ships."""
    from ..engine.ship_identifier import identify_ships

    data = _expect(data, dict, "player")
    board = _expect(data["board"], list, "board")
    cells = [[_deserialize_cell(c) for c in _expect(row, list, "board row")] for row in board]
    grid = Grid(size=len(board), cells=cells)
    player = PlayerState(
        grid=grid,
        budget=data["budget"],
        points=data["points"],
        total_points=data.get("total_points", 0),
    )
    player.ships = identify_ships(grid)
    return player


def _serialize_cell(cell: Cell) -> dict[str, Any]:
    """Convert Cell to dictionary."""
    component = cell.component
    return {
        "is_hit": cell.is_hit,
        "is_miss": cell.is_miss,
        "repair_turns_left": cell.repair_turns_left,
        "component": (
            {
                "id": component.id,
                "kind": component.kind.value,
                "ammo_charge": component.ammo_charge,
                "used_this_turn": component.used_this_turn,
                "powered_component_id": component.powered_component_id,
            }
            if component
            else None
        ),
    }


def _deserialize_cell(data: dict[str, Any]) -> Cell:
    """Reconstruct Cell from dictionary."""
    data = _expect(data, dict, "cell")
    component = data.get("component")
    if component is not None:
        _expect(component, dict, "component")
    return Cell(
        component=Component(**component) if component else None,
        is_hit=data.get("is_hit", False),
        is_miss=data.get("is_miss", False),
        repair_turns_left=data.get("repair_turns_left", 0),
    )


def _serialize_memory(memory: AIMemory) -> dict[str, Any]:
    return {
        "last_hit": list(memory.last_hit) if memory.last_hit else None,
        "hunt_direction": memory.hunt_direction,
        "search_and_destroy": memory.search_and_destroy,
        "potential_targets": [list(c) for c in memory.potential_targets],
    }


def _deserialize_memory(data: dict[str, Any]) -> AIMemory:
    data = _expect(data, dict, "ai memory entry")
    last_hit = data.get("last_hit")
    return AIMemory(
        last_hit=tuple(last_hit) if last_hit else None,
        hunt_direction=data.get("hunt_direction"),
        search_and_destroy=data.get("search_and_destroy", False),
        potential_targets=[tuple(c) for c in data.get("potential_targets", [])],
    )


def to_view(state: GameState, debug: bool | None = None) -> dict[str, Any]:
    """Build the read-only snapshot shown to the human player.

    The enemy board only reveals hits, misses and repairs; its components and
    ship layout stay hidden unless the debug view is on.

    Args:
        state: Game state to present
        debug: Override for ``state.debug``

    Returns:
        JSON-compatible dictionary
    """
    reveal = state.debug if debug is None else debug
    data = serialize_game(state)
    for key in ("version", "rng_state", "ai_memory"):
        data.pop(key)

    data["player"]["ships"] = [_serialize_ship(ship) for ship in state.player.ships]
    if reveal:
        data["ai"]["ships"] = [_serialize_ship(ship) for ship in state.ai.ships]
        data["ai_memory"] = {side: _serialize_memory(m) for side, m in state.ai_memory.items()}
    else:
        for row in data["ai"]["board"]:
            for cell in row:
                cell["component"] = None
        data["ai"]["ships"] = None
        data["ai"]["ships_sunk"] = sum(1 for ship in state.ai.ships if ship.is_sunk)
    return data


def _serialize_ship(ship) -> dict[str, Any]:
    return {
        "id": ship.id,
        "cells": [list(c) for c in ship.cells],
        "is_sunk": ship.is_sunk,
        "weapons": [c.id for c in ship.weapons],
        "energy_producers": [c.id for c in ship.energy_producers],
        "ammo_producers": [c.id for c in ship.ammo_producers],
        "medical_bays": [c.id for c in ship.medical_bays],
    }
