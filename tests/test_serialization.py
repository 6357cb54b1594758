"""Tests for game state snapshots."""

import json

from nebula_clash.engine.game_engine import GameEngine
from nebula_clash.engine.placement import new_game
from nebula_clash.models.command import AllocateEnergy, FinishPlacing, PlaceComponent, StartGame
from nebula_clash.models.component import ComponentKind
from nebula_clash.models.game import GameSettings
from nebula_clash.utils.serialization import (
    delete_saved_game,
    deserialize_game,
    load_game,
    save_game,
    serialize_game,
    to_view,
)


def create_game_in_play(seed=42):
    engine = GameEngine()
    state = new_game(seed=seed)
    for command in (
        StartGame(GameSettings(board_size=5, difficulty="hard")),
        PlaceComponent((0, 0), ComponentKind.ENERGY_PRODUCER),
        PlaceComponent((0, 1), ComponentKind.WEAPON_SMALL),
        PlaceComponent((1, 1), ComponentKind.STRUCTURE),
        FinishPlacing(),
    ):
        state = engine.apply(state, command).state
    return state


def test_save_and_load_game(tmp_path):
    state = create_game_in_play()
    state.player.grid.cell((1, 1)).is_hit = True
    state.player.grid.cell((1, 1)).repair_turns_left = 2
    memory = state.ai_memory["ai"]
    memory.last_hit = (1, 1)
    memory.search_and_destroy = True
    memory.potential_targets = [(0, 1), (2, 1)]
    filepath = tmp_path / "slot.json"

    save_game(state, str(filepath))
    loaded = load_game(str(filepath))

    assert loaded.seed == state.seed
    assert loaded.phase == "playing"
    assert loaded.settings.difficulty == "hard"
    assert loaded.settings.initial_points == 20
    assert loaded.player.total_points == state.player.total_points
    assert loaded.player.grid.cell((1, 1)).repair_turns_left == 2
    assert loaded.player.grid.cell((0, 1)).component.kind == ComponentKind.WEAPON_SMALL
    assert loaded.ai_memory["ai"].last_hit == (1, 1)
    assert loaded.ai_memory["ai"].potential_targets == [(0, 1), (2, 1)]
    assert len(loaded.ai.ships) == len(state.ai.ships)


def test_power_links_survive_round_trip(tmp_path):
    engine = GameEngine()
    state = engine.apply(create_game_in_play(), AllocateEnergy((0, 0), (0, 1))).state
    filepath = tmp_path / "slot.json"

    save_game(state, str(filepath))
    loaded = load_game(str(filepath))

    producer = loaded.player.grid.cell((0, 0)).component
    assert producer.powered_component_id == "0-1-weapon-small"


def test_rng_state_restored():
    state = create_game_in_play()
    restored = deserialize_game(json.loads(json.dumps(serialize_game(state))))
    assert [state.rng.randrange(1000) for _ in range(5)] == [
        restored.rng.randrange(1000) for _ in range(5)
    ]


def test_missing_slot_means_no_saved_game(tmp_path):
    assert load_game(str(tmp_path / "nothing.json")) is None


def test_version_mismatch_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    data = serialize_game(create_game_in_play())
    data["version"] = 0
    filepath.write_text(json.dumps(data))

    assert load_game(str(filepath)) is None
    assert not filepath.exists()


def test_snapshot_without_phase_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    data = serialize_game(create_game_in_play())
    del data["phase"]
    filepath.write_text(json.dumps(data))

    assert load_game(str(filepath)) is None


def test_corrupted_snapshot_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    filepath.write_text("{not json")
    assert load_game(str(filepath)) is None
    assert not filepath.exists()


def test_malformed_memory_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    data = serialize_game(new_game(seed=1))
    data["ai_memory"] = []
    filepath.write_text(json.dumps(data))

    assert load_game(str(filepath)) is None
    assert not filepath.exists()


def test_malformed_board_cell_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    data = serialize_game(new_game(seed=1))
    data["player"]["board"][0][0] = 1
    filepath.write_text(json.dumps(data))

    assert load_game(str(filepath)) is None
    assert not filepath.exists()


def test_malformed_component_discarded(tmp_path):
    filepath = tmp_path / "slot.json"
    data = serialize_game(create_game_in_play())
    data["player"]["board"][0][0]["component"] = "structure"
    filepath.write_text(json.dumps(data))

    assert load_game(str(filepath)) is None


def test_delete_saved_game(tmp_path):
    filepath = tmp_path / "slot.json"
    save_game(create_game_in_play(), str(filepath))
    delete_saved_game(str(filepath))
    assert not filepath.exists()
    delete_saved_game(str(filepath))  # Already empty


class TestView:
    def test_enemy_components_hidden(self):
        state = create_game_in_play()
        view = to_view(state)

        assert all(cell["component"] is None for row in view["ai"]["board"] for cell in row)
        assert view["ai"]["ships"] is None
        assert view["ai"]["ships_sunk"] == 0
        assert view["player"]["board"][0][1]["component"]["kind"] == "weapon-small"
        assert "rng_state" not in view
        assert "ai_memory" not in view

    def test_debug_reveals_enemy(self):
        state = create_game_in_play()
        state.debug = True
        view = to_view(state)

        occupied = [cell for row in view["ai"]["board"] for cell in row if cell["component"]]
        assert len(occupied) == len(list(state.ai.grid.occupied()))
        assert len(view["ai"]["ships"]) == len(state.ai.ships)

    def test_debug_override(self):
        state = create_game_in_play()
        assert to_view(state, debug=True)["ai"]["ships"] is not None

    def test_view_is_json_compatible(self):
        json.dumps(to_view(create_game_in_play(), debug=True))
