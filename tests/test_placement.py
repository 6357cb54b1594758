"""Tests for game creation and component placement."""

import pytest

from nebula_clash.engine.errors import InvalidPlacement, InvalidSelection
from nebula_clash.engine.placement import (
    check_affordable,
    create_player_state,
    new_game,
    place_component,
    place_randomly,
    start_placing,
)
from nebula_clash.models.component import ComponentKind
from nebula_clash.models.game import GameSettings
from nebula_clash.utils.rng import GameRNG


def test_new_game_in_setup():
    state = new_game(seed=42)
    assert state.phase == "setup"
    assert state.settings.board_size == 10
    assert state.player.grid.size == 10
    assert state.player.points == 50


def test_start_placing_applies_settings():
    state = new_game(seed=42)
    start_placing(state, GameSettings(board_size=15, difficulty="hard"))

    assert state.phase == "placing"
    assert state.turn == "human"
    assert state.turn_number == 0
    assert state.player.grid.size == 15
    assert state.ai.budget == 100
    assert state.selected_component_kind == ComponentKind.STRUCTURE


class TestPlaceComponent:
    def test_charges_budget(self):
        player = create_player_state(GameSettings(board_size=5))
        component = place_component(player, (2, 3), ComponentKind.WEAPON_MEDIUM)

        assert component.id == "2-3-weapon-medium"
        assert player.points == 13
        assert player.total_points == 7
        assert len(player.ships) == 1

    def test_occupied_cell_rejected(self):
        player = create_player_state(GameSettings(board_size=5))
        place_component(player, (0, 0), ComponentKind.STRUCTURE)
        with pytest.raises(InvalidPlacement) as exc_info:
            place_component(player, (0, 0), ComponentKind.STRUCTURE)
        assert exc_info.value.title == "Cell Occupied"
        assert player.points == 19

    def test_off_board_rejected(self):
        player = create_player_state(GameSettings(board_size=5))
        with pytest.raises(InvalidPlacement):
            place_component(player, (5, 0), ComponentKind.STRUCTURE)

    def test_budget_enforced(self):
        player = create_player_state(GameSettings(board_size=5))
        place_component(player, (0, 0), ComponentKind.WEAPON_LARGE)
        place_component(player, (0, 1), ComponentKind.WEAPON_MEDIUM)
        assert player.points == 1
        with pytest.raises(InvalidPlacement, match="points"):
            place_component(player, (0, 2), ComponentKind.ENERGY_PRODUCER)
        place_component(player, (0, 2), ComponentKind.STRUCTURE)
        assert player.points == 0

    def test_check_affordable(self):
        player = create_player_state(GameSettings(board_size=5))
        assert check_affordable(player, ComponentKind.WEAPON_LARGE) == 12
        player.points = 2
        with pytest.raises(InvalidSelection) as exc_info:
            check_affordable(player, ComponentKind.ENERGY_PRODUCER)
        assert exc_info.value.title == "Not Enough Points"


class TestPlaceRandomly:
    def test_stays_within_budget(self):
        player = create_player_state(GameSettings(board_size=10))
        placed = place_randomly(player, GameRNG(7))

        assert placed.points >= 0
        assert placed.points + placed.total_points == placed.budget
        assert placed.total_points > 0
        assert placed.ships
        assert sum(len(ship.cells) for ship in placed.ships) == len(list(placed.grid.occupied()))

    def test_deterministic_for_seed(self):
        settings = GameSettings(board_size=10)
        first = place_randomly(create_player_state(settings), GameRNG(11))
        second = place_randomly(create_player_state(settings), GameRNG(11))

        def layout(player):
            return [(coord, cell.component.kind) for coord, cell in player.grid.occupied()]

        assert layout(first) == layout(second)

    def test_replaces_existing_board(self):
        player = create_player_state(GameSettings(board_size=5))
        place_component(player, (0, 0), ComponentKind.WEAPON_LARGE)
        placed = place_randomly(player, GameRNG(3))
        assert placed is not player
        assert placed.points + placed.total_points == 20
