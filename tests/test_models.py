"""Tests for Nebula Clash data models."""

import pytest

from nebula_clash.models.cell import Cell, Grid
from nebula_clash.models.component import COMPONENT_SPECS, Component, ComponentKind
from nebula_clash.models.game import GameSettings, GameState
from nebula_clash.models.player import PlayerState
from nebula_clash.utils.coordinates import coord_label, direction_between, orthogonal_neighbors


class TestComponent:
    def test_kind_coerced_from_string(self):
        component = Component(id="0-0-weapon-large", kind="weapon-large")
        assert component.kind is ComponentKind.WEAPON_LARGE
        assert component.is_weapon
        assert component.ammo_needed == 5

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="id"):
            Component(id="", kind=ComponentKind.STRUCTURE)

    def test_only_weapons_hold_ammo(self):
        with pytest.raises(ValueError, match="ammo"):
            Component(id="x", kind=ComponentKind.STRUCTURE, ammo_charge=1)

    def test_only_energy_producers_power_components(self):
        with pytest.raises(ValueError, match="power"):
            Component(id="x", kind=ComponentKind.AMMO_PRODUCER, powered_component_id="y")

    def test_energy_consumers(self):
        assert not Component(id="a", kind=ComponentKind.STRUCTURE).is_energy_consumer
        assert not Component(id="b", kind=ComponentKind.ENERGY_PRODUCER).is_energy_consumer
        assert Component(id="c", kind=ComponentKind.MEDICAL_BAY).is_energy_consumer
        assert Component(id="d", kind=ComponentKind.AMMO_PRODUCER).is_energy_consumer
        assert Component(id="e", kind=ComponentKind.WEAPON_SMALL).is_energy_consumer

    def test_catalogue(self):
        large = COMPONENT_SPECS[ComponentKind.WEAPON_LARGE]
        assert (large.points, large.area, large.energy_cost, large.ammo_cost) == (12, 5, 3, 5)
        assert COMPONENT_SPECS[ComponentKind.STRUCTURE].points == 1


class TestCellAndGrid:
    def test_cell_cannot_be_hit_and_missed(self):
        with pytest.raises(ValueError, match="both hit and missed"):
            Cell(is_hit=True, is_miss=True)

    def test_negative_repair_rejected(self):
        with pytest.raises(ValueError):
            Cell(repair_turns_left=-1)

    def test_grid_fills_empty_cells(self):
        grid = Grid(size=5)
        assert len(grid.cells) == 5
        assert all(len(row) == 5 for row in grid.cells)
        assert grid.cell((4, 4)).component is None
        assert len(grid.untried()) == 25

    def test_grid_shape_validated(self):
        with pytest.raises(ValueError):
            Grid(size=2, cells=[[Cell(), Cell()]])

    def test_coords_row_major(self):
        assert list(Grid(size=2).coords()) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_find_component(self):
        grid = Grid(size=5)
        grid.cell((2, 3)).component = Component(id="2-3-structure", kind="structure")
        coord, cell = grid.find_component("2-3-structure")
        assert coord == (2, 3)
        assert grid.find_component("missing") is None


class TestSettingsAndState:
    @pytest.mark.parametrize("size,points", [(5, 20), (10, 50), (15, 100)])
    def test_budget_derived_from_board_size(self, size, points):
        assert GameSettings(board_size=size).initial_points == points

    def test_invalid_board_size(self):
        with pytest.raises(ValueError, match="board_size"):
            GameSettings(board_size=7)

    def test_invalid_difficulty(self):
        with pytest.raises(ValueError, match="difficulty"):
            GameSettings(difficulty="nightmare")

    def test_points_cannot_exceed_budget(self):
        with pytest.raises(ValueError):
            PlayerState(grid=Grid(size=5), budget=20, points=21)

    def test_invalid_phase(self):
        player = PlayerState(grid=Grid(size=5), budget=20, points=20)
        with pytest.raises(ValueError, match="phase"):
            GameState(seed=1, player=player, ai=player, phase="paused")

    def test_sides(self):
        state = GameState(
            seed=1,
            player=PlayerState(grid=Grid(size=5), budget=20, points=20),
            ai=PlayerState(grid=Grid(size=5), budget=20, points=10),
        )
        assert state.player_for("ai") is state.ai
        assert state.opponent_for("ai") is state.player
        assert GameState.other_side("human") == "ai"
        assert state.rng is not None


def test_coordinate_helpers():
    assert coord_label((0, 4)) == "A5"
    assert coord_label((9, 9)) == "J10"
    assert orthogonal_neighbors((0, 0), 5) == [(1, 0), (0, 1)]
    assert direction_between((4, 4), (4, 5)) == "right"
    assert direction_between((4, 4), (5, 5)) is None
