"""Tests for power distribution (energy links and ammo charging)."""

import pytest

from nebula_clash.engine.errors import AlreadyFull, InvalidSelection, InvalidTarget, NotEnergized
from nebula_clash.engine.power import (
    allocate_ammo,
    allocate_energy,
    check_resource_selectable,
    energy_source_count,
    is_energized,
    reset_turn_usage,
)
from nebula_clash.engine.ship_identifier import identify_ships
from nebula_clash.interface.renderer import COMPONENT_SYMBOLS
from nebula_clash.models.cell import Grid
from nebula_clash.models.component import COMPONENT_SPECS, Component
from nebula_clash.models.player import PlayerState

KINDS_BY_SYMBOL = {symbol: kind for kind, symbol in COMPONENT_SYMBOLS.items()}


def build_player(rows, budget=100):
    """Build a player from one string per row ('.' is empty water)."""
    grid = Grid(size=len(rows))
    spent = 0
    for r, line in enumerate(rows):
        for c, symbol in enumerate(line):
            if symbol in KINDS_BY_SYMBOL:
                kind = KINDS_BY_SYMBOL[symbol]
                grid.cells[r][c].component = Component(id=f"{r}-{c}-{kind.value}", kind=kind)
                spent += COMPONENT_SPECS[kind].points
    player = PlayerState(grid=grid, budget=budget, points=budget - spent, total_points=spent)
    player.ships = identify_ships(grid)
    return player


def component(player, coord):
    return player.grid.cell(coord).component


class TestAllocateEnergy:
    def test_link_powers_consumer(self):
        player = build_player(["es...", ".....", ".....", ".....", "....."])
        consumer = allocate_energy(player, (0, 0), (0, 1))

        assert consumer.id == "0-1-weapon-small"
        assert component(player, (0, 0)).powered_component_id == "0-1-weapon-small"
        assert energy_source_count(player.grid, "0-1-weapon-small") == 1
        assert is_energized(player.grid, consumer)

    def test_relink_moves_one_source(self):
        player = build_player(["ees+.", ".....", ".....", ".....", "....."])
        weapon_id = "0-2-weapon-small"
        bay_id = "0-3-medical-bay"
        allocate_energy(player, (0, 0), (0, 2))
        allocate_energy(player, (0, 1), (0, 2))
        assert energy_source_count(player.grid, weapon_id) == 2

        allocate_energy(player, (0, 1), (0, 3))

        assert energy_source_count(player.grid, weapon_id) == 1
        assert energy_source_count(player.grid, bay_id) == 1
        assert component(player, (0, 1)).powered_component_id == bay_id

    def test_different_ships_rejected(self):
        player = build_player(["e.s..", ".....", ".....", ".....", "....."])
        with pytest.raises(InvalidTarget, match="same ship"):
            allocate_energy(player, (0, 0), (0, 2))
        assert component(player, (0, 0)).powered_component_id is None

    def test_structure_cannot_be_powered(self):
        player = build_player(["e#...", ".....", ".....", ".....", "....."])
        with pytest.raises(InvalidTarget):
            allocate_energy(player, (0, 0), (0, 1))

    def test_producer_must_produce_energy(self):
        player = build_player(["as...", ".....", ".....", ".....", "....."])
        with pytest.raises(InvalidTarget, match="no energy"):
            allocate_energy(player, (0, 0), (0, 1))

    def test_used_producer_rejected(self):
        player = build_player(["es...", ".....", ".....", ".....", "....."])
        component(player, (0, 0)).used_this_turn = True
        with pytest.raises(InvalidSelection) as exc_info:
            allocate_energy(player, (0, 0), (0, 1))
        assert exc_info.value.title == "Energy Used"

    def test_destroyed_producer_rejected(self):
        player = build_player(["es...", ".....", ".....", ".....", "....."])
        player.grid.cell((0, 0)).is_hit = True
        with pytest.raises(InvalidSelection):
            allocate_energy(player, (0, 0), (0, 1))

    def test_hit_producer_stops_counting(self):
        player = build_player(["es...", ".....", ".....", ".....", "....."])
        allocate_energy(player, (0, 0), (0, 1))
        player.grid.cell((0, 0)).is_hit = True
        assert energy_source_count(player.grid, "0-1-weapon-small") == 0


class TestAllocateAmmo:
    def test_requires_power(self):
        player = build_player(["as...", ".....", ".....", ".....", "....."])
        with pytest.raises(NotEnergized):
            allocate_ammo(player, (0, 0), (0, 1))
        assert component(player, (0, 1)).ammo_charge == 0

    def test_charge_marks_producer_and_sources_used(self):
        player = build_player(["eam..", ".....", ".....", ".....", "....."])
        allocate_energy(player, (0, 0), (0, 1))

        charge = allocate_ammo(player, (0, 1), (0, 2))

        assert charge == 1
        assert component(player, (0, 2)).ammo_charge == 1
        assert component(player, (0, 1)).used_this_turn
        assert component(player, (0, 0)).used_this_turn

    def test_producer_single_use_per_turn(self):
        player = build_player(["eam..", ".....", ".....", ".....", "....."])
        allocate_energy(player, (0, 0), (0, 1))
        allocate_ammo(player, (0, 1), (0, 2))
        with pytest.raises(InvalidSelection) as exc_info:
            allocate_ammo(player, (0, 1), (0, 2))
        assert exc_info.value.title == "Ammo Used"

    def test_full_weapon_rejected(self):
        player = build_player(["eas..", ".....", ".....", ".....", "....."])
        component(player, (0, 2)).ammo_charge = 1
        allocate_energy(player, (0, 0), (0, 1))
        with pytest.raises(AlreadyFull):
            allocate_ammo(player, (0, 1), (0, 2))
        assert not component(player, (0, 1)).used_this_turn

    def test_amount_clamped_to_ammo_cost(self):
        player = build_player(["eam..", ".....", ".....", ".....", "....."])
        allocate_energy(player, (0, 0), (0, 1))
        assert allocate_ammo(player, (0, 1), (0, 2), amount=10) == 3

    def test_target_must_be_weapon(self):
        player = build_player(["ea+..", ".....", ".....", ".....", "....."])
        allocate_energy(player, (0, 0), (0, 1))
        with pytest.raises(InvalidTarget):
            allocate_ammo(player, (0, 1), (0, 2))


class TestResourceSelection:
    def test_modes(self):
        player = build_player(["eas..", ".....", ".....", ".....", "....."])
        assert check_resource_selectable(player, (0, 0)) == "energy"

        with pytest.raises(NotEnergized):
            check_resource_selectable(player, (0, 1))
        allocate_energy(player, (0, 0), (0, 1))
        assert check_resource_selectable(player, (0, 1)) == "ammo"

    def test_non_producer_rejected(self):
        player = build_player(["eas..", ".....", ".....", ".....", "....."])
        with pytest.raises(InvalidSelection):
            check_resource_selectable(player, (0, 2))
        with pytest.raises(InvalidSelection):
            check_resource_selectable(player, (4, 4))


def test_reset_turn_usage_clears_flags_and_links():
    player = build_player(["eam..", ".....", ".....", ".....", "....."])
    allocate_energy(player, (0, 0), (0, 1))
    allocate_ammo(player, (0, 1), (0, 2))

    reset_turn_usage(player.grid)

    assert component(player, (0, 0)).powered_component_id is None
    assert not component(player, (0, 0)).used_this_turn
    assert not component(player, (0, 1)).used_this_turn
    assert component(player, (0, 2)).ammo_charge == 1  # Charge persists
