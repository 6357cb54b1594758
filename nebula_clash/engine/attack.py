"""Weapon firing and attack resolution.

An attack is a two-step protocol:
1. begin_attack validates the weapon and computes the footprint
2. resolve_attack settles it: marks hits and misses and drains the weapon

Interactive front ends may leave a delay between the two steps to play an
impact animation. Headless callers use fire(), which runs both back to back.
Only the settled state is authoritative.
"""

import logging
from dataclasses import dataclass, field

from ..models.cell import Grid
from ..models.component import Component
from ..utils.coordinates import Coord, coord_label
from .errors import InvalidSelection, InvalidTarget, WeaponNotEnergized, WeaponNotReady
from .power import energy_source_count, energy_sources

logger = logging.getLogger(__name__)


@dataclass
class PendingAttack:
    """An attack that has been aimed but not yet settled.

    Attributes:
        weapon_id: Firing weapon
        target: Aim point on the target board
        footprint: In-bounds cells covered by the blast
        impact_cells: Footprint cells that were unresolved when the attack began
    """

    weapon_id: str
    target: Coord
    footprint: list[Coord]
    impact_cells: list[Coord]


@dataclass
class AttackResult:
    """Record of a settled attack.

    Attributes:
        weapon_id: Weapon that fired
        target: Aim point
        footprint: In-bounds cells covered by the blast
        hits: Cells newly marked hit
        misses: Cells newly marked miss
    """

    weapon_id: str
    target: Coord
    footprint: list[Coord]
    hits: list[Coord] = field(default_factory=list)
    misses: list[Coord] = field(default_factory=list)

    @property
    def changed(self) -> list[Coord]:
        return self.hits + self.misses

    @property
    def any_hit(self) -> bool:
        return bool(self.hits)

    def to_dict(self) -> dict:
        """Summarize the attack for game state and UI consumption."""
        return {
            "weapon_id": self.weapon_id,
            "target": list(self.target),
            "cells": [list(c) for c in self.footprint],
            "hits": [list(c) for c in self.hits],
            "misses": [list(c) for c in self.misses],
            "result": "hit" if self.any_hit else "miss",
        }


def footprint(target: Coord, area: int, size: int) -> list[Coord]:
    """Square blast area centered on a target, clipped to the board.

    The square spans offsets -floor(area/2) .. ceil(area/2)-1 on both axes,
    so odd areas are centered exactly and even areas lean up and left.

    Args:
        target: Aim point
        area: Side length of the square
        size: Board size

    Returns:
        In-bounds cells in row-major order
    """
    start = -(area // 2)
    end = area - area // 2
    row, col = target
    cells = []
    for d_row in range(start, end):
        for d_col in range(start, end):
            r, c = row + d_row, col + d_col
            if 0 <= r < size and 0 <= c < size:
                cells.append((r, c))
    return cells


def can_fire(grid: Grid, weapon: Component) -> bool:
    """Check firing prerequisites: intact, energized and fully charged."""
    located = grid.find_component(weapon.id)
    if located is None or located[1].is_hit or not weapon.is_weapon:
        return False
    spec = weapon.spec
    return (
        energy_source_count(grid, weapon.id) >= spec.energy_cost
        and weapon.ammo_charge >= spec.ammo_cost
    )


def ready_weapon(grid: Grid, weapon_id: str) -> Component:
    """Look up a weapon and confirm it can fire.

    Raises:
        InvalidSelection: If there is no such weapon on the board
        WeaponNotReady: If it is destroyed or not fully charged
        WeaponNotEnergized: If it lacks energy sources
    """
    located = grid.find_component(weapon_id)
    if located is None or not located[1].component.is_weapon:
        raise InvalidSelection(f"No weapon with id {weapon_id}")
    coord, cell = located
    weapon = cell.component
    if cell.is_hit:
        raise WeaponNotReady(f"The weapon at {coord_label(coord)} is destroyed.")
    if energy_source_count(grid, weapon.id) < weapon.spec.energy_cost:
        raise WeaponNotEnergized("This weapon has no power.")
    if weapon.ammo_charge < weapon.spec.ammo_cost:
        raise WeaponNotReady("This weapon is not fully charged.")
    return weapon


def begin_attack(
    attacker_grid: Grid, weapon_id: str, target_grid: Grid, target: Coord
) -> PendingAttack:
    """Validate a shot and compute what it will touch.

    Raises:
        InvalidTarget: If the target is off the board or has already been fired upon
        WeaponNotReady, WeaponNotEnergized, InvalidSelection: See ready_weapon
    """
    weapon = ready_weapon(attacker_grid, weapon_id)
    if not target_grid.in_bounds(target):
        raise InvalidTarget(f"Target {target} is off the board")
    if target_grid.cell(target).is_resolved:
        raise InvalidTarget(f"{coord_label(target)} has already been fired upon.")

    cells = footprint(target, weapon.spec.area, target_grid.size)
    impact_cells = [c for c in cells if not target_grid.cell(c).is_resolved]
    return PendingAttack(
        weapon_id=weapon_id, target=target, footprint=cells, impact_cells=impact_cells
    )


def resolve_attack(attacker_grid: Grid, target_grid: Grid, pending: PendingAttack) -> AttackResult:
    """Settle a pending attack.

    Cells resolved since the attack began (or before it) are left untouched.
    The weapon's charge is emptied and each of its energy sources is marked
    used for the rest of the turn.

    Args:
        attacker_grid: Board of the firing side
        target_grid: Board under fire
        pending: Attack returned by begin_attack

    Returns:
        AttackResult listing the cells that changed
    """
    result = AttackResult(
        weapon_id=pending.weapon_id, target=pending.target, footprint=list(pending.footprint)
    )
    for coord in pending.impact_cells:
        cell = target_grid.cell(coord)
        if cell.is_resolved:
            continue
        if cell.is_occupied:
            cell.is_hit = True
            result.hits.append(coord)
        else:
            cell.is_miss = True
            result.misses.append(coord)

    located = attacker_grid.find_component(pending.weapon_id)
    if located is not None:
        weapon = located[1].component
        for source in energy_sources(attacker_grid, weapon.id):
            source.used_this_turn = True
        weapon.ammo_charge = 0

    logger.info(
        f"Weapon {pending.weapon_id} fired at {coord_label(pending.target)}: "
        f"{len(result.hits)} hit(s), {len(result.misses)} miss(es)"
    )
    return result


def fire(attacker_grid: Grid, weapon_id: str, target_grid: Grid, target: Coord) -> AttackResult:
    """Aim and settle an attack in one step."""
    pending = begin_attack(attacker_grid, weapon_id, target_grid, target)
    return resolve_attack(attacker_grid, target_grid, pending)
