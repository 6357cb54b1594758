"""Power distribution between ship components.

Energy producers each power at most one consumer through their
``powered_component_id`` link. A consumer's energy count is derived by
scanning for live producers linked to it; nothing is cached on the consumer.
Ammo producers, once energized, push charge into weapons of the same ship.

All allocation rules (same ship, right kinds, single use per turn) live here
so that human commands and the opponent controller are validated the same way.
"""

import logging

from ..models.cell import Grid
from ..models.component import Component
from ..models.player import PlayerState
from ..utils.coordinates import Coord, coord_label
from .errors import AlreadyFull, InvalidSelection, InvalidTarget, NotEnergized
from .ship_identifier import identify_ships, ship_at

logger = logging.getLogger(__name__)


def energy_sources(grid: Grid, component_id: str) -> list[Component]:
    """Live energy producers currently powering a component.

    Producers sitting on hit cells are ignored: they stay linked but deliver
    nothing until repaired.
    """
    return [
        cell.component
        for _, cell in grid.occupied()
        if cell.component.is_energy_producer
        and cell.component.powered_component_id == component_id
        and not cell.is_hit
    ]


def energy_source_count(grid: Grid, component_id: str) -> int:
    """Count the live energy producers powering a component."""
    return len(energy_sources(grid, component_id))


def is_energized(grid: Grid, component: Component) -> bool:
    """True when a consumer's energy count meets its energy cost."""
    cost = component.spec.energy_cost
    return cost > 0 and energy_source_count(grid, component.id) >= cost


def _component_at(grid: Grid, coord: Coord, role: str) -> Component:
    """Fetch the component at a cell or reject the cell as a target."""
    if not grid.in_bounds(coord):
        raise InvalidTarget(f"{role.capitalize()} cell {coord} is off the board")
    component = grid.cell(coord).component
    if component is None:
        raise InvalidTarget(f"No component at {coord_label(coord)} to use as {role}")
    return component


def _require_same_ship(grid: Grid, source: Coord, target: Coord) -> None:
    ships = identify_ships(grid)
    source_ship = ship_at(ships, source)
    if source_ship is None or target not in source_ship:
        raise InvalidTarget(
            f"{coord_label(source)} and {coord_label(target)} are not on the same ship"
        )


def allocate_energy(player: PlayerState, producer_cell: Coord, consumer_cell: Coord) -> Component:
    """Link an energy producer to a consumer on the same ship.

    Any previous link from the producer is replaced, so the old consumer loses
    one energy source and the new one gains one.

    Args:
        player: Owner of both components
        producer_cell: Cell of the energy producer
        consumer_cell: Cell of the component to power

    Returns:
        The consumer now receiving power

    Raises:
        InvalidTarget: If the pair is on different ships or the kinds are wrong
        InvalidSelection: If the producer is destroyed or already used this turn
    """
    grid = player.grid
    producer = _component_at(grid, producer_cell, "producer")
    consumer = _component_at(grid, consumer_cell, "consumer")

    if not producer.is_energy_producer:
        raise InvalidTarget(
            f"{producer.kind.value} at {coord_label(producer_cell)} produces no energy"
        )
    if grid.cell(producer_cell).is_hit:
        raise InvalidSelection(
            f"Energy producer at {coord_label(producer_cell)} is destroyed", title="Energy Offline"
        )
    if producer.used_this_turn:
        raise InvalidSelection(
            "This energy cell has already been used this turn.", title="Energy Used"
        )
    if not consumer.is_energy_consumer:
        raise InvalidTarget(f"A {consumer.kind.value} cannot be powered")
    _require_same_ship(grid, producer_cell, consumer_cell)

    previous = producer.powered_component_id
    producer.powered_component_id = consumer.id
    if previous and previous != consumer.id:
        logger.debug(f"Producer {producer.id} re-linked from {previous} to {consumer.id}")
    else:
        logger.debug(f"Producer {producer.id} powering {consumer.id}")
    return consumer


def allocate_ammo(
    player: PlayerState, producer_cell: Coord, weapon_cell: Coord, amount: int = 1
) -> int:
    """Charge a weapon from an energized ammo producer on the same ship.

    The ammo producer and every energy producer feeding it are marked used for
    the rest of the turn.

    Args:
        player: Owner of both components
        producer_cell: Cell of the ammo producer
        weapon_cell: Cell of the weapon to charge
        amount: Charge to add (clamped to the weapon's ammo cost)

    Returns:
        The weapon's new ammo charge

    Raises:
        InvalidTarget: If the pair is on different ships or the kinds are wrong
        InvalidSelection: If the ammo producer is destroyed or already used
        NotEnergized: If the ammo producer has no power
        AlreadyFull: If the weapon is already fully charged
    """
    if amount <= 0:
        raise ValueError(f"Invalid amount: {amount} (must be > 0)")

    grid = player.grid
    producer = _component_at(grid, producer_cell, "producer")
    weapon = _component_at(grid, weapon_cell, "weapon")

    if not producer.is_ammo_producer:
        raise InvalidTarget(
            f"{producer.kind.value} at {coord_label(producer_cell)} produces no ammo"
        )
    if not weapon.is_weapon:
        raise InvalidTarget(f"A {weapon.kind.value} cannot hold ammo")
    if grid.cell(producer_cell).is_hit:
        raise InvalidSelection(
            f"Ammo producer at {coord_label(producer_cell)} is destroyed", title="Ammo Offline"
        )
    if producer.used_this_turn:
        raise InvalidSelection("This ammo cell has already been used this turn.", title="Ammo Used")
    _require_same_ship(grid, producer_cell, weapon_cell)

    sources = energy_sources(grid, producer.id)
    if len(sources) < producer.spec.energy_cost:
        raise NotEnergized("This ammo producer has no power.")
    if weapon.ammo_needed == 0:
        raise AlreadyFull(f"{weapon.kind.value} at {coord_label(weapon_cell)} is already charged")

    weapon.ammo_charge += min(amount, weapon.ammo_needed)
    producer.used_this_turn = True
    for source in sources:
        source.used_this_turn = True

    logger.debug(f"Charged {weapon.id} to {weapon.ammo_charge}/{weapon.spec.ammo_cost}")
    return weapon.ammo_charge


def check_resource_selectable(player: PlayerState, cell: Coord) -> str:
    """Validate a producer cell as the start of an allocation.

    Returns:
        The allocation mode it opens: "energy" or "ammo"

    Raises:
        InvalidSelection: If the cell holds no usable producer
        NotEnergized: If it is an ammo producer without power
    """
    grid = player.grid
    if not grid.in_bounds(cell) or grid.cell(cell).component is None:
        raise InvalidSelection("Select one of your energy or ammo cells.")
    component = grid.cell(cell).component
    if grid.cell(cell).is_hit:
        raise InvalidSelection(f"The {component.kind.value} at {coord_label(cell)} is destroyed")

    if component.is_energy_producer:
        if component.used_this_turn:
            raise InvalidSelection(
                "This energy cell has already been used this turn.", title="Energy Used"
            )
        return "energy"
    if component.is_ammo_producer:
        if component.used_this_turn:
            raise InvalidSelection(
                "This ammo cell has already been used this turn.", title="Ammo Used"
            )
        if not is_energized(grid, component):
            raise NotEnergized("This ammo producer has no power.")
        return "ammo"
    raise InvalidSelection(f"A {component.kind.value} is not a resource")


def reset_turn_usage(grid: Grid) -> None:
    """Start a fresh turn for a board: producers unused, all power links dropped."""
    for _, cell in grid.occupied():
        component = cell.component
        if component.is_energy_producer:
            component.used_this_turn = False
            component.powered_component_id = None
        elif component.is_ammo_producer:
            component.used_this_turn = False
