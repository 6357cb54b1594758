"""Ship identification by flood fill.

Ships are never stored: they are derived from the grid whenever needed so
that hits, repairs and power changes can never leave a stale ship behind.
"""

from collections import deque

from ..models.cell import Grid
from ..models.ship import Ship
from ..utils.coordinates import Coord, orthogonal_neighbors


def identify_ships(grid: Grid) -> list[Ship]:
    """Partition the occupied cells of a grid into connected ships.

    Algorithm:
    1. Scan cells in row-major order
    2. For each unvisited occupied cell, breadth-first flood fill over
       4-neighbours, collecting cells into one ship in visiting order
    3. File every non-hit member into its capability bucket
    4. Mark the ship sunk iff every member cell is hit

    Args:
        grid: Board to scan

    Returns:
        Ships with sequential ids starting at 1, in discovery order
    """
    ships: list[Ship] = []
    visited: set[Coord] = set()

    for start, _ in grid.occupied():
        if start in visited:
            continue

        ship = Ship(id=len(ships) + 1)
        queue = deque([start])
        visited.add(start)

        while queue:
            current = queue.popleft()
            ship.cells.append(current)
            for neighbor in orthogonal_neighbors(current, grid.size):
                if neighbor not in visited and grid.cell(neighbor).is_occupied:
                    visited.add(neighbor)
                    queue.append(neighbor)

        _classify_members(grid, ship)
        ship.is_sunk = all(grid.cell(coord).is_hit for coord in ship.cells)
        ships.append(ship)

    return ships


def _classify_members(grid: Grid, ship: Ship) -> None:
    """Fill the capability lists of a ship from its non-hit members."""
    for coord in ship.cells:
        cell = grid.cell(coord)
        if cell.is_hit:
            continue
        component = cell.component
        if component.is_weapon:
            ship.weapons.append(component)
        elif component.is_energy_producer:
            ship.energy_producers.append(component)
        elif component.is_ammo_producer:
            ship.ammo_producers.append(component)
        elif component.is_medical_bay:
            ship.medical_bays.append(component)


def ship_at(ships: list[Ship], coord: Coord) -> Ship | None:
    """Find the ship that contains a cell, or None for empty water."""
    for ship in ships:
        if coord in ship:
            return ship
    return None
