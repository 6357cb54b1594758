"""Grid and cell data models."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from ..utils.coordinates import Coord, in_bounds
from .component import Component


@dataclass
class Cell:
    """One grid position, optionally hosting a ship component."""

    component: Component | None = None
    is_hit: bool = False
    is_miss: bool = False
    repair_turns_left: int = 0

    def __post_init__(self):
        """Validate cell data after initialization."""
        if self.is_hit and self.is_miss:
            raise ValueError("Cell cannot be both hit and missed")
        if self.repair_turns_left < 0:
            raise ValueError(
                f"Invalid repair_turns_left: {self.repair_turns_left} (must be >= 0)"
            )

    @property
    def is_occupied(self) -> bool:
        return self.component is not None

    @property
    def is_resolved(self) -> bool:
        """True once an attack has marked this cell as hit or miss."""
        return self.is_hit or self.is_miss


@dataclass
class Grid:
    """Fixed-size square matrix of cells.

    The grid is the single source of truth for a player's fleet. Ships are
    derived from it on demand and never stored alongside it.
    """

    size: int
    cells: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self):
        """Fill an empty grid and validate its shape."""
        if self.size <= 0:
            raise ValueError(f"Invalid size: {self.size} (must be > 0)")
        if not self.cells:
            self.cells = [[Cell() for _ in range(self.size)] for _ in range(self.size)]
        if len(self.cells) != self.size or any(len(row) != self.size for row in self.cells):
            raise ValueError(f"Grid cells must form a {self.size}x{self.size} matrix")

    def cell(self, coord: Coord) -> Cell:
        row, col = coord
        return self.cells[row][col]

    def in_bounds(self, coord: Coord) -> bool:
        return in_bounds(coord, self.size)

    def coords(self) -> Iterator[Coord]:
        """Iterate over every coordinate in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def occupied(self) -> Iterator[tuple[Coord, Cell]]:
        """Iterate over (coord, cell) pairs that hold a component, row-major."""
        for coord in self.coords():
            cell = self.cell(coord)
            if cell.component is not None:
                yield coord, cell

    def find_component(self, component_id: str) -> tuple[Coord, Cell] | None:
        """Locate a component by id.

        Returns:
            (coord, cell) of the component, or None if it is not on this grid
        """
        for coord, cell in self.occupied():
            if cell.component.id == component_id:
                return coord, cell
        return None

    def untried(self) -> list[Coord]:
        """Coordinates that have never been fired upon."""
        return [coord for coord in self.coords() if not self.cell(coord).is_resolved]
