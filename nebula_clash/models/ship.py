"""Derived ship data model."""

from dataclasses import dataclass, field

from ..utils.coordinates import Coord
from .component import Component


@dataclass
class Ship:
    """A maximal 4-connected group of occupied cells.

    Ships are recomputed from the grid after every mutation. The id is only
    meaningful within the pass that produced it; anything that must survive a
    recomputation refers to components by component id instead.

    Capability lists only contain components on non-hit cells, while
    ``cells`` always contains every member so sunk detection sees the hits.
    """

    id: int
    cells: list[Coord] = field(default_factory=list)
    is_sunk: bool = False
    weapons: list[Component] = field(default_factory=list)
    energy_producers: list[Component] = field(default_factory=list)
    ammo_producers: list[Component] = field(default_factory=list)
    medical_bays: list[Component] = field(default_factory=list)

    def __contains__(self, coord: Coord) -> bool:
        return coord in self.cells
