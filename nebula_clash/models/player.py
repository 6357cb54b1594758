"""Player state data model."""

from dataclasses import dataclass, field

from .cell import Grid
from .ship import Ship


@dataclass
class PlayerState:
    """One side's board, placement budget and derived ships.

    ``points`` is the budget still available for placement; ``total_points``
    is what has been spent, which doubles as the fleet value used to break a
    simultaneous-destruction tie.
    """

    grid: Grid
    budget: int  # Starting allowance for this board size
    points: int  # Remaining budget
    total_points: int = 0  # Budget spent on placed components
    ships: list[Ship] = field(default_factory=list)  # Derived, refreshed after every mutation

    def __post_init__(self):
        """Validate player data after initialization."""
        if self.points < 0:
            raise ValueError(f"Invalid points: {self.points} (must be >= 0)")
        if self.points > self.budget:
            raise ValueError(f"Invalid points: {self.points} (exceeds budget {self.budget})")
        if self.total_points < 0:
            raise ValueError(f"Invalid total_points: {self.total_points} (must be >= 0)")

    @property
    def fleet_destroyed(self) -> bool:
        """A fleet is destroyed once it has ships and every one of them is sunk."""
        return bool(self.ships) and all(ship.is_sunk for ship in self.ships)
