"""Command and result data models.

Commands are the only way to change a game. Each one is a small dataclass
validated by the engine; the engine answers with a CommandResult holding
the new state and the UI-facing effects (toasts, attack cues).
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from ..utils.coordinates import Coord
from .component import ComponentKind

if TYPE_CHECKING:
    from .game import GameSettings, GameState


@dataclass
class StartGame:
    """Leave setup and start placing with the given settings."""

    settings: "GameSettings"


@dataclass
class SelectComponentKind:
    kind: ComponentKind


@dataclass
class PlaceComponent:
    cell: Coord
    kind: ComponentKind | None = None  # Defaults to the selected kind


@dataclass
class PlaceAllRandomly:
    pass


@dataclass
class FinishPlacing:
    pass


@dataclass
class SelectWeapon:
    cell: Coord  # Cell of the weapon on the acting side's board


@dataclass
class SelectResource:
    """Pick an energy or ammo producer and enter allocation mode."""

    cell: Coord


@dataclass
class AllocateEnergy:
    producer_cell: Coord
    consumer_cell: Coord


@dataclass
class AllocateAmmo:
    producer_cell: Coord
    weapon_cell: Coord
    amount: int = 1


@dataclass
class CancelAllocation:
    pass


@dataclass
class FireWeapon:
    """Fire the selected weapon at a cell on the opponent's board."""

    target_cell: Coord


@dataclass
class EndTurn:
    pass


@dataclass
class ResetGame:
    pass


@dataclass
class ToggleDebugView:
    pass


Command = Union[
    StartGame,
    SelectComponentKind,
    PlaceComponent,
    PlaceAllRandomly,
    FinishPlacing,
    SelectWeapon,
    SelectResource,
    AllocateEnergy,
    AllocateAmmo,
    CancelAllocation,
    FireWeapon,
    EndTurn,
    ResetGame,
    ToggleDebugView,
]


@dataclass
class Effect:
    """A UI-facing side effect of a command.

    Attributes:
        kind: "toast", "attack_impact" or "attack_settled"
        title: Short headline
        description: Optional detail line
        variant: "default" or "destructive"
        cells: Cells affected (attack cues only)
    """

    kind: str
    title: str
    description: str = ""
    variant: str = "default"
    cells: list[Coord] = field(default_factory=list)


@dataclass
class CommandResult:
    """Outcome of applying one command.

    On failure ``state`` is the unchanged input state and ``reason`` says why.
    """

    ok: bool
    state: "GameState"
    effects: list[Effect] = field(default_factory=list)
    reason: str | None = None
