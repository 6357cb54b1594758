"""Ship component data model and component catalogue."""

from dataclasses import dataclass
from enum import Enum


class ComponentKind(str, Enum):
    """Kinds of ship part that can occupy a grid cell."""

    STRUCTURE = "structure"
    WEAPON_SMALL = "weapon-small"
    WEAPON_MEDIUM = "weapon-medium"
    WEAPON_LARGE = "weapon-large"
    AMMO_PRODUCER = "ammo-producer"
    ENERGY_PRODUCER = "energy-producer"
    MEDICAL_BAY = "medical-bay"


@dataclass(frozen=True)
class ComponentSpec:
    """Static rules for one component kind.

    Attributes:
        points: Placement cost in budget points
        area: Side length of the square blast footprint (weapons only)
        energy_cost: Energy sources needed for the component to be energized
        ammo_cost: Ammo charge needed before a weapon can fire
    """

    points: int
    area: int = 0
    energy_cost: int = 0
    ammo_cost: int = 0


COMPONENT_SPECS: dict[ComponentKind, ComponentSpec] = {
    ComponentKind.STRUCTURE: ComponentSpec(points=1),
    ComponentKind.WEAPON_SMALL: ComponentSpec(points=4, area=1, energy_cost=1, ammo_cost=1),
    ComponentKind.WEAPON_MEDIUM: ComponentSpec(points=7, area=3, energy_cost=2, ammo_cost=3),
    ComponentKind.WEAPON_LARGE: ComponentSpec(points=12, area=5, energy_cost=3, ammo_cost=5),
    ComponentKind.AMMO_PRODUCER: ComponentSpec(points=4, energy_cost=1),
    ComponentKind.ENERGY_PRODUCER: ComponentSpec(points=3),
    ComponentKind.MEDICAL_BAY: ComponentSpec(points=3, energy_cost=1),
}

WEAPON_KINDS = (
    ComponentKind.WEAPON_SMALL,
    ComponentKind.WEAPON_MEDIUM,
    ComponentKind.WEAPON_LARGE,
)


@dataclass
class Component:
    """A single ship part occupying one cell.

    Components are never removed from the board. A component on a hit cell
    simply stops contributing to its ship's capabilities until repaired.
    """

    id: str  # Unique within the owning board (e.g., "3-4-weapon-large")
    kind: ComponentKind
    ammo_charge: int = 0  # Weapons only
    used_this_turn: bool = False  # Energy and ammo producers only
    powered_component_id: str | None = None  # Energy producers only

    def __post_init__(self):
        """Validate component data after initialization."""
        self.kind = ComponentKind(self.kind)
        if not self.id:
            raise ValueError("Component id cannot be empty")
        if self.ammo_charge < 0:
            raise ValueError(f"Invalid ammo_charge: {self.ammo_charge} (must be >= 0)")
        if self.ammo_charge and not self.is_weapon:
            raise ValueError(f"Only weapons hold ammo charge, not {self.kind.value}")
        if self.powered_component_id is not None and not self.is_energy_producer:
            raise ValueError(f"Only energy producers power components, not {self.kind.value}")

    @property
    def spec(self) -> ComponentSpec:
        return COMPONENT_SPECS[self.kind]

    @property
    def is_weapon(self) -> bool:
        return self.kind in WEAPON_KINDS

    @property
    def is_energy_producer(self) -> bool:
        return self.kind == ComponentKind.ENERGY_PRODUCER

    @property
    def is_ammo_producer(self) -> bool:
        return self.kind == ComponentKind.AMMO_PRODUCER

    @property
    def is_medical_bay(self) -> bool:
        return self.kind == ComponentKind.MEDICAL_BAY

    @property
    def is_energy_consumer(self) -> bool:
        """Structure and energy producers cannot receive power."""
        return self.kind not in (ComponentKind.STRUCTURE, ComponentKind.ENERGY_PRODUCER)

    @property
    def ammo_needed(self) -> int:
        """Charge still missing before the weapon is loaded."""
        return max(0, self.spec.ammo_cost - self.ammo_charge)
