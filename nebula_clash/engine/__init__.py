"""Game engine components."""

from .attack import AttackResult, PendingAttack, begin_attack, can_fire, fire, resolve_attack
from .errors import (
    AlreadyFull,
    GameRuleError,
    InsufficientAmmo,
    InvalidPlacement,
    InvalidSelection,
    InvalidTarget,
    NotEnergized,
    WeaponNotEnergized,
    WeaponNotReady,
)
from .game_engine import GameEngine
from .placement import new_game, place_component, place_randomly
from .power import allocate_ammo, allocate_energy, energy_source_count
from .ship_identifier import identify_ships
from .turn_scheduler import RepairReport, TurnScheduler
from .victory import check_victory, check_winner

__all__ = [
    "AttackResult",
    "PendingAttack",
    "begin_attack",
    "can_fire",
    "fire",
    "resolve_attack",
    "AlreadyFull",
    "GameRuleError",
    "InsufficientAmmo",
    "InvalidPlacement",
    "InvalidSelection",
    "InvalidTarget",
    "NotEnergized",
    "WeaponNotEnergized",
    "WeaponNotReady",
    "GameEngine",
    "new_game",
    "place_component",
    "place_randomly",
    "allocate_ammo",
    "allocate_energy",
    "energy_source_count",
    "identify_ships",
    "RepairReport",
    "TurnScheduler",
    "check_victory",
    "check_winner",
]
