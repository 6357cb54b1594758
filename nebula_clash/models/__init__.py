"""Data models for Nebula Clash."""

from .cell import Cell, Grid
from .component import COMPONENT_SPECS, WEAPON_KINDS, Component, ComponentKind, ComponentSpec
from .game import AIMemory, GameSettings, GameState
from .player import PlayerState
from .ship import Ship

__all__ = [
    "Cell",
    "Grid",
    "COMPONENT_SPECS",
    "WEAPON_KINDS",
    "Component",
    "ComponentKind",
    "ComponentSpec",
    "AIMemory",
    "GameSettings",
    "GameState",
    "PlayerState",
    "Ship",
]
