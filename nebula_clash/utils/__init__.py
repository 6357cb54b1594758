"""Utility functions and constants for Nebula Clash."""

from .constants import (
    AI,
    BOARD_SIZES,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    HUMAN,
    POINTS_BY_BOARD_SIZE,
    REPAIR_TURNS,
    RNG_SEED_DEFAULT,
)
from .coordinates import Coord, coord_label, in_bounds, orthogonal_neighbors
from .rng import GameRNG

__all__ = [
    "AI",
    "BOARD_SIZES",
    "DEFAULT_BOARD_SIZE",
    "DEFAULT_DIFFICULTY",
    "DIFFICULTIES",
    "HUMAN",
    "POINTS_BY_BOARD_SIZE",
    "REPAIR_TURNS",
    "RNG_SEED_DEFAULT",
    "Coord",
    "coord_label",
    "in_bounds",
    "orthogonal_neighbors",
    "GameRNG",
]
