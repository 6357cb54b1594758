"""Nebula Clash: turn-based fleet battle on a square grid."""

__version__ = "1.0.0"
