"""Text interface helpers for Nebula Clash."""
