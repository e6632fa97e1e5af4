"""Mover module for safe file movement."""

from .mover import SafeMover

__all__ = [
    "SafeMover",
]
