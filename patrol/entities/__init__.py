"""
Entities of the Star Patrol simulation.
"""

from .ship import Ship
from .raider import Raider
from .quadrant import QuadrantRecord


__all__ = [
    "Ship",
    "Raider",
    "QuadrantRecord",
]
