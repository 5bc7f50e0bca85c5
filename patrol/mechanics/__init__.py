"""
Game mechanics for the Star Patrol simulation.

This package contains the stateless resolvers for each game system:
- course: course vectors, interpolation and quadrant crossing
- combat: phasers, photon torpedoes and raider counter-fire
- movement: navigation and collision handling
- damage: device auto-repair, random damage events and reports
- shields: energy/shield transfers
- sensors: short- and long-range scans
- computer: library computer queries
- victory: mission outcome state machine
"""

from .course import (
    COURSE_VECTORS,
    calculate_direction,
    calculate_course,
    calculate_quadrant_crossing,
    read_course,
)
from .combat import CombatResolver, CounterFireResult, Hit
from .movement import MovementResolver, MovementResult
from .damage import DamageControl, DamageEvent
from .shields import ShieldControl
from .sensors import SensorSystem
from .computer import LibraryComputer
from .victory import Outcome, VictoryConditions


__all__ = [
    "COURSE_VECTORS",
    "calculate_direction",
    "calculate_course",
    "calculate_quadrant_crossing",
    "read_course",
    "CombatResolver",
    "CounterFireResult",
    "Hit",
    "MovementResolver",
    "MovementResult",
    "DamageControl",
    "DamageEvent",
    "ShieldControl",
    "SensorSystem",
    "LibraryComputer",
    "Outcome",
    "VictoryConditions",
]
