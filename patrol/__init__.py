"""
Star Patrol - turn-based space combat on an 8x8 galaxy of 8x8 quadrants.

Instead of from patrol.environment import GameEngine, you can do:
from patrol import GameEngine
"""

from .config import GameSettings
from .core import (
    Command,
    CommandResult,
    ConsoleIO,
    DefeatReason,
    Device,
    GameError,
    GameStatus,
    QuadrantPos,
    ScriptedIO,
    SectorPos,
    TransportError,
)
from .environment import GameEngine
from .mechanics import Outcome
from .world import Galaxy


__all__ = [
    "GameSettings",
    "Command",
    "CommandResult",
    "ConsoleIO",
    "DefeatReason",
    "Device",
    "GameError",
    "GameStatus",
    "QuadrantPos",
    "ScriptedIO",
    "SectorPos",
    "TransportError",
    "GameEngine",
    "Outcome",
    "Galaxy",
]
