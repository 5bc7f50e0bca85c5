"""
Core types, errors and I/O capabilities for the Star Patrol simulation.
"""

from .types import (
    GALAXY_SIZE,
    SECTOR_SIZE,
    NUM_DEVICES,
    GridPos,
    QuadrantPos,
    SectorPos,
    Device,
    SectorContent,
    Condition,
    Command,
    GameStatus,
    DefeatReason,
    CommandResult,
)
from .errors import (
    GameError,
    InvalidInputError,
    DeviceDamagedError,
    InsufficientResourcesError,
    NavigationBlockedError,
    NoTargetsError,
    TransportError,
)
from .io import InputReader, OutputWriter, ConsoleIO, ScriptedIO, read_number


__all__ = [
    "GALAXY_SIZE",
    "SECTOR_SIZE",
    "NUM_DEVICES",
    "GridPos",
    "QuadrantPos",
    "SectorPos",
    "Device",
    "SectorContent",
    "Condition",
    "Command",
    "GameStatus",
    "DefeatReason",
    "CommandResult",
    "GameError",
    "InvalidInputError",
    "DeviceDamagedError",
    "InsufficientResourcesError",
    "NavigationBlockedError",
    "NoTargetsError",
    "TransportError",
    "InputReader",
    "OutputWriter",
    "ConsoleIO",
    "ScriptedIO",
    "read_number",
]
