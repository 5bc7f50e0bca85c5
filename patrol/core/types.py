"""
Core type definitions for the Star Patrol simulation.

This module contains all fundamental types, enums, and constants used
throughout the system. No game logic, just data structures.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .errors import GameError

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Both the galaxy and every quadrant are 8x8 grids addressed 1..8 on each axis.
# - X increases to the RIGHT (column)
# - Y increases DOWNWARD (row), row 1 is printed first
GALAXY_SIZE = 8
SECTOR_SIZE = 8


@dataclass(frozen=True)
class GridPos:
    """
    Integer coordinate on an 8x8 grid, 1-based on both axes.

    Raises:
        ValueError: If either coordinate falls outside 1..8
    """
    x: int
    y: int

    def __post_init__(self) -> None:
        if not (1 <= self.x <= GALAXY_SIZE and 1 <= self.y <= GALAXY_SIZE):
            raise ValueError(f"Coordinate out of range: ({self.x}, {self.y})")

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


class QuadrantPos(GridPos):
    """Position of a quadrant within the galaxy."""


class SectorPos(GridPos):
    """Position of a sector within the current quadrant."""


# ============================================================================
# SHIP DEVICES
# ============================================================================

class Device(Enum):
    """The eight damageable ship subsystems, in report order."""
    WARP_ENGINES = "WARP ENGINES"
    SHORT_RANGE_SENSORS = "S.R. SENSORS"
    LONG_RANGE_SENSORS = "L.R. SENSORS"
    PHASER_CONTROL = "PHASER CNTRL"
    PHOTON_TUBES = "PHOTON TUBES"
    DAMAGE_CONTROL = "DAMAGE CNTRL"
    SHIELD_CONTROL = "SHIELD CNTRL"
    COMPUTER = "COMPUTER"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display name used in damage reports."""
        return self.value

    @staticmethod
    def from_index(index: int) -> Device:
        """Look up a device by its zero-based report position."""
        return list(Device)[index]


NUM_DEVICES = len(Device)


# ============================================================================
# SECTOR CONTENTS
# ============================================================================

class SectorContent(Enum):
    """What occupies a single sector cell."""
    EMPTY = "empty"
    SHIP = "ship"
    RAIDER = "raider"
    STARBASE = "starbase"
    OBSTACLE = "obstacle"

    def __str__(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        """Three-character glyph for the short-range scan."""
        return {
            SectorContent.EMPTY: "   ",
            SectorContent.SHIP: "<*>",
            SectorContent.RAIDER: "+++",
            SectorContent.STARBASE: ">!<",
            SectorContent.OBSTACLE: " * ",
        }[self]


class Condition(Enum):
    """Alert condition shown on the short-range scan."""
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"
    DOCKED = "DOCKED"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# COMMANDS
# ============================================================================

class Command(Enum):
    """Player commands, keyed by the text typed at the COMMAND prompt."""
    NAVIGATE = "0"
    SHORT_RANGE_SCAN = "1"
    LONG_RANGE_SCAN = "2"
    FIRE_PHASERS = "3"
    FIRE_TORPEDO = "4"
    SHIELD_CONTROL = "5"
    DAMAGE_REPORT = "6"
    COMPUTER = "7"
    QUIT = "Q"

    def __str__(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return {
            Command.NAVIGATE: "SET COURSE",
            Command.SHORT_RANGE_SCAN: "SHORT RANGE SENSOR SCAN",
            Command.LONG_RANGE_SCAN: "LONG RANGE SENSOR SCAN",
            Command.FIRE_PHASERS: "FIRE PHASERS",
            Command.FIRE_TORPEDO: "FIRE PHOTON TORPEDOES",
            Command.SHIELD_CONTROL: "SHIELD CONTROL",
            Command.DAMAGE_REPORT: "DAMAGE CONTROL REPORT",
            Command.COMPUTER: "CALL ON LIBRARY COMPUTER",
            Command.QUIT: "RESIGN COMMAND",
        }[self]

    @staticmethod
    def parse(text: str) -> Command | None:
        """Map raw input to a command, or None when it is not recognised."""
        key = text.strip().upper()
        for command in Command:
            if command.value == key:
                return command
        return None


# ============================================================================
# GAME OUTCOME
# ============================================================================

class GameStatus(Enum):
    """Top-level state of the outcome state machine."""
    PLAYING = "playing"
    VICTORY = "victory"
    DEFEAT = "defeat"

    def __str__(self) -> str:
        return self.value.title()


class DefeatReason(Enum):
    """Why a mission was lost."""
    SHIP_DESTROYED = "ship_destroyed"
    TIME_EXPIRED = "time_expired"
    STRANDED = "stranded"

    def __str__(self) -> str:
        return self.value.replace("_", " ").upper()


# ============================================================================
# COMMAND RESULT
# ============================================================================

@dataclass
class CommandResult:
    """
    Structured result of running one player command.

    Attributes:
        ok: Whether the command completed
        error: Typed failure (None on success)
        message: Human-readable summary of the result
    """
    ok: bool
    error: GameError | None = None
    message: str = ""

    @property
    def error_code(self) -> str | None:
        """Machine-readable error code (None on success)."""
        return self.error.code if self.error is not None else None

    @staticmethod
    def success(message: str = "") -> CommandResult:
        """Create a successful result."""
        return CommandResult(ok=True, error=None, message=message)

    @staticmethod
    def fail(error: GameError) -> CommandResult:
        """Create a failed result carrying the typed error."""
        return CommandResult(ok=False, error=error, message=error.message)
