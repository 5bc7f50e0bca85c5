"""
Typed failures raised by the model and returned by command resolvers.

Every error carries a machine-readable ``code`` so that callers can branch
on the failure kind without inspecting message text.
"""

from __future__ import annotations

from .types import Device, SectorPos


class GameError(Exception):
    """Base class for all recoverable game failures."""
    code = "GAME_ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInputError(GameError):
    """Unparseable or out-of-domain numeric input."""
    code = "INVALID_INPUT"


class DeviceDamagedError(GameError):
    """The requested subsystem is unusable."""
    code = "DEVICE_DAMAGED"

    def __init__(self, device: Device, message: str = ""):
        super().__init__(message or f"{device.label} IS DAMAGED")
        self.device = device


class InsufficientResourcesError(GameError):
    """Energy, shields or torpedoes below what the action needs."""
    code = "INSUFFICIENT_RESOURCES"

    def __init__(
        self,
        message: str = "",
        *,
        required: float | None = None,
        available: float | None = None,
    ):
        super().__init__(message)
        self.required = required
        self.available = available


class NavigationBlockedError(GameError):
    """Movement stopped early by an occupied sector; the partial move stands."""
    code = "NAVIGATION_BLOCKED"

    def __init__(self, sector: SectorPos, message: str = ""):
        super().__init__(
            message or f"WARP ENGINES SHUTDOWN AT SECTOR {sector} DUE TO BAD NAVIGATION"
        )
        self.sector = sector


class NoTargetsError(GameError):
    """No live raiders in the current quadrant."""
    code = "NO_TARGETS"


class TransportError(GameError):
    """The line-input or line-output channel failed."""
    code = "TRANSPORT"
