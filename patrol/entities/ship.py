"""
The player's ship.

The ship owns its resources (energy, shields, torpedoes), its position and
the signed damage scalar for each device. All mutation goes through the
methods below so that resource checks live in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..core.errors import DeviceDamagedError, InsufficientResourcesError, InvalidInputError
from ..core.types import Device, QuadrantPos, SectorPos


@dataclass
class Ship:
    """
    Player vessel.

    Attributes:
        quadrant: Current quadrant in the galaxy
        sector: Current sector within that quadrant
        energy: Main energy reserve
        shields: Shield energy; negative signals destruction
        torpedoes: Photon torpedoes remaining
        devices: Damage scalar per device (negative = damaged)
    """
    quadrant: QuadrantPos
    sector: SectorPos
    energy: float = field(default=3000.0, kw_only=True)
    shields: float = field(default=0.0, kw_only=True)
    torpedoes: int = field(default=10, kw_only=True)
    devices: Dict[Device, float] = field(
        default_factory=lambda: {device: 0.0 for device in Device}, kw_only=True
    )

    def __post_init__(self) -> None:
        if self.torpedoes < 0:
            raise ValueError(f"torpedoes must be >= 0, got {self.torpedoes}")
        for device in Device:
            self.devices.setdefault(device, 0.0)

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------
    def move_to(self, quadrant: QuadrantPos, sector: SectorPos) -> None:
        self.quadrant = quadrant
        self.sector = sector

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    def spend_energy(self, amount: float) -> None:
        """
        Deduct energy for a deliberate action.

        Raises:
            InsufficientResourcesError: If less than ``amount`` is available
        """
        if amount > self.energy:
            raise InsufficientResourcesError(
                "INSUFFICIENT ENERGY", required=amount, available=self.energy
            )
        self.energy -= amount

    def adjust_energy(self, delta: float) -> None:
        """Apply a signed energy change without a floor (movement cost)."""
        self.energy += delta

    def absorb_hit(self, hit: float) -> None:
        """Take a hit on the shields; shields may go negative."""
        self.shields -= hit

    def consume_torpedo(self) -> None:
        """
        Raises:
            InsufficientResourcesError: If no torpedoes remain
        """
        if self.torpedoes <= 0:
            raise InsufficientResourcesError(
                "ALL PHOTON TORPEDOES EXPENDED", required=1, available=0
            )
        self.torpedoes -= 1

    def transfer_to_shields(self, value: float) -> None:
        """
        Set the shield level, drawing from or returning to the energy reserve.

        The sum of energy and shields is preserved.

        Raises:
            DeviceDamagedError: If shield control is damaged
            InvalidInputError: If ``value`` is not positive
            InsufficientResourcesError: If ``value`` exceeds energy + shields
        """
        if self.is_damaged(Device.SHIELD_CONTROL):
            raise DeviceDamagedError(Device.SHIELD_CONTROL, "SHIELD CONTROL IS NON-OPERATIONAL")
        if value <= 0:
            raise InvalidInputError("SHIELD LEVEL MUST BE POSITIVE")
        total = self.energy + self.shields
        if value > total:
            raise InsufficientResourcesError(
                "SHIP ENERGY INSUFFICIENT", required=value, available=total
            )
        self.energy = total - value
        self.shields = value

    def dock(self, energy: float, torpedoes: int, shields: float) -> None:
        """Restore resources to the given launch values."""
        self.energy = energy
        self.torpedoes = torpedoes
        self.shields = shields

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------
    def is_damaged(self, device: Device) -> bool:
        return self.devices[device] < 0

    def damage_device(self, device: Device, amount: float) -> None:
        self.devices[device] -= amount

    def repair_device(self, device: Device, amount: float) -> None:
        self.devices[device] += amount

    def damaged_devices(self) -> list[Device]:
        """Damaged devices in report order."""
        return [device for device in Device if self.is_damaged(device)]
