"""
Device damage and repair.

Damage is a signed scalar per device: negative means damaged, zero nominal,
positive better than nominal. After every move each damaged device heals by
one unit, and a random event may hit or help one device.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from infra.logger import get_logger

from ..core.errors import DeviceDamagedError
from ..core.io import OutputWriter
from ..core.types import NUM_DEVICES, CommandResult, Device

if TYPE_CHECKING:
    from ..entities.ship import Ship
    from ..world.galaxy import Galaxy

log = get_logger(__name__)

AUTO_REPAIR_STEP = 1.0
MAX_SEVERITY = 5


@dataclass
class DamageEvent:
    """
    A random change to one device.

    Attributes:
        device: Affected device
        severity: Units of damage or repair (1..5)
        repaired: True for an improvement, False for damage
    """
    device: Device
    severity: float
    repaired: bool

    def __str__(self) -> str:
        if self.repaired:
            return f"DAMAGE CONTROL REPORT: {self.device.label} STATE OF REPAIR IMPROVED"
        return f"DAMAGE CONTROL REPORT: {self.device.label} DAMAGED"


class DamageControl:
    """Stateless device damage and repair rules."""

    def auto_repair(self, ship: Ship) -> List[Device]:
        """
        Heal every damaged device by one unit.

        Returns:
            Devices that were repaired
        """
        repaired = ship.damaged_devices()
        for device in repaired:
            ship.repair_device(device, AUTO_REPAIR_STEP)
        return repaired

    def random_event(self, galaxy: Galaxy, output: OutputWriter) -> Optional[DamageEvent]:
        """
        Roll for a random damage event.

        Draws, in order: the event chance, the device index, the severity
        and the repair/damage coin. The last three are only drawn when the
        event fires.

        Returns:
            The event that happened, or None
        """
        rng = galaxy.rng
        if rng.random() > galaxy.settings.damage_event_chance:
            return None

        device = Device.from_index(math.floor(rng.random() * NUM_DEVICES))
        severity = float(math.floor(rng.random() * MAX_SEVERITY) + 1)
        repaired = rng.random() >= 0.5
        event = DamageEvent(device, severity, repaired)

        if repaired:
            galaxy.ship.repair_device(device, severity)
        else:
            galaxy.ship.damage_device(device, severity)
        log.debug("Random damage event: %s", event)

        output.writeln("")
        output.writeln(str(event))
        output.writeln("")
        return event

    def report(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        """Print the state of repair of every device."""
        ship = galaxy.ship
        if ship.is_damaged(Device.DAMAGE_CONTROL):
            output.writeln("DAMAGE CONTROL REPORT IS NOT AVAILABLE")
            return CommandResult.fail(
                DeviceDamagedError(Device.DAMAGE_CONTROL, "DAMAGE CONTROL REPORT IS NOT AVAILABLE")
            )

        output.writeln("")
        output.writeln(f"{'DEVICE':<14}STATE OF REPAIR")
        for device in Device:
            output.writeln(f"{device.label:<14}{int(ship.devices[device])}")
        output.writeln("")
        return CommandResult.success()
