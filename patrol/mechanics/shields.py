from __future__ import annotations

from typing import TYPE_CHECKING

from infra.logger import get_logger

from ..core.errors import DeviceDamagedError, InsufficientResourcesError, InvalidInputError
from ..core.io import InputReader, OutputWriter, read_number
from ..core.types import CommandResult, Device

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

log = get_logger(__name__)


class ShieldControl:
    """Moves energy between the main reserve and the shields."""

    def transfer(self, galaxy: Galaxy, reader: InputReader, output: OutputWriter) -> CommandResult:
        """
        Ask for a new shield level and apply it.

        Energy plus shields is preserved. A request above what is available
        fails with INSUFFICIENT_RESOURCES so the caller can offer a retry.
        """
        ship = galaxy.ship
        if ship.is_damaged(Device.SHIELD_CONTROL):
            output.writeln("SHIELD CONTROL IS NON-OPERATIONAL")
            return CommandResult.fail(
                DeviceDamagedError(Device.SHIELD_CONTROL, "SHIELD CONTROL IS NON-OPERATIONAL")
            )

        output.writeln(f"ENERGY AVAILABLE = {int(ship.energy + ship.shields)}")
        units = read_number(reader, "NUMBER OF UNITS TO SHIELDS")
        if units is None:
            return CommandResult.fail(InvalidInputError("SHIELD LEVEL MUST BE A NUMBER"))

        try:
            ship.transfer_to_shields(units)
        except (InvalidInputError, InsufficientResourcesError) as exc:
            log.debug("Shield transfer of %s rejected: %s", units, exc.code)
            return CommandResult.fail(exc)

        log.debug("Shields set to %.2f, energy now %.2f", ship.shields, ship.energy)
        return CommandResult.success(f"SHIELDS NOW AT {int(ship.shields)}")
