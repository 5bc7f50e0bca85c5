"""
Sensor scans.

- Short range: the current quadrant's sector grid with a status column
- Long range: three-digit codes for the 3x3 block of quadrants around the
  ship, each of which is copied into scan memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..core.errors import DeviceDamagedError
from ..core.io import OutputWriter
from ..core.types import SECTOR_SIZE, CommandResult, Device
from ..world.grid import GALAXY_GRID

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

SRS_BORDER = "-=--=--=--=--=--=--=--=-"
LRS_BORDER = "-------------------"
OUT_OF_GALAXY = "xxx"


class SensorSystem:
    """Stateless short- and long-range sensor scans."""

    def short_range_scan(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        """
        Check docking, then print the sector grid beside the ship status.

        Docking happens even when the sensors are out.
        """
        galaxy.check_docking(output)
        condition = galaxy.evaluate_condition()

        if galaxy.ship.is_damaged(Device.SHORT_RANGE_SENSORS):
            output.writeln("*** SHORT RANGE SENSORS ARE OUT ***")
            return CommandResult.fail(
                DeviceDamagedError(Device.SHORT_RANGE_SENSORS, "SHORT RANGE SENSORS ARE OUT")
            )

        ship = galaxy.ship
        status: List[str] = [
            f"STARDATE  {int(galaxy.stardate)}",
            f"CONDITION {condition}",
            f"QUADRANT  {ship.quadrant}",
            f"SECTOR    {ship.sector}",
            f"ENERGY    {int(ship.energy)}",
            f"SHIELDS   {int(ship.shields)}",
            f"PHOTON TORPEDOES {ship.torpedoes}",
            "",
        ]

        output.writeln(SRS_BORDER)
        for y in range(1, SECTOR_SIZE + 1):
            row = galaxy.sector_view.render_row(y)
            line = status[y - 1]
            output.writeln(f"{row}        {line}" if line else row)
        output.writeln(SRS_BORDER)
        return CommandResult.success(str(condition))

    def long_range_scan(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        """Print and memorise the quadrants around the ship."""
        if galaxy.ship.is_damaged(Device.LONG_RANGE_SENSORS):
            output.writeln("LONG RANGE SENSORS ARE INOPERABLE")
            return CommandResult.fail(
                DeviceDamagedError(Device.LONG_RANGE_SENSORS, "LONG RANGE SENSORS ARE INOPERABLE")
            )

        quadrant = galaxy.ship.quadrant
        output.writeln(f"LONG RANGE SENSOR SCAN FOR QUADRANT {quadrant}")
        for row in GALAXY_GRID.neighborhood(quadrant):
            output.writeln(LRS_BORDER)
            cells: List[str] = []
            for cell in row:
                if cell is None:
                    cells.append(OUT_OF_GALAXY)
                    continue
                x, y = cell
                cells.append(galaxy.record_at(x, y).display())
                galaxy.record_quadrant(x, y)
            output.writeln(f"| {' | '.join(cells)} |")
        output.writeln(LRS_BORDER)
        return CommandResult.success()
