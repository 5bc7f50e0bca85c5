"""
Library computer.

Options:
- 0: cumulative galactic record (scan memory, ??? for unknown quadrants)
- 1: status report followed by the damage report
- 2: photon torpedo data (course and distance to each raider in view)
Anything else prints the option menu.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..core.errors import DeviceDamagedError
from ..core.io import InputReader, OutputWriter
from ..core.types import GALAXY_SIZE, CommandResult, Device
from ..world.grid import calculate_distance
from .course import calculate_course
from .damage import DamageControl

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

RECORD_BORDER = "-------------------------------------------------"
UNKNOWN = "???"


class LibraryComputer:
    """Stateless handler for computer queries."""

    def __init__(self, damage: DamageControl | None = None):
        self._damage = damage or DamageControl()

    def query(self, galaxy: Galaxy, reader: InputReader, output: OutputWriter) -> CommandResult:
        if galaxy.ship.is_damaged(Device.COMPUTER):
            output.writeln("COMPUTER DISABLED")
            return CommandResult.fail(DeviceDamagedError(Device.COMPUTER, "COMPUTER DISABLED"))

        output.writeln("COMPUTER ACTIVE AND AWAITING COMMAND")
        choice = reader.read_line("").strip()
        if choice == "0":
            return self.galactic_record(galaxy, output)
        if choice == "1":
            return self.status_report(galaxy, output)
        if choice == "2":
            return self.torpedo_data(galaxy, output)

        output.writeln("FUNCTIONS AVAILABLE FROM COMPUTER")
        output.writeln("   0 = CUMULATIVE GALACTIC RECORD")
        output.writeln("   1 = STATUS REPORT")
        output.writeln("   2 = PHOTON TORPEDO DATA")
        return CommandResult.success()

    def galactic_record(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        output.writeln(f"COMPUTER RECORD OF GALAXY FOR QUADRANT {galaxy.ship.quadrant}")
        for y in range(1, GALAXY_SIZE + 1):
            output.writeln(RECORD_BORDER)
            cells: List[str] = []
            for x in range(1, GALAXY_SIZE + 1):
                known = galaxy.scan_memory.get(x, y)
                cells.append(known.display() if known is not None else UNKNOWN)
            output.writeln(f"| {' | '.join(cells)} |")
        output.writeln(RECORD_BORDER)
        return CommandResult.success()

    def status_report(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        output.writeln("   STATUS REPORT")
        output.writeln("")
        output.writeln(f"NUMBER OF RAIDERS LEFT   = {galaxy.total_raiders}")
        output.writeln(f"NUMBER OF STARDATES LEFT = {int(galaxy.stardates_left)}")
        output.writeln(f"NUMBER OF STARBASES LEFT = {galaxy.total_starbases}")
        self._damage.report(galaxy, output)
        return CommandResult.success()

    def torpedo_data(self, galaxy: Galaxy, output: OutputWriter) -> CommandResult:
        """Course and distance from the ship to every live raider in view."""
        raiders = galaxy.sector_view.live_raiders()
        if not raiders:
            output.writeln("SHORT RANGE SENSORS REPORT NO RAIDERS IN THIS QUADRANT")
            return CommandResult.success()

        origin = galaxy.ship.sector
        output.writeln("PHOTON TORPEDO DATA")
        for raider in raiders:
            course = calculate_course(raider.pos.x - origin.x, raider.pos.y - origin.y)
            distance = calculate_distance(origin, raider.pos)
            output.writeln(
                f"RAIDER AT SECTOR {raider.pos}: COURSE = {course:.2f}  DISTANCE = {distance:.2f}"
            )
        return CommandResult.success()
