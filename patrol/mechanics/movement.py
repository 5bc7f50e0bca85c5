"""
Ship navigation for the Star Patrol simulation.

A move is requested as a course and a warp factor. The ship then steps one
sector at a time along the course direction:
- leaving the quadrant hands off to the galaxy-level crossing calculation
- running into anything backs the ship up one step and stops it there
Afterwards the move is paid for, time advances, and damage control runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from infra.logger import get_logger

from ..core.errors import (
    DeviceDamagedError,
    InsufficientResourcesError,
    InvalidInputError,
    NavigationBlockedError,
)
from ..core.io import InputReader, OutputWriter, read_number
from ..core.types import CommandResult, Device, QuadrantPos, SectorContent, SectorPos
from ..world.grid import SECTOR_GRID
from .combat import CombatResolver
from .course import calculate_direction, calculate_quadrant_crossing, read_course
from .damage import DamageControl, DamageEvent

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

log = get_logger(__name__)

MAX_WARP = 8.0
STEPS_PER_WARP = 8
# Moves shorter than this many steps give energy back.
FREE_STEPS = 5


@dataclass
class MovementResult:
    """
    Result of executing one move.

    Attributes:
        start_quadrant: Quadrant before moving
        start_sector: Sector before moving
        end_quadrant: Quadrant after moving
        end_sector: Sector after moving
        steps: Steps requested (floor(warp * 8))
        crossed_boundary: The ship left its starting quadrant
        blocked_at: Sector where a collision stopped the ship (None if clear)
        stardates: Time that passed
        energy_cost: Energy charged (negative is a gain)
        damage_event: Random damage event rolled afterwards, if any
    """
    start_quadrant: QuadrantPos
    start_sector: SectorPos
    end_quadrant: QuadrantPos
    end_sector: SectorPos
    steps: int
    crossed_boundary: bool = False
    blocked_at: Optional[SectorPos] = None
    stardates: float = 0.0
    energy_cost: float = 0.0
    damage_event: Optional[DamageEvent] = None

    @property
    def moved(self) -> bool:
        return (self.start_quadrant, self.start_sector) != (self.end_quadrant, self.end_sector)


class MovementResolver:
    """
    Stateless resolver for navigation.

    Usage:
        resolver = MovementResolver()
        result = resolver.navigate(galaxy, reader, output)
    """

    def __init__(
        self,
        combat: Optional[CombatResolver] = None,
        damage: Optional[DamageControl] = None,
    ):
        self._combat = combat or CombatResolver()
        self._damage = damage or DamageControl()

    def navigate(
        self, galaxy: Galaxy, reader: InputReader, output: OutputWriter
    ) -> CommandResult:
        """
        Read a course and warp factor, then move the ship.

        Checks run before anything changes: warp range, damaged engines and
        the energy reserve. Raiders in the quadrant fire before the ship
        moves.

        Returns:
            CommandResult; fails with INVALID_INPUT, DEVICE_DAMAGED,
            INSUFFICIENT_RESOURCES or NAVIGATION_BLOCKED (move still applied)
        """
        ship = galaxy.ship

        course = read_course(reader, "COURSE (1-9)")
        if course is None:
            return CommandResult.success("NAVIGATION CANCELLED")

        warp = read_number(reader, "WARP FACTOR (0-8)")
        if warp is None or not 0 <= warp <= MAX_WARP:
            return CommandResult.fail(InvalidInputError("WARP FACTOR MUST BE BETWEEN 0 AND 8"))

        limit = galaxy.settings.damaged_warp_limit
        if ship.is_damaged(Device.WARP_ENGINES) and warp > limit:
            speed = f"{limit:g}".lstrip("0") or "0"
            message = f"WARP ENGINES ARE DAMAGED, MAXIMUM SPEED = WARP {speed}"
            output.writeln(message)
            return CommandResult.fail(DeviceDamagedError(Device.WARP_ENGINES, message))

        if ship.energy <= 0:
            if ship.shields < 1:
                survived = self._combat.resolve_stranded(galaxy, output)
                return CommandResult.success("SURVIVED" if survived else "SHIP DESTROYED")
            output.writeln(f"YOU HAVE {int(ship.energy)} UNITS OF ENERGY")
            output.writeln(
                f"SUGGEST YOU GET SOME FROM YOUR SHIELDS WHICH HAVE {int(ship.shields)} UNITS LEFT"
            )
            return CommandResult.fail(
                InsufficientResourcesError(
                    "INSUFFICIENT ENERGY FOR WARP", required=1, available=ship.energy
                )
            )

        if galaxy.sector_view.live_raiders():
            if self._combat.counter_fire(galaxy, output).ship_destroyed:
                return CommandResult.success("SHIP DESTROYED")

        result = self.execute_move(galaxy, course, warp, output)
        if result.blocked_at is not None:
            return CommandResult.fail(NavigationBlockedError(result.blocked_at))
        return CommandResult.success(
            f"ARRIVED AT QUADRANT {result.end_quadrant} SECTOR {result.end_sector}"
        )

    def execute_move(
        self, galaxy: Galaxy, course: float, warp: float, output: OutputWriter
    ) -> MovementResult:
        """
        Step the ship along ``course`` for floor(warp * 8) steps.

        Args:
            galaxy: Game state (modified in place)
            course: Heading in [1, 9)
            warp: Warp factor in [0, 8]
            output: Where collisions and damage events are reported

        Returns:
            MovementResult describing what happened
        """
        ship = galaxy.ship
        dx, dy = calculate_direction(course)
        steps = math.floor(warp * STEPS_PER_WARP)
        start_quadrant, start_sector = ship.quadrant, ship.sector
        result = MovementResult(
            start_quadrant=start_quadrant,
            start_sector=start_sector,
            end_quadrant=start_quadrant,
            end_sector=start_sector,
            steps=steps,
        )
        if steps == 0:
            return result

        x, y = float(start_sector.x), float(start_sector.y)
        for _ in range(steps):
            x += dx
            y += dy
            if not SECTOR_GRID.contains_point(x, y):
                result.crossed_boundary = True
                break
            cell = SectorPos(*SECTOR_GRID.cell_at(x, y))
            if cell != start_sector and galaxy.sector_view.content_at(cell) != SectorContent.EMPTY:
                x -= dx
                y -= dy
                result.blocked_at = SectorPos(*SECTOR_GRID.cell_at(x, y))
                log.info("Navigation blocked by %s at %s", galaxy.sector_view.content_at(cell), cell)
                break

        # The whole move is applied and charged before anything is reported.
        if result.crossed_boundary:
            new_quadrant, new_sector = calculate_quadrant_crossing(
                start_quadrant, start_sector, dx, dy, steps
            )
            galaxy.warp_to(new_quadrant, new_sector)
            result.stardates = 1
        else:
            galaxy.move_ship(SectorPos(*SECTOR_GRID.cell_at(x, y)))
            if warp >= 1:
                result.stardates = 1
        galaxy.advance_time(result.stardates)

        result.energy_cost = steps - FREE_STEPS
        ship.adjust_energy(-result.energy_cost)
        self._damage.auto_repair(ship)
        result.end_quadrant, result.end_sector = ship.quadrant, ship.sector

        if result.blocked_at is not None:
            output.writeln(
                f"WARP ENGINES SHUTDOWN AT SECTOR {result.blocked_at} DUE TO BAD NAVIGATION"
            )
        if result.crossed_boundary:
            galaxy.report_combat_area(output)
        result.damage_event = self._damage.random_event(galaxy, output)

        log.debug(
            "Moved %s/%s -> %s/%s (steps=%d, crossed=%s, cost=%s)",
            start_quadrant,
            start_sector,
            result.end_quadrant,
            result.end_sector,
            steps,
            result.crossed_boundary,
            result.energy_cost,
        )
        return result
