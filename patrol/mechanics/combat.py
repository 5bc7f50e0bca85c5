"""
Combat resolution for the Star Patrol simulation.

This module provides the three fighting algorithms:
- Phasers: energy split across every live raider, scaled by distance
- Photon torpedo: a single projectile walked sector by sector
- Counter-fire: every live raider shoots back at the ship

Raiders are always processed in placement order, and every random factor
is drawn from the galaxy's stream, so a seed replays identically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from infra.logger import get_logger

from ..core.errors import (
    DeviceDamagedError,
    InsufficientResourcesError,
    InvalidInputError,
    NoTargetsError,
)
from ..core.io import InputReader, OutputWriter, read_number
from ..core.types import CommandResult, Device, SectorContent, SectorPos
from ..world.grid import SECTOR_GRID, calculate_distance
from .course import calculate_direction, read_course

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

log = get_logger(__name__)


@dataclass
class Hit:
    """
    One shot landing on a target.

    Attributes:
        source: Sector the shot came from
        target: Sector that was hit
        amount: Energy delivered
        remaining: Target shields after the hit
    """
    source: SectorPos
    target: SectorPos
    amount: float
    remaining: float


@dataclass
class CounterFireResult:
    """
    Outcome of one counter-fire volley.

    Attributes:
        protected: The ship sat next to a starbase and nobody fired
        hits: Hits on the ship in firing order
        ship_destroyed: Shields went negative during the volley
    """
    protected: bool = False
    hits: List[Hit] = field(default_factory=list)
    ship_destroyed: bool = False


class CombatResolver:
    """
    Stateless resolver for weapons fire.

    Each entry point takes the Galaxy plus the two I/O capabilities and
    returns a CommandResult; the Galaxy is modified in place.
    """

    # ========================================================================
    # COUNTER-FIRE
    # ========================================================================

    def counter_fire(self, galaxy: Galaxy, output: OutputWriter) -> CounterFireResult:
        """
        Every live raider in the quadrant fires on the ship.

        Each hit is (raider shields / distance) * uniform(0, 2) and comes off
        the ship's shields. Nothing fires while the ship is docked.

        Returns:
            CounterFireResult; ``ship_destroyed`` is True once shields < 0
        """
        ship = galaxy.ship
        if galaxy.is_docking_position():
            output.writeln("STAR BASE SHIELDS PROTECT THE SHIP")
            return CounterFireResult(protected=True)

        result = CounterFireResult()
        for raider in galaxy.sector_view.live_raiders():
            distance = calculate_distance(ship.sector, raider.pos)
            hit = (raider.shields / distance) * (2 * galaxy.rng.random())
            ship.absorb_hit(hit)
            result.hits.append(Hit(raider.pos, ship.sector, hit, ship.shields))
            output.writeln(f"{int(hit)} UNIT HIT ON SHIP FROM SECTOR {raider.pos}")
            output.writeln(f"   ({int(max(ship.shields, 0))} LEFT)")
            log.debug("Counter-fire from %s: %.2f, shields now %.2f", raider.pos, hit, ship.shields)

        result.ship_destroyed = ship.shields < 0
        if result.ship_destroyed:
            log.info("Ship destroyed by counter-fire in quadrant %s", ship.quadrant)
        return result

    def resolve_stranded(self, galaxy: Galaxy, output: OutputWriter) -> bool:
        """
        Dead-in-space contingency: raiders keep firing until one side is gone.

        Ends in survival when no live raider remains in the quadrant, or when
        a neighbouring starbase shields the ship. Ends in destruction when
        shields go negative, in which case the galaxy is flagged as stranded.

        Returns:
            True if the ship survived
        """
        log.warning("Ship stranded in quadrant %s", galaxy.ship.quadrant)
        output.writeln("THE SHIP IS DEAD IN SPACE. IF YOU SURVIVE ALL IMPENDING")
        output.writeln("ATTACK YOU WILL BE DEMOTED TO THE RANK OF PRIVATE")
        while True:
            if not galaxy.sector_view.live_raiders():
                output.writeln("")
                output.writeln(f"THERE ARE STILL {galaxy.total_raiders} RAIDER BATTLE CRUISERS")
                return True
            volley = self.counter_fire(galaxy, output)
            if volley.ship_destroyed:
                galaxy.stranded = True
                return False
            if volley.protected:
                return True

    # ========================================================================
    # PHASERS
    # ========================================================================

    def fire_phasers(
        self, galaxy: Galaxy, reader: InputReader, output: OutputWriter
    ) -> CommandResult:
        """
        Fire phasers at every live raider in the quadrant.

        Order of effects:
        1. Committed energy is deducted
        2. Raiders counter-fire (stop here if the ship is destroyed)
        3. Delivered energy is scaled by uniform(0, 1) if the computer is damaged
        4. One factor uniform(0, 2) is drawn per live raider, then each raider
           takes (delivered / live count / distance) * factor
        5. Raiders at or below zero shields are destroyed

        Returns:
            CommandResult; fails with NO_TARGETS, DEVICE_DAMAGED or INVALID_INPUT
        """
        ship = galaxy.ship
        if not galaxy.sector_view.live_raiders():
            output.writeln("SHORT RANGE SENSORS REPORT NO RAIDERS IN THIS QUADRANT")
            return CommandResult.fail(NoTargetsError("NO RAIDERS IN THIS QUADRANT"))

        if ship.is_damaged(Device.PHASER_CONTROL):
            output.writeln("PHASER CONTROL IS DISABLED")
            return CommandResult.fail(
                DeviceDamagedError(Device.PHASER_CONTROL, "PHASER CONTROL IS DISABLED")
            )

        computer_damaged = ship.is_damaged(Device.COMPUTER)
        if computer_damaged:
            output.writeln(" COMPUTER FAILURE HAMPERS ACCURACY")

        output.writeln(f"PHASERS LOCKED ON TARGET.  ENERGY AVAILABLE = {int(ship.energy)}")
        units = read_number(reader, "NUMBER OF UNITS TO FIRE")
        if units is None or units <= 0 or units > ship.energy:
            return CommandResult.fail(
                InvalidInputError(f"PHASER UNITS MUST BE BETWEEN 0 AND {int(ship.energy)}")
            )

        ship.spend_energy(units)
        if self.counter_fire(galaxy, output).ship_destroyed:
            return CommandResult.success("SHIP DESTROYED BEFORE PHASERS FIRED")

        delivered = units * galaxy.rng.random() if computer_damaged else units
        targets = galaxy.sector_view.live_raiders()
        factors = [2 * galaxy.rng.random() for _ in targets]

        hits: List[Hit] = []
        for raider, factor in zip(targets, factors):
            distance = calculate_distance(ship.sector, raider.pos)
            hit = (delivered / len(targets) / distance) * factor
            raider.take_hit(hit)
            hits.append(Hit(ship.sector, raider.pos, hit, raider.shields))
            log.debug("Phaser hit on %s: %.2f, shields now %.2f", raider.pos, hit, raider.shields)

        # Dead raiders leave the grid before any of the volley is reported.
        destroyed = [h.target for h in hits if h.remaining <= 0]
        for pos in destroyed:
            galaxy.destroy_raider_at(pos)

        for h in hits:
            output.writeln(f"{int(h.amount)} UNIT HIT ON RAIDER AT SECTOR {h.target}")
            output.writeln(f"   ({int(max(h.remaining, 0))} LEFT)")
        for _ in destroyed:
            output.writeln("*** RAIDER DESTROYED ***")

        return CommandResult.success(f"{len(destroyed)} RAIDER(S) DESTROYED")

    # ========================================================================
    # PHOTON TORPEDO
    # ========================================================================

    def fire_torpedo(
        self,
        galaxy: Galaxy,
        reader: InputReader,
        output: OutputWriter,
        counter_fire: bool = True,
    ) -> CommandResult:
        """
        Launch one photon torpedo along a course.

        The torpedo is consumed before it flies. It stops at the first
        raider (destroyed), star (absorbed) or starbase (destroyed), or when
        it leaves the quadrant.

        Args:
            galaxy: Game state
            reader: Source of the course
            output: Where the track and result are reported
            counter_fire: Let raiders fire back afterwards

        Returns:
            CommandResult; fails with DEVICE_DAMAGED or INSUFFICIENT_RESOURCES
        """
        ship = galaxy.ship
        if ship.is_damaged(Device.PHOTON_TUBES):
            output.writeln("PHOTON TUBES ARE NOT OPERATIONAL")
            return CommandResult.fail(
                DeviceDamagedError(Device.PHOTON_TUBES, "PHOTON TUBES ARE NOT OPERATIONAL")
            )
        if ship.torpedoes <= 0:
            output.writeln("ALL PHOTON TORPEDOES EXPENDED")
            return CommandResult.fail(
                InsufficientResourcesError("ALL PHOTON TORPEDOES EXPENDED", required=1, available=0)
            )

        course = read_course(reader, "TORPEDO COURSE (1-9)")
        if course is None:
            return CommandResult.success("TORPEDO CANCELLED")

        ship.consume_torpedo()
        message = self._fly_torpedo(galaxy, course, output)

        if counter_fire:
            self.counter_fire(galaxy, output)
        return CommandResult.success(message)

    def _fly_torpedo(self, galaxy: Galaxy, course: float, output: OutputWriter) -> str:
        dx, dy = calculate_direction(course)
        x, y = float(galaxy.ship.sector.x), float(galaxy.ship.sector.y)

        output.writeln("TORPEDO TRACK:")
        while True:
            x += dx
            y += dy
            if not SECTOR_GRID.contains_point(x, y):
                output.writeln("TORPEDO MISSED")
                return "TORPEDO MISSED"

            output.writeln(f"{int(x)},{int(y)}")
            pos = SectorPos(*SECTOR_GRID.cell_at(x, y))
            content = galaxy.sector_view.content_at(pos)

            if content == SectorContent.EMPTY:
                continue
            if content == SectorContent.RAIDER:
                galaxy.destroy_raider_at(pos)
                output.writeln("*** RAIDER DESTROYED ***")
                return "RAIDER DESTROYED"
            if content == SectorContent.OBSTACLE:
                output.writeln("YOU CAN'T DESTROY STARS SILLY")
                return "TORPEDO ABSORBED"
            if content == SectorContent.STARBASE:
                galaxy.destroy_starbase_at(pos)
                output.writeln("*** STAR BASE DESTROYED ***  .......CONGRATULATIONS")
                return "STARBASE DESTROYED"
            return "TORPEDO STOPPED"

