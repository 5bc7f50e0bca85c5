"""
Galaxy - Central game state.

The Galaxy is the aggregate every command operates on. It owns:
- The 8x8 quadrant table and the running raider/starbase totals
- The ship, the live sector view and the scan memory
- Stardate bookkeeping
- The single random stream used for every stochastic decision

Raiders and starbases are counted in three places (sector grid, quadrant
record, global total). They are only ever removed through
``destroy_raider_at`` and ``destroy_starbase_at``, which validate first and
then update all three together.
"""

from __future__ import annotations

import random
from typing import List, Optional

from infra.logger import get_logger

from ..config import GameSettings
from ..core.io import OutputWriter
from ..core.types import Condition, Device, QuadrantPos, SectorContent, SectorPos
from ..entities.quadrant import QuadrantRecord
from ..entities.raider import Raider
from ..entities.ship import Ship
from .generation import QuadrantTable, generate_galaxy
from .grid import GALAXY_GRID, SECTOR_GRID
from .scan_memory import ScanMemory
from .sector_view import SectorView, populate_sector_view

log = get_logger(__name__)

MAX_SEED = 2**64 - 1


class Galaxy:
    """
    The mutable game state for one playthrough.

    Attributes:
        settings: Game tuning values
        seed: Seed the random stream was created from
        rng: Shared random stream (tests may replace it)
        ship: The player's ship
        sector_view: Layout of the current quadrant
        scan_memory: What the ship knows about other quadrants
        stardate: Current stardate
        starting_stardate: Stardate at launch
        mission_duration: Stardates available for the mission
        stranded: Set when the ship was destroyed while dead in space
    """

    def __init__(self, seed: Optional[int] = None, settings: Optional[GameSettings] = None):
        """
        Generate a new galaxy.

        Args:
            seed: Unsigned 64-bit seed; None seeds from system entropy
            settings: Game tuning values (defaults when omitted)

        Raises:
            ValueError: If the seed is outside 0..2**64-1
        """
        if seed is not None and not 0 <= seed <= MAX_SEED:
            raise ValueError(f"Seed must be in 0..{MAX_SEED}, got {seed}")

        self.settings = settings or GameSettings()
        self.seed = seed
        self.rng = random.Random(seed)

        generated = generate_galaxy(self.rng)
        self.stardate: float = generated.starting_stardate
        self.starting_stardate: float = generated.starting_stardate
        self.mission_duration: int = self.settings.mission_duration
        self._quadrants: QuadrantTable = generated.quadrants

        self.total_raiders: int = sum(r.raiders for row in self._quadrants for r in row)
        self.initial_raiders: int = self.total_raiders
        self.total_starbases: int = sum(r.starbases for row in self._quadrants for r in row)

        self.ship = Ship(
            generated.ship_quadrant,
            generated.ship_sector,
            energy=self.settings.initial_energy,
            shields=self.settings.initial_shields,
            torpedoes=self.settings.initial_torpedoes,
        )
        self.scan_memory = ScanMemory()
        self.sector_view = SectorView()
        self.stranded = False

        log.info(
            "Galaxy generated seed=%s attempts=%d raiders=%d starbases=%d stardate=%d",
            seed,
            generated.attempts,
            self.total_raiders,
            self.total_starbases,
            self.stardate,
        )

        self.enter_quadrant()
        self.record_quadrant(self.ship.quadrant.x, self.ship.quadrant.y)

    # ========================================================================
    # QUADRANT RECORDS
    # ========================================================================

    def quadrant_record(self, quadrant: QuadrantPos) -> QuadrantRecord:
        return self._quadrants[quadrant.y - 1][quadrant.x - 1]

    def record_at(self, x: int, y: int) -> QuadrantRecord:
        """Record for quadrant (x, y); both must be in 1..8."""
        return self._quadrants[y - 1][x - 1]

    @property
    def current_record(self) -> QuadrantRecord:
        return self.quadrant_record(self.ship.quadrant)

    def all_records(self) -> List[QuadrantRecord]:
        """Every quadrant record in row-major order."""
        return [record for row in self._quadrants for record in row]

    def _replace_record(self, quadrant: QuadrantPos, record: QuadrantRecord) -> None:
        self._quadrants[quadrant.y - 1][quadrant.x - 1] = record

    # ========================================================================
    # QUADRANT ENTRY AND SCAN MEMORY
    # ========================================================================

    def enter_quadrant(self) -> None:
        """Rebuild the sector view for the ship's current quadrant."""
        self.sector_view = populate_sector_view(
            self.current_record,
            self.ship.sector,
            self.rng,
            raider_shields=self.settings.raider_shields,
        )
        log.info(
            "Entered quadrant %s at sector %s (%r)",
            self.ship.quadrant,
            self.ship.sector,
            self.sector_view,
        )

    def combat_area_alert(self) -> bool:
        """Raiders present while shields are at or below the warning level."""
        return (
            bool(self.sector_view.live_raiders())
            and self.ship.shields <= self.settings.low_shield_threshold
        )

    def report_combat_area(self, output: OutputWriter) -> bool:
        """Warn about low shields in a quadrant with raiders; True if warned."""
        if not self.combat_area_alert():
            return False
        output.writeln("COMBAT AREA      CONDITION RED")
        output.writeln("   SHIELDS DANGEROUSLY LOW")
        return True

    def record_quadrant(self, x: int, y: int) -> bool:
        """
        Copy quadrant (x, y) into scan memory.

        Nothing is stored while the computer is damaged or when the
        coordinates lie off the galaxy.

        Returns:
            True when a snapshot was stored
        """
        if self.ship.is_damaged(Device.COMPUTER) or not GALAXY_GRID.in_bounds(x, y):
            return False
        return self.scan_memory.record(x, y, self.record_at(x, y))

    # ========================================================================
    # ATOMIC DESTRUCTION
    # ========================================================================

    def destroy_raider_at(self, pos: SectorPos) -> Raider:
        """
        Remove the raider at ``pos`` from the grid, the quadrant record and
        the global total in one step.

        Raises:
            ValueError: If no raider is at ``pos`` or the counters disagree;
                        nothing is changed in that case
        """
        raider = self.sector_view.raider_at(pos)
        record = self.current_record
        if raider is None or self.sector_view.content_at(pos) != SectorContent.RAIDER:
            raise ValueError(f"No raider at sector {pos}")
        if record.raiders <= 0 or self.total_raiders <= 0:
            raise ValueError(
                f"Raider counters out of step in quadrant {self.ship.quadrant}: "
                f"record={record.raiders} total={self.total_raiders}"
            )

        self.sector_view.remove_raider(pos)
        self._replace_record(self.ship.quadrant, record.without_raider())
        self.total_raiders -= 1
        log.info(
            "Raider destroyed at %s/%s, %d remaining", self.ship.quadrant, pos, self.total_raiders
        )
        return raider

    def destroy_starbase_at(self, pos: SectorPos) -> None:
        """
        Remove the starbase at ``pos`` from the grid, the quadrant record and
        the global total in one step.

        Raises:
            ValueError: If the starbase is not at ``pos`` or the counters
                        disagree; nothing is changed in that case
        """
        record = self.current_record
        if self.sector_view.starbase != pos or self.sector_view.content_at(pos) != SectorContent.STARBASE:
            raise ValueError(f"No starbase at sector {pos}")
        if record.starbases <= 0 or self.total_starbases <= 0:
            raise ValueError(
                f"Starbase counters out of step in quadrant {self.ship.quadrant}: "
                f"record={record.starbases} total={self.total_starbases}"
            )

        self.sector_view.remove_starbase(pos)
        self._replace_record(self.ship.quadrant, record.without_starbase())
        self.total_starbases -= 1
        log.info(
            "Starbase destroyed at %s/%s, %d remaining",
            self.ship.quadrant,
            pos,
            self.total_starbases,
        )

    # ========================================================================
    # SHIP MOVEMENT
    # ========================================================================

    def move_ship(self, sector: SectorPos) -> None:
        """
        Relocate the ship within the current quadrant.

        Raises:
            ValueError: If ``sector`` is occupied by something else
        """
        if sector != self.ship.sector and not self.sector_view.is_empty(sector):
            raise ValueError(f"Sector {sector} is occupied")
        self.sector_view.clear(self.ship.sector)
        self.sector_view.place(sector, SectorContent.SHIP)
        self.ship.move_to(self.ship.quadrant, sector)

    def warp_to(self, quadrant: QuadrantPos, sector: SectorPos) -> None:
        """Move the ship into another quadrant, rebuild the view and record it."""
        self.ship.move_to(quadrant, sector)
        self.enter_quadrant()
        self.record_quadrant(quadrant.x, quadrant.y)

    # ========================================================================
    # STATUS
    # ========================================================================

    def is_docking_position(self) -> bool:
        starbase = self.sector_view.starbase
        return starbase is not None and SECTOR_GRID.chebyshev_distance(self.ship.sector, starbase) <= 1

    def check_docking(self, output: Optional[OutputWriter] = None) -> bool:
        """
        Dock when the ship sits next to a starbase.

        Docking restores energy, torpedoes and shields to launch values.

        Returns:
            True when the ship docked
        """
        if not self.is_docking_position():
            return False
        self.ship.dock(
            self.settings.initial_energy,
            self.settings.initial_torpedoes,
            self.settings.initial_shields,
        )
        log.debug("Docked at starbase %s", self.sector_view.starbase)
        if output is not None:
            output.writeln("SHIELDS DROPPED FOR DOCKING PURPOSES")
        return True

    def evaluate_condition(self) -> Condition:
        if self.is_docking_position():
            return Condition.DOCKED
        if self.sector_view.live_raiders():
            return Condition.RED
        if self.ship.energy < self.settings.initial_energy * 0.1:
            return Condition.YELLOW
        return Condition.GREEN

    def advance_time(self, stardates: float = 1) -> None:
        self.stardate += stardates

    @property
    def stardates_left(self) -> float:
        return self.starting_stardate + self.mission_duration - self.stardate

    def is_time_expired(self) -> bool:
        return self.stardate > self.starting_stardate + self.mission_duration

    def all_raiders_destroyed(self) -> bool:
        return self.total_raiders == 0

    def efficiency_rating(self) -> int:
        """
        Score for a won mission: initial raiders per stardate, times 1000.

        A mission won without any stardate elapsing is scored as if one had.
        """
        elapsed = max(self.stardate - self.starting_stardate, 1)
        return int(self.initial_raiders / elapsed * 1000)

    def __repr__(self) -> str:
        return (
            f"Galaxy(seed={self.seed}, stardate={self.stardate}, "
            f"raiders={self.total_raiders}, starbases={self.total_starbases}, "
            f"ship={self.ship.quadrant}/{self.ship.sector})"
        )
