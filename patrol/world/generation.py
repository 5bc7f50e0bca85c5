"""
Procedural galaxy generation.

All draws come from the caller's random stream in a fixed order so that a
seed reproduces the same galaxy:
1. starting stardate
2. three draws per quadrant, row-major, repeated until the galaxy holds at
   least one raider and one starbase
3. ship quadrant (x, y) then ship sector (x, y)
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List

from infra.logger import get_logger

from ..core.types import GALAXY_SIZE, SECTOR_SIZE, QuadrantPos, SectorPos
from ..entities.quadrant import QuadrantRecord

log = get_logger(__name__)

QuadrantTable = List[List[QuadrantRecord]]


@dataclass
class GeneratedGalaxy:
    """Raw output of generation, before the first quadrant is entered."""
    starting_stardate: float
    quadrants: QuadrantTable
    ship_quadrant: QuadrantPos
    ship_sector: SectorPos
    attempts: int = 1


def draw_starting_stardate(rng: random.Random) -> float:
    return math.floor(rng.random() * 20 + 20) * 100


def draw_raider_count(rng: random.Random) -> int:
    value = rng.random()
    if value > 0.98:
        return 3
    if value > 0.95:
        return 2
    if value > 0.80:
        return 1
    return 0


def draw_starbase_count(rng: random.Random) -> int:
    return 1 if rng.random() > 0.96 else 0


def draw_obstacle_count(rng: random.Random) -> int:
    return math.floor(rng.random() * 8 + 1)


def draw_quadrant_table(rng: random.Random) -> QuadrantTable:
    """One full draw of the 8x8 table, indexed [y-1][x-1]."""
    table: QuadrantTable = []
    for _y in range(GALAXY_SIZE):
        row: List[QuadrantRecord] = []
        for _x in range(GALAXY_SIZE):
            raiders = draw_raider_count(rng)
            starbases = draw_starbase_count(rng)
            obstacles = draw_obstacle_count(rng)
            row.append(QuadrantRecord(raiders, starbases, obstacles))
        table.append(row)
    return table


def table_totals(table: QuadrantTable) -> tuple[int, int]:
    """(total raiders, total starbases) across the table."""
    raiders = sum(record.raiders for row in table for record in row)
    starbases = sum(record.starbases for row in table for record in row)
    return raiders, starbases


def generate_quadrants(rng: random.Random) -> tuple[QuadrantTable, int]:
    """
    Draw quadrant tables until one has a raider and a starbase.

    Rejected tables are discarded whole; their draws are not reused.

    Returns:
        The accepted table and the number of attempts it took
    """
    attempts = 0
    while True:
        attempts += 1
        table = draw_quadrant_table(rng)
        raiders, starbases = table_totals(table)
        if raiders > 0 and starbases > 0:
            return table, attempts
        log.debug(
            "Rejected galaxy draw %d (raiders=%d, starbases=%d)", attempts, raiders, starbases
        )


def generate_galaxy(rng: random.Random) -> GeneratedGalaxy:
    """
    Run the full generation sequence on ``rng``.

    Args:
        rng: The galaxy's random stream

    Returns:
        GeneratedGalaxy with the stardate, quadrant table and ship position
    """
    starting_stardate = draw_starting_stardate(rng)
    quadrants, attempts = generate_quadrants(rng)
    ship_quadrant = QuadrantPos(rng.randint(1, GALAXY_SIZE), rng.randint(1, GALAXY_SIZE))
    ship_sector = SectorPos(rng.randint(1, SECTOR_SIZE), rng.randint(1, SECTOR_SIZE))
    return GeneratedGalaxy(
        starting_stardate=starting_stardate,
        quadrants=quadrants,
        ship_quadrant=ship_quadrant,
        ship_sector=ship_sector,
        attempts=attempts,
    )
