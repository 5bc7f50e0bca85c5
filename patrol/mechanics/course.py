"""
Course arithmetic shared by navigation and torpedoes.

Courses run from 1.0 up to (but excluding) 9.0, counter-clockwise starting
east. Integer courses map to the eight compass unit steps; fractional
courses interpolate linearly between the two bracketing vectors, so the
direction walks the perimeter of a square rather than a circle.

        4  3  2
         \\ | /
      5 -- * -- 1
         / | \\
        6  7  8

Y grows downward on the sector grid, so "north" is dy = -1.
"""

from __future__ import annotations

import math
from typing import Tuple

from ..core.io import InputReader, read_number
from ..core.types import GALAXY_SIZE, SECTOR_SIZE, QuadrantPos, SectorPos

MIN_COURSE = 1.0
MAX_COURSE = 9.0

# Index 0 is unused; course 9 repeats course 1 to close the interpolation range.
COURSE_VECTORS: Tuple[Tuple[float, float], ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (1.0, -1.0),
    (0.0, -1.0),
    (-1.0, -1.0),
    (-1.0, 0.0),
    (-1.0, 1.0),
    (0.0, 1.0),
    (1.0, 1.0),
    (1.0, 0.0),
)


def is_valid_course(course: float) -> bool:
    return MIN_COURSE <= course < MAX_COURSE


def calculate_direction(course: float) -> Tuple[float, float]:
    """
    Per-step (dx, dy) for a course.

    Args:
        course: Heading in [1.0, 9.0)

    Returns:
        Direction vector; one component always has magnitude 1

    Raises:
        ValueError: If the course is out of range
    """
    if not is_valid_course(course):
        raise ValueError(f"Course must be in [{MIN_COURSE}, {MAX_COURSE}), got {course}")
    r = math.floor(course)
    frac = course - r
    x0, y0 = COURSE_VECTORS[r]
    x1, y1 = COURSE_VECTORS[r + 1]
    return x0 + (x1 - x0) * frac, y0 + (y1 - y0) * frac


def calculate_course(dx: float, dy: float) -> float:
    """
    Course whose direction vector points along (dx, dy).

    Exact inverse of calculate_direction on the square perimeter.

    Raises:
        ValueError: If (dx, dy) is the zero vector
    """
    if dx == 0 and dy == 0:
        raise ValueError("Cannot compute a course to the current position")
    ax, ay = abs(dx), abs(dy)
    if dx > 0 and dy <= 0 and ax >= ay:
        return 1 + ay / ax
    if dy < 0 and dx >= 0 and ay >= ax:
        return 3 - ax / ay
    if dy < 0 and dx < 0 and ay >= ax:
        return 3 + ax / ay
    if dx < 0 and dy <= 0 and ax >= ay:
        return 5 - ay / ax
    if dx < 0 and dy > 0 and ax >= ay:
        return 5 + ay / ax
    if dy > 0 and dx <= 0 and ay >= ax:
        return 7 - ax / ay
    if dy > 0 and dx > 0 and ay >= ax:
        return 7 + ax / ay
    return 9 - ay / ax


def calculate_quadrant_crossing(
    quadrant: QuadrantPos,
    sector: SectorPos,
    dx: float,
    dy: float,
    steps: int,
) -> Tuple[QuadrantPos, SectorPos]:
    """
    Where a move of ``steps`` unit steps lands in galaxy terms.

    The move is projected in absolute coordinates (quadrant * 8 + sector).
    A sector that rounds to 0 rolls back to sector 8 of the previous
    quadrant. The result is clamped to the galaxy edge instead of wrapping.

    Args:
        quadrant: Quadrant the move starts in
        sector: Sector the move starts from
        dx: Per-step X component
        dy: Per-step Y component
        steps: Full number of steps requested

    Returns:
        (new quadrant, new sector)
    """
    new_qx, new_sx = _project_axis(quadrant.x, sector.x, dx, steps)
    new_qy, new_sy = _project_axis(quadrant.y, sector.y, dy, steps)
    return QuadrantPos(new_qx, new_qy), SectorPos(new_sx, new_sy)


def _project_axis(quadrant: int, sector: int, delta: float, steps: int) -> Tuple[int, int]:
    absolute = quadrant * SECTOR_SIZE + sector + delta * steps
    new_quadrant = math.floor(absolute / SECTOR_SIZE)
    new_sector = math.floor(absolute - new_quadrant * SECTOR_SIZE + 0.5)
    if new_sector == 0:
        new_quadrant -= 1
        new_sector = SECTOR_SIZE
    new_quadrant = min(max(new_quadrant, 1), GALAXY_SIZE)
    new_sector = min(max(new_sector, 1), SECTOR_SIZE)
    return new_quadrant, new_sector


def read_course(reader: InputReader, prompt: str) -> float | None:
    """
    Prompt until a usable course is entered.

    Unparseable or out-of-range values re-prompt; 0 cancels.

    Returns:
        A course in [1, 9), or None when cancelled
    """
    while True:
        value = read_number(reader, prompt)
        if value is None:
            continue
        if value == 0:
            return None
        if is_valid_course(value):
            return value
