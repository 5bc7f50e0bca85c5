"""
Grid - Spatial logic shared by the galaxy and sector levels.

The Grid handles:
- Coordinate validation (integer cells and continuous travel positions)
- Distance calculations
- Neighbourhood enumeration

Coordinate System:
- Cells are addressed 1..size on both axes
- X increases to the RIGHT, Y increases DOWNWARD (row 1 printed first)
- A continuous position (x, y) lies inside the grid when 0.5 <= v < size + 0.5
  and belongs to the cell floor(v + 0.5)
"""

from __future__ import annotations
import math
from typing import Iterator, List, Optional, Tuple

from ..core.types import GALAXY_SIZE, SECTOR_SIZE, GridPos, SectorPos


class Grid:
    """
    A square grid with 1-based integer cells.

    Provides spatial queries and calculations without game logic or state.

    Attributes:
        size: Number of cells along each axis
    """

    def __init__(self, size: int):
        """
        Initialize a grid.

        Args:
            size: Cells per axis (must be positive)

        Raises:
            ValueError: If size is invalid
        """
        if size <= 0:
            raise ValueError(f"Grid size must be positive: {size}")
        self.size = size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether integer cell (x, y) lies on the grid."""
        return 1 <= x <= self.size and 1 <= y <= self.size

    def contains_point(self, x: float, y: float) -> bool:
        """
        Check whether a continuous travel position is still inside the grid.

        Args:
            x: Continuous X coordinate
            y: Continuous Y coordinate

        Returns:
            True while 0.5 <= x, y < size + 0.5
        """
        upper = self.size + 0.5
        return 0.5 <= x < upper and 0.5 <= y < upper

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        """Integer cell that a continuous position rounds to."""
        return math.floor(x + 0.5), math.floor(y + 0.5)

    def distance(self, a: GridPos, b: GridPos) -> float:
        """
        Calculate Euclidean distance between two cells.

        Args:
            a: First position
            b: Second position

        Returns:
            Euclidean distance as a float
        """
        return math.hypot(a.x - b.x, a.y - b.y)

    def chebyshev_distance(self, a: GridPos, b: GridPos) -> int:
        """King-move distance; 1 means the cells touch, diagonals included."""
        return max(abs(a.x - b.x), abs(a.y - b.y))

    def positions(self) -> Iterator[Tuple[int, int]]:
        """All cells in row-major order (y outer, x inner)."""
        for y in range(1, self.size + 1):
            for x in range(1, self.size + 1):
                yield x, y

    def neighborhood(self, center: GridPos) -> List[List[Optional[Tuple[int, int]]]]:
        """
        The 3x3 block of cells centred on ``center``.

        Cells that fall off the grid are returned as None so callers can
        render them as unknown.

        Returns:
            Three rows (top to bottom) of three cells (left to right)
        """
        rows: List[List[Optional[Tuple[int, int]]]] = []
        for dy in (-1, 0, 1):
            row: List[Optional[Tuple[int, int]]] = []
            for dx in (-1, 0, 1):
                x, y = center.x + dx, center.y + dy
                row.append((x, y) if self.in_bounds(x, y) else None)
            rows.append(row)
        return rows

    def __str__(self) -> str:
        return f"Grid({self.size}x{self.size})"

    def __repr__(self) -> str:
        return f"Grid(size={self.size})"


GALAXY_GRID = Grid(GALAXY_SIZE)
SECTOR_GRID = Grid(SECTOR_SIZE)


def calculate_distance(a: SectorPos, b: SectorPos) -> float:
    """Euclidean distance between two sectors."""
    return SECTOR_GRID.distance(a, b)
