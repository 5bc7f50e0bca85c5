"""
ScanMemory - the ship's accumulated knowledge of the galaxy.

Each quadrant is either unknown or holds the record as it was last seen.
Entries are overwritten with fresher snapshots but never cleared.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple

from ..entities.quadrant import QuadrantRecord
from .grid import GALAXY_GRID


class ScanMemory:
    """Last-known QuadrantRecord per quadrant, or None when never seen."""

    def __init__(self):
        self._known: Dict[Tuple[int, int], QuadrantRecord] = {}

    def record(self, x: int, y: int, snapshot: QuadrantRecord) -> bool:
        """
        Store a snapshot for quadrant (x, y).

        Returns:
            False when the coordinates are off the galaxy and nothing was stored
        """
        if not GALAXY_GRID.in_bounds(x, y):
            return False
        self._known[(x, y)] = snapshot
        return True

    def get(self, x: int, y: int) -> Optional[QuadrantRecord]:
        return self._known.get((x, y))

    def is_known(self, x: int, y: int) -> bool:
        return (x, y) in self._known

    @property
    def known_count(self) -> int:
        return len(self._known)

    def __repr__(self) -> str:
        return f"ScanMemory(known={self.known_count})"
