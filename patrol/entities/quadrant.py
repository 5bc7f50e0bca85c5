"""
Persistent per-quadrant summary.

A QuadrantRecord survives across visits; the sector-level layout does not.
Records are immutable values: the Galaxy swaps in a new record when an
entity in the quadrant is destroyed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

MAX_RAIDERS = 3
MAX_STARBASES = 1
MAX_OBSTACLES = 8


@dataclass(frozen=True)
class QuadrantRecord:
    """
    Counts of what a quadrant contains.

    Attributes:
        raiders: Live raiders (0..3)
        starbases: Starbases (0..1)
        obstacles: Stars (1..8 at generation)
    """
    raiders: int = 0
    starbases: int = 0
    obstacles: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.raiders <= MAX_RAIDERS:
            raise ValueError(f"raiders must be in 0..{MAX_RAIDERS}, got {self.raiders}")
        if not 0 <= self.starbases <= MAX_STARBASES:
            raise ValueError(f"starbases must be in 0..{MAX_STARBASES}, got {self.starbases}")
        if not 0 <= self.obstacles <= MAX_OBSTACLES:
            raise ValueError(f"obstacles must be in 0..{MAX_OBSTACLES}, got {self.obstacles}")

    @property
    def encoded(self) -> int:
        """Scan code: raiders*100 + starbases*10 + obstacles."""
        return self.raiders * 100 + self.starbases * 10 + self.obstacles

    def display(self) -> str:
        """Three-digit scan code as shown on sensor readouts."""
        return f"{self.encoded:03d}"

    def without_raider(self) -> QuadrantRecord:
        return replace(self, raiders=self.raiders - 1)

    def without_starbase(self) -> QuadrantRecord:
        return replace(self, starbases=0)
