from __future__ import annotations

from dataclasses import dataclass

from ..core.types import SectorPos


@dataclass
class Raider:
    """
    Hostile cruiser in the current quadrant.

    Attributes:
        pos: Sector the raider occupies
        shields: Remaining shield energy; the raider is alive while positive
    """
    pos: SectorPos
    shields: float = 200.0

    @property
    def alive(self) -> bool:
        return self.shields > 0

    def take_hit(self, hit: float) -> None:
        self.shields -= hit

    def __str__(self) -> str:
        return f"Raider@{self.pos}({int(self.shields)})"
