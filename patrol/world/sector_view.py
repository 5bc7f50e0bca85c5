"""
SectorView - live layout of the quadrant the ship currently occupies.

The view is discarded and rebuilt on every quadrant entry; nothing in it is
persisted between visits. Removal of raiders and starbases is driven by the
Galaxy so that the grid, the quadrant record and the global totals change
together.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..core.types import SectorContent, SectorPos
from ..entities.quadrant import QuadrantRecord
from ..entities.raider import Raider
from .grid import SECTOR_GRID


class SectorView:
    """
    8x8 occupancy grid plus the live raiders and starbase it holds.

    Attributes:
        raiders: Live raiders in placement order
        starbase: Starbase sector, if the quadrant has one
    """

    def __init__(self):
        self._cells: Dict[tuple[int, int], SectorContent] = {
            pos: SectorContent.EMPTY for pos in SECTOR_GRID.positions()
        }
        self.raiders: List[Raider] = []
        self.starbase: Optional[SectorPos] = None

    # ========================================================================
    # QUERIES
    # ========================================================================

    def content_at(self, pos: SectorPos) -> SectorContent:
        return self._cells[pos.as_tuple()]

    def is_empty(self, pos: SectorPos) -> bool:
        return self._cells[pos.as_tuple()] == SectorContent.EMPTY

    def live_raiders(self) -> List[Raider]:
        """Alive raiders, in placement order."""
        return [raider for raider in self.raiders if raider.alive]

    def raider_at(self, pos: SectorPos) -> Optional[Raider]:
        for raider in self.raiders:
            if raider.pos == pos:
                return raider
        return None

    def count(self, content: SectorContent) -> int:
        return sum(1 for value in self._cells.values() if value == content)

    def render_row(self, y: int) -> str:
        """One scan line: eight three-character glyphs."""
        return "".join(self._cells[(x, y)].symbol for x in range(1, SECTOR_GRID.size + 1))

    # ========================================================================
    # MUTATION
    # ========================================================================

    def place(self, pos: SectorPos, content: SectorContent) -> None:
        """
        Put ``content`` in an empty cell.

        Raises:
            ValueError: If the cell is already occupied
        """
        if content != SectorContent.EMPTY and not self.is_empty(pos):
            raise ValueError(f"Sector {pos} already holds {self.content_at(pos)}")
        self._cells[pos.as_tuple()] = content

    def clear(self, pos: SectorPos) -> None:
        self._cells[pos.as_tuple()] = SectorContent.EMPTY

    def add_raider(self, raider: Raider) -> None:
        self.place(raider.pos, SectorContent.RAIDER)
        self.raiders.append(raider)

    def remove_raider(self, pos: SectorPos) -> Raider:
        """
        Take the raider at ``pos`` off the grid and out of the raider list.

        Raises:
            ValueError: If no raider occupies ``pos``
        """
        raider = self.raider_at(pos)
        if raider is None or self.content_at(pos) != SectorContent.RAIDER:
            raise ValueError(f"No raider at sector {pos}")
        self.clear(pos)
        self.raiders.remove(raider)
        return raider

    def set_starbase(self, pos: SectorPos) -> None:
        self.place(pos, SectorContent.STARBASE)
        self.starbase = pos

    def remove_starbase(self, pos: SectorPos) -> None:
        """
        Raises:
            ValueError: If the starbase is not at ``pos``
        """
        if self.starbase != pos or self.content_at(pos) != SectorContent.STARBASE:
            raise ValueError(f"No starbase at sector {pos}")
        self.clear(pos)
        self.starbase = None

    def find_random_empty(self, rng: random.Random) -> SectorPos:
        """
        Draw sectors uniformly until an empty one turns up.

        Every rejected draw consumes RNG state.
        """
        while True:
            pos = SectorPos(rng.randint(1, SECTOR_GRID.size), rng.randint(1, SECTOR_GRID.size))
            if self.is_empty(pos):
                return pos

    def __repr__(self) -> str:
        return (
            f"SectorView(raiders={len(self.raiders)}, starbase={self.starbase}, "
            f"obstacles={self.count(SectorContent.OBSTACLE)})"
        )


def populate_sector_view(
    record: QuadrantRecord,
    ship_sector: SectorPos,
    rng: random.Random,
    raider_shields: float = 200.0,
) -> SectorView:
    """
    Build a fresh view for a quadrant.

    The ship is placed first, then raiders, starbases and obstacles, each at
    a random empty sector drawn from ``rng``.

    Args:
        record: Counts for the quadrant being entered
        ship_sector: Where the ship sits
        rng: The galaxy's random stream
        raider_shields: Starting shields for each raider

    Returns:
        A populated SectorView
    """
    view = SectorView()
    view.place(ship_sector, SectorContent.SHIP)

    for _ in range(record.raiders):
        view.add_raider(Raider(view.find_random_empty(rng), raider_shields))

    for _ in range(record.starbases):
        view.set_starbase(view.find_random_empty(rng))

    for _ in range(record.obstacles):
        view.place(view.find_random_empty(rng), SectorContent.OBSTACLE)

    return view
