from pathlib import Path
import random
import sys
from typing import Iterable, List, Optional, Sequence, Tuple

import pytest

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from patrol.core.errors import TransportError
from patrol.core.io import ScriptedIO
from patrol.core.types import SectorContent, SectorPos
from patrol.entities import QuadrantRecord, Raider
from patrol.world import Galaxy, SectorView


class FixedRandom(random.Random):
    """random() always returns the same value; integer draws stay seeded."""

    def __init__(self, value: float, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value

    # Defining getrandbits keeps randint() on the seeded bit stream.
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


class SequenceRandom(random.Random):
    """random() replays a fixed list of values, then repeats the last one."""

    def __init__(self, values: Sequence[float], seed: int = 0):
        super().__init__(seed)
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]

    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


class BrokenOutput(ScriptedIO):
    """Scripted I/O whose writer fails on one particular line."""

    def __init__(self, fail_on: str, responses: Iterable[str] = ()):
        super().__init__(responses)
        self.fail_on = fail_on

    def writeln(self, message: str = "") -> None:
        if message == self.fail_on:
            raise TransportError("output closed")
        super().writeln(message)


def stage_quadrant(
    galaxy: Galaxy,
    ship: Tuple[int, int],
    raiders: Iterable[Tuple[int, int]] = (),
    starbase: Optional[Tuple[int, int]] = None,
    obstacles: Iterable[Tuple[int, int]] = (),
    raider_shields: float = 200.0,
) -> SectorView:
    """
    Replace the current quadrant with a hand-placed layout.

    The quadrant record and galaxy totals are adjusted to match, so the
    bookkeeping stays consistent.
    """
    raiders = list(raiders)
    obstacles = list(obstacles)
    old = galaxy.current_record
    new = QuadrantRecord(len(raiders), 1 if starbase else 0, len(obstacles))
    galaxy._replace_record(galaxy.ship.quadrant, new)
    galaxy.total_raiders += new.raiders - old.raiders
    galaxy.total_starbases += new.starbases - old.starbases
    galaxy.initial_raiders = max(galaxy.initial_raiders, galaxy.total_raiders)

    view = SectorView()
    view.place(SectorPos(*ship), SectorContent.SHIP)
    for pos in raiders:
        view.add_raider(Raider(SectorPos(*pos), raider_shields))
    if starbase is not None:
        view.set_starbase(SectorPos(*starbase))
    for pos in obstacles:
        view.place(SectorPos(*pos), SectorContent.OBSTACLE)

    galaxy.sector_view = view
    galaxy.ship.move_to(galaxy.ship.quadrant, SectorPos(*ship))
    return view


def ensure_raider_elsewhere(galaxy: Galaxy) -> None:
    """Make sure at least one raider exists outside the current quadrant."""
    here = galaxy.ship.quadrant
    for y in range(1, 9):
        for x in range(1, 9):
            if (x, y) != here.as_tuple() and galaxy.record_at(x, y).raiders > 0:
                return
    x = 1 if here.x != 1 else 2
    record = galaxy.record_at(x, 1)
    galaxy._replace_record(
        type(here)(x, 1), QuadrantRecord(1, record.starbases, record.obstacles)
    )
    galaxy.total_raiders += 1
    galaxy.initial_raiders = max(galaxy.initial_raiders, galaxy.total_raiders)


def assert_counts_consistent(galaxy: Galaxy) -> None:
    """Grid, quadrant records and totals all agree."""
    records = galaxy.all_records()
    assert sum(r.raiders for r in records) == galaxy.total_raiders
    assert sum(r.starbases for r in records) == galaxy.total_starbases

    view = galaxy.sector_view
    record = galaxy.current_record
    assert view.count(SectorContent.RAIDER) == record.raiders
    assert len(view.live_raiders()) == record.raiders
    assert view.count(SectorContent.STARBASE) == record.starbases
    assert view.count(SectorContent.SHIP) == 1


@pytest.fixture
def galaxy() -> Galaxy:
    return Galaxy(42)
