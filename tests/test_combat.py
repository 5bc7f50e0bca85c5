import pytest

from conftest import BrokenOutput, FixedRandom, SequenceRandom, assert_counts_consistent, stage_quadrant
from patrol.core.errors import TransportError
from patrol.core.io import ScriptedIO
from patrol.core.types import Device, SectorContent, SectorPos
from patrol.mechanics import CombatResolver


@pytest.fixture
def combat():
    return CombatResolver()


# ----------------------------------------------------------------------------
# Phasers
# ----------------------------------------------------------------------------

def test_phasers_destroy_weak_raider_at_point_blank(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(5, 4)], raider_shields=10)
    galaxy.ship.shields = 500
    galaxy.rng = FixedRandom(0.75)
    total = galaxy.total_raiders
    io = ScriptedIO(["100"])

    result = combat.fire_phasers(galaxy, io, io)

    assert result.ok
    assert galaxy.sector_view.content_at(SectorPos(5, 4)) == SectorContent.EMPTY
    assert galaxy.sector_view.raiders == []
    assert galaxy.current_record.raiders == 0
    assert galaxy.total_raiders == total - 1
    assert galaxy.ship.energy == 2900
    assert "150 UNIT HIT ON RAIDER AT SECTOR 5,4" in io.lines
    assert "*** RAIDER DESTROYED ***" in io.lines
    assert_counts_consistent(galaxy)


def test_counter_fire_resolves_before_phaser_damage(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(5, 4)], raider_shields=10)
    galaxy.ship.shields = 10
    galaxy.rng = FixedRandom(0.75)
    io = ScriptedIO(["100"])

    result = combat.fire_phasers(galaxy, io, io)

    # Counter-fire hits for 15 and destroys the ship before phasers land.
    assert result.ok
    assert galaxy.ship.shields == pytest.approx(-5)
    assert len(galaxy.sector_view.live_raiders()) == 1
    assert galaxy.sector_view.raiders[0].shields == 10
    assert galaxy.ship.energy == 2900


def test_phaser_energy_split_and_scaled_by_distance(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(1, 3), (5, 1)])
    galaxy.ship.shields = 1000
    galaxy.rng = FixedRandom(0.5)
    io = ScriptedIO(["400"])

    combat.fire_phasers(galaxy, io, io)

    near, far = galaxy.sector_view.raiders
    # 400 / 2 raiders / distance * factor 1.0
    assert near.shields == pytest.approx(200 - 100)
    assert far.shields == pytest.approx(200 - 50)


def test_damaged_computer_degrades_phasers(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(2, 1)])
    galaxy.ship.shields = 1000
    galaxy.ship.damage_device(Device.COMPUTER, 1)
    # counter-fire factor, accuracy fraction, per-raider factor
    galaxy.rng = SequenceRandom([0.0, 0.25, 0.5])
    io = ScriptedIO(["100"])

    combat.fire_phasers(galaxy, io, io)

    assert " COMPUTER FAILURE HAMPERS ACCURACY" in io.lines
    assert galaxy.sector_view.raiders[0].shields == pytest.approx(200 - 25)


def test_phasers_without_targets(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1))
    io = ScriptedIO()

    result = combat.fire_phasers(galaxy, io, io)

    assert not result.ok
    assert result.error_code == "NO_TARGETS"
    assert galaxy.ship.energy == 3000


def test_phasers_with_damaged_control(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(3, 3)])
    galaxy.ship.damage_device(Device.PHASER_CONTROL, 2)
    io = ScriptedIO()

    result = combat.fire_phasers(galaxy, io, io)

    assert result.error_code == "DEVICE_DAMAGED"
    assert result.error.device == Device.PHASER_CONTROL
    assert "PHASER CONTROL IS DISABLED" in io.lines


@pytest.mark.parametrize("units", ["abc", "0", "-5", "3001"])
def test_phasers_reject_bad_energy_without_changes(galaxy, combat, units):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(3, 3)])
    shields_before = galaxy.ship.shields
    io = ScriptedIO([units])

    result = combat.fire_phasers(galaxy, io, io)

    assert result.error_code == "INVALID_INPUT"
    assert galaxy.ship.energy == 3000
    assert galaxy.ship.shields == shields_before
    assert galaxy.sector_view.raiders[0].shields == 200


def test_transport_failure_leaves_state_untouched(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(3, 3)])
    io = ScriptedIO()

    with pytest.raises(TransportError):
        combat.fire_phasers(galaxy, io, io)

    assert galaxy.ship.energy == 3000
    assert_counts_consistent(galaxy)


def test_failed_report_still_removes_dead_raiders(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(5, 4), (3, 4)], raider_shields=10)
    galaxy.ship.shields = 500
    galaxy.rng = FixedRandom(0.75)
    total = galaxy.total_raiders
    io = BrokenOutput("*** RAIDER DESTROYED ***", ["100"])

    with pytest.raises(TransportError):
        combat.fire_phasers(galaxy, io, io)

    assert galaxy.sector_view.content_at(SectorPos(5, 4)) == SectorContent.EMPTY
    assert galaxy.sector_view.content_at(SectorPos(3, 4)) == SectorContent.EMPTY
    assert galaxy.current_record.raiders == 0
    assert galaxy.total_raiders == total - 2
    assert "75 UNIT HIT ON RAIDER AT SECTOR 3,4" in io.lines
    assert_counts_consistent(galaxy)


# ----------------------------------------------------------------------------
# Counter-fire
# ----------------------------------------------------------------------------

def test_counter_fire_formula(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(1, 3), (1, 5)])
    galaxy.ship.shields = 500
    galaxy.rng = FixedRandom(0.5)
    io = ScriptedIO()

    volley = combat.counter_fire(galaxy, io)

    assert [hit.amount for hit in volley.hits] == pytest.approx([100, 50])
    assert galaxy.ship.shields == pytest.approx(350)
    assert not volley.ship_destroyed
    assert "100 UNIT HIT ON SHIP FROM SECTOR 1,3" in io.lines


def test_counter_fire_blocked_next_to_starbase(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(8, 8)], starbase=(4, 5))
    galaxy.ship.shields = 0
    io = ScriptedIO()

    volley = combat.counter_fire(galaxy, io)

    assert volley.protected
    assert galaxy.ship.shields == 0
    assert "STAR BASE SHIELDS PROTECT THE SHIP" in io.lines


def test_counter_fire_reports_destruction(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(2, 1)])
    galaxy.ship.shields = 100
    galaxy.rng = FixedRandom(0.5)

    assert combat.counter_fire(galaxy, ScriptedIO()).ship_destroyed
    assert galaxy.ship.shields == pytest.approx(-100)


# ----------------------------------------------------------------------------
# Photon torpedoes
# ----------------------------------------------------------------------------

def test_torpedo_absorbed_by_obstacle_in_front_of_raider(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(6, 4)], obstacles=[(5, 4)])
    galaxy.ship.shields = 1000
    total = galaxy.total_raiders
    io = ScriptedIO(["1"])

    result = combat.fire_torpedo(galaxy, io, io)

    assert result.ok
    assert result.message == "TORPEDO ABSORBED"
    assert galaxy.sector_view.content_at(SectorPos(5, 4)) == SectorContent.OBSTACLE
    assert galaxy.sector_view.content_at(SectorPos(6, 4)) == SectorContent.RAIDER
    assert galaxy.sector_view.raiders[0].alive
    assert galaxy.total_raiders == total
    assert galaxy.ship.torpedoes == 9
    assert "YOU CAN'T DESTROY STARS SILLY" in io.lines
    assert_counts_consistent(galaxy)


def test_torpedo_destroys_first_raider_on_track(galaxy, combat):
    stage_quadrant(galaxy, ship=(4, 4), raiders=[(4, 2), (4, 1)])
    galaxy.ship.shields = 1000
    total = galaxy.total_raiders
    io = ScriptedIO(["3"])

    result = combat.fire_torpedo(galaxy, io, io)

    assert result.message == "RAIDER DESTROYED"
    assert io.lines[io.lines.index("TORPEDO TRACK:") + 1 : io.lines.index("TORPEDO TRACK:") + 3] == [
        "4,3",
        "4,2",
    ]
    assert [r.pos for r in galaxy.sector_view.raiders] == [SectorPos(4, 1)]
    assert galaxy.total_raiders == total - 1
    assert_counts_consistent(galaxy)


def test_torpedo_destroys_starbase(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), starbase=(3, 3))
    total = galaxy.total_starbases
    io = ScriptedIO(["8"])

    result = combat.fire_torpedo(galaxy, io, io)

    assert result.message == "STARBASE DESTROYED"
    assert galaxy.total_starbases == total - 1
    assert galaxy.current_record.starbases == 0
    assert galaxy.sector_view.starbase is None
    assert_counts_consistent(galaxy)


def test_torpedo_leaving_quadrant_misses(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1))
    io = ScriptedIO(["5"])

    result = combat.fire_torpedo(galaxy, io, io)

    assert result.message == "TORPEDO MISSED"
    assert "TORPEDO MISSED" in io.lines
    assert galaxy.ship.torpedoes == 9


def test_torpedo_followed_by_counter_fire_unless_disabled(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(3, 3)])
    galaxy.ship.shields = 500
    galaxy.rng = FixedRandom(0.5)

    combat.fire_torpedo(galaxy, ScriptedIO(["5"]), ScriptedIO(), counter_fire=False)
    assert galaxy.ship.shields == 500

    combat.fire_torpedo(galaxy, ScriptedIO(["5"]), ScriptedIO())
    assert galaxy.ship.shields < 500


def test_torpedo_course_reprompts_and_cancel_keeps_torpedo(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1))
    io = ScriptedIO(["x", "10", "0"])

    result = combat.fire_torpedo(galaxy, io, io)

    assert result.ok
    assert galaxy.ship.torpedoes == 10
    assert io.pending == 0


def test_torpedo_preconditions(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1))
    galaxy.ship.torpedoes = 0
    result = combat.fire_torpedo(galaxy, ScriptedIO(), ScriptedIO())
    assert result.error_code == "INSUFFICIENT_RESOURCES"

    galaxy.ship.torpedoes = 5
    galaxy.ship.damage_device(Device.PHOTON_TUBES, 1)
    result = combat.fire_torpedo(galaxy, ScriptedIO(), ScriptedIO())
    assert result.error_code == "DEVICE_DAMAGED"
    assert galaxy.ship.torpedoes == 5


# ----------------------------------------------------------------------------
# Stranded contingency
# ----------------------------------------------------------------------------

def test_stranded_without_raiders_survives(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1))
    galaxy.ship.energy = 0
    galaxy.ship.shields = 0
    io = ScriptedIO()

    assert combat.resolve_stranded(galaxy, io)
    assert not galaxy.stranded
    assert galaxy.ship.shields == 0


def test_stranded_under_fire_is_destroyed(galaxy, combat):
    stage_quadrant(galaxy, ship=(1, 1), raiders=[(2, 1)])
    galaxy.ship.energy = 0
    galaxy.ship.shields = 0
    galaxy.rng = FixedRandom(0.5)

    assert not combat.resolve_stranded(galaxy, ScriptedIO())
    assert galaxy.stranded
    assert galaxy.ship.shields < 0
