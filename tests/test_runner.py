import logging

import pytest

import game_runner
from conftest import FixedRandom, stage_quadrant
from patrol import Command, GameEngine, ScriptedIO
from patrol.core.types import DefeatReason, GameStatus, QuadrantPos
from patrol.entities import QuadrantRecord
from patrol.mechanics.sensors import SRS_BORDER
from runtime import GameRunner


def make_runner(*responses, seed=42):
    io = ScriptedIO(responses)
    return GameRunner(seed, io, io), io


def leave_single_raider(galaxy, ship, raider):
    """Empty the galaxy of raiders except one placed next to the ship."""
    for y in range(1, 9):
        for x in range(1, 9):
            record = galaxy.record_at(x, y)
            galaxy._replace_record(
                QuadrantPos(x, y), QuadrantRecord(0, record.starbases, record.obstacles)
            )
    galaxy.total_raiders = 0
    stage_quadrant(galaxy, ship=ship, raiders=[raider])


# ----------------------------------------------------------------------------
# Session loop
# ----------------------------------------------------------------------------

def test_briefing_scan_and_quit():
    runner, io = make_runner("Q")
    galaxy = runner.galaxy

    outcome = runner.run()

    assert outcome.status == GameStatus.PLAYING
    assert runner.done
    assert io.lines[0].startswith(f"YOU MUST DESTROY {galaxy.total_raiders} RAIDERS IN 30 STARDATES")
    assert SRS_BORDER in io.lines
    assert io.lines[-1] == "GOODBYE, CAPTAIN."


def test_unknown_command_prints_menu():
    runner, io = make_runner("X", "q")

    runner.run()

    assert "   0 = SET COURSE" in io.lines
    assert "   Q = RESIGN COMMAND" in io.lines
    assert io.lines[-1] == "GOODBYE, CAPTAIN."


def test_closed_input_abandons_mission():
    runner, io = make_runner("2")

    outcome = runner.run()

    assert runner.done
    assert outcome.status == GameStatus.PLAYING
    assert io.lines[-1] == "INPUT CLOSED, MISSION ABANDONED"


def test_torpedo_on_last_raider_wins():
    runner, io = make_runner("4", "1")
    galaxy = runner.galaxy
    leave_single_raider(galaxy, ship=(4, 4), raider=(5, 4))
    expected = galaxy.initial_raiders * 1000

    outcome = runner.run()

    assert outcome.status == GameStatus.VICTORY
    assert outcome.rating == expected
    assert "THE FEDERATION HAS BEEN SAVED !!!" in io.lines
    assert f"YOUR EFFICIENCY RATING = {expected}" in io.lines
    assert io.pending == 0


def test_shield_request_is_retried_until_it_fits():
    runner, io = make_runner("5", "5000", "1000", "Q")

    runner.run()

    assert "SHIP ENERGY INSUFFICIENT" in io.lines
    assert runner.galaxy.ship.shields == 1000
    assert runner.galaxy.ship.energy + runner.galaxy.ship.shields == 3000


def test_invalid_input_is_reported():
    runner, io = make_runner("0", "1", "99", "Q")
    stage_quadrant(runner.galaxy, ship=(1, 1))

    runner.run()

    assert "WARP FACTOR MUST BE BETWEEN 0 AND 8" in io.lines


def test_navigation_is_followed_by_a_scan():
    runner, io = make_runner("0", "1", "0.125", "Q")
    stage_quadrant(runner.galaxy, ship=(1, 1))
    runner.galaxy.rng = FixedRandom(0.9)

    runner.run()

    assert io.lines.count(SRS_BORDER) == 4
    assert runner.galaxy.ship.sector.as_tuple() == (2, 1)


def test_time_running_out_ends_the_mission():
    runner, io = make_runner("1", "1")
    galaxy = runner.galaxy
    galaxy.stardate = galaxy.starting_stardate + galaxy.mission_duration + 1

    outcome = runner.run()

    assert outcome.reason == DefeatReason.TIME_EXPIRED
    assert "*** TIME EXPIRED" in io.lines
    assert "THE FEDERATION WILL BE CONQUERED" in io.lines
    assert io.pending == 1


# ----------------------------------------------------------------------------
# Engine
# ----------------------------------------------------------------------------

def test_engine_requires_reset():
    engine = GameEngine()
    with pytest.raises(RuntimeError):
        engine.step(Command.SHORT_RANGE_SCAN, ScriptedIO(), ScriptedIO())


def test_engine_refuses_commands_after_mission_end():
    engine = GameEngine()
    galaxy = engine.reset(7)
    galaxy.ship.shields = -1
    io = ScriptedIO()

    _, outcome = engine.step(Command.DAMAGE_REPORT, io, io)
    assert outcome.reason == DefeatReason.SHIP_DESTROYED

    with pytest.raises(RuntimeError):
        engine.step(Command.DAMAGE_REPORT, io, io)


def test_engine_has_no_quit_handler():
    engine = GameEngine()
    engine.reset(7)
    with pytest.raises(ValueError):
        engine.step(Command.QUIT, ScriptedIO(), ScriptedIO())


def test_engine_reset_replays_seed():
    engine = GameEngine()
    first = engine.reset(2024).all_records()
    assert engine.reset(2024).all_records() == first


@pytest.mark.parametrize("text, command", [("0", Command.NAVIGATE), (" 7 ", Command.COMPUTER), ("q", Command.QUIT), ("8", None)])
def test_command_parsing(text, command):
    assert Command.parse(text) == command


# ----------------------------------------------------------------------------
# Command line
# ----------------------------------------------------------------------------

@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_replays_script(tmp_path, capsys, restore_logging):
    script = tmp_path / "moves.txt"
    script.write_text("6\nQ\n", encoding="utf-8")

    code = game_runner.main(["--seed", "42", "--script", str(script), "--no-log-file"])

    assert code == 0
    out = capsys.readouterr().out
    assert "DEVICE        STATE OF REPAIR" in out
    assert "GOODBYE, CAPTAIN." in out


def test_cli_rejects_out_of_range_seed():
    with pytest.raises(SystemExit):
        game_runner.build_parser().parse_args(["--seed", str(2**64)])
