"""
Command-line entry point for Star Patrol.

Usage:
    python game_runner.py --seed 42
    python game_runner.py --seed 42 --script moves.txt --log-level DEBUG
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from infra.logger import configure_logging, get_logger
from infra.paths import DEFAULT_LOG_FILE
from patrol import ConsoleIO, GameSettings, ScriptedIO
from patrol.core.errors import TransportError
from patrol.world.galaxy import MAX_SEED
from runtime import GameRunner

log = get_logger(__name__)


def parse_seed(text: str) -> int:
    try:
        seed = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"seed must be an integer, got {text!r}")
    if not 0 <= seed <= MAX_SEED:
        raise argparse.ArgumentTypeError(f"seed must be in 0..{MAX_SEED}")
    return seed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="star-patrol", description="Turn-based space combat.")
    parser.add_argument("-s", "--seed", type=parse_seed, help="Seed for the random number generator")
    parser.add_argument(
        "--script",
        type=Path,
        help="Replay commands from a file (one response per line) instead of the console",
    )
    parser.add_argument("--env-file", type=Path, help="dotenv file with PATROL_* overrides")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=DEFAULT_LOG_FILE,
        help=f"Log file path (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument("--no-log-file", action="store_true", help="Disable file logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def prompt_for_seed(console: ConsoleIO) -> int:
    while True:
        text = console.read_line("ENTER SEED NUMBER").strip()
        try:
            return parse_seed(text)
        except argparse.ArgumentTypeError as exc:
            console.writeln(str(exc))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        args.log_level.upper(),
        json=args.json_logs,
        logfile=None if args.no_log_file else args.log_file,
    )
    settings = GameSettings.from_env(args.env_file)

    console = ConsoleIO()
    try:
        seed = args.seed if args.seed is not None else prompt_for_seed(console)
    except TransportError as exc:
        log.error("No seed entered: %s", exc)
        return 1

    if args.script is not None:
        responses = args.script.read_text(encoding="utf-8").splitlines()
        scripted = ScriptedIO(responses)
        runner = GameRunner(seed, scripted, console, settings)
    else:
        runner = GameRunner(seed, console, console, settings)

    outcome = runner.run()
    log.info("Session finished: %s", outcome)
    return 0


if __name__ == "__main__":
    sys.exit(main())
