from __future__ import annotations

from typing import Optional

from infra.logger import get_logger
from patrol import GameEngine, GameSettings
from patrol.core.errors import InsufficientResourcesError, InvalidInputError, TransportError
from patrol.core.io import InputReader, OutputWriter
from patrol.core.types import Command, CommandResult, DefeatReason, GameStatus
from patrol.mechanics import Outcome

log = get_logger(__name__)

DEFEAT_MESSAGES = {
    DefeatReason.SHIP_DESTROYED: "SHIP DESTROYED",
    DefeatReason.TIME_EXPIRED: "TIME EXPIRED",
    DefeatReason.STRANDED: "DEAD IN SPACE",
}


class GameRunner:
    """
    Interactive command loop around a GameEngine.

    Reads commands from ``reader`` until the mission ends, the player quits
    or the input channel closes.
    """

    def __init__(
        self,
        seed: Optional[int],
        reader: InputReader,
        output: OutputWriter,
        settings: Optional[GameSettings] = None,
    ):
        self.reader = reader
        self.output = output
        self.engine = GameEngine(settings)
        self.galaxy = self.engine.reset(seed)
        self._done = False

        log.info("GameRunner initialized for seed=%s", seed)

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def run(self) -> Outcome:
        """Play until the mission ends; returns the final outcome."""
        self.brief()
        try:
            self.engine.short_range_scan(self.reader, self.output)
            while not self._done:
                self.step()
        except TransportError as exc:
            log.warning("Input closed, ending session: %s", exc)
            self.output.writeln("")
            self.output.writeln("INPUT CLOSED, MISSION ABANDONED")
            self._done = True
        return self.engine.outcome

    def step(self) -> Outcome:
        """Read and run a single command."""
        text = self.reader.read_line("COMMAND")
        command = Command.parse(text)

        if command is None:
            self.print_menu()
            return self.engine.outcome
        if command == Command.QUIT:
            self.output.writeln("GOODBYE, CAPTAIN.")
            self._done = True
            return self.engine.outcome

        result, outcome = self.engine.step(command, self.reader, self.output)
        while command == Command.SHIELD_CONTROL and isinstance(
            result.error, InsufficientResourcesError
        ):
            self.output.writeln(result.message)
            result, outcome = self.engine.step(command, self.reader, self.output)
        self._report_failure(result)

        if not outcome.is_game_over and command == Command.NAVIGATE:
            self.engine.short_range_scan(self.reader, self.output)
            outcome = self.engine.check_game_over()

        if outcome.is_game_over:
            self.finish(outcome)
        return outcome

    # ------------------------------------------------------------------#
    # Presentation
    # ------------------------------------------------------------------#
    def brief(self) -> None:
        galaxy = self.galaxy
        plural = "S" if galaxy.total_starbases != 1 else ""
        self.output.writeln(
            f"YOU MUST DESTROY {galaxy.total_raiders} RAIDERS IN {galaxy.mission_duration} "
            f"STARDATES WITH {galaxy.total_starbases} STARBASE{plural}"
        )
        galaxy.report_combat_area(self.output)

    def print_menu(self) -> None:
        for command in Command:
            self.output.writeln(f"   {command.value} = {command.description}")

    def finish(self, outcome: Outcome) -> None:
        self._done = True
        self.output.writeln("")
        if outcome.status == GameStatus.VICTORY:
            self.output.writeln("THE LAST RAIDER BATTLE CRUISER IN THE GALAXY HAS BEEN DESTROYED")
            self.output.writeln("THE FEDERATION HAS BEEN SAVED !!!")
            self.output.writeln("")
            self.output.writeln(f"YOUR EFFICIENCY RATING = {outcome.rating}")
            return
        self.output.writeln(f"*** {DEFEAT_MESSAGES[outcome.reason]}")
        self.output.writeln("THE FEDERATION WILL BE CONQUERED")
        self.output.writeln("")

    def _report_failure(self, result: CommandResult) -> None:
        if isinstance(result.error, InvalidInputError):
            self.output.writeln(result.message)

    @property
    def done(self) -> bool:
        return self._done
