"""
GameEngine - Main simulation interface.

This is the primary API for the Star Patrol simulation. It owns a Galaxy,
dispatches player commands to the stateless resolvers, and consults the
outcome state machine after every command.

Usage:
    from patrol import GameEngine, Command, ScriptedIO

    engine = GameEngine()
    engine.reset(seed=42)
    io = ScriptedIO(["1", "0.5"])

    result, outcome = engine.step(Command.NAVIGATE, io, io)
    if outcome.is_game_over:
        print(outcome)
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Tuple

from infra.logger import get_logger

from .config import GameSettings
from .core.io import InputReader, OutputWriter
from .core.types import Command, CommandResult
from .mechanics import (
    CombatResolver,
    DamageControl,
    LibraryComputer,
    MovementResolver,
    Outcome,
    SensorSystem,
    ShieldControl,
    VictoryConditions,
)
from .world import Galaxy

log = get_logger(__name__)

Handler = Callable[[InputReader, OutputWriter], CommandResult]


class GameEngine:
    """
    Star Patrol engine - orchestrates the resolvers around one Galaxy.

    Attributes:
        settings: Game tuning values
        galaxy: Current game state (None until reset())
    """

    def __init__(self, settings: Optional[GameSettings] = None):
        """
        Initialize the engine.

        Args:
            settings: Game tuning values (defaults when omitted)
        """
        self.settings = settings or GameSettings()
        self.galaxy: Optional[Galaxy] = None

        # Mechanics modules (stateless, can be reused)
        self._damage = DamageControl()
        self._combat = CombatResolver()
        self._movement = MovementResolver(self._combat, self._damage)
        self._sensors = SensorSystem()
        self._shields = ShieldControl()
        self._computer = LibraryComputer(self._damage)

        self._victory = VictoryConditions()

    def reset(self, seed: Optional[int] = None) -> Galaxy:
        """
        Start a new mission.

        Args:
            seed: Unsigned 64-bit seed; the same seed replays the same game

        Returns:
            The freshly generated Galaxy
        """
        self.galaxy = Galaxy(seed, self.settings)
        self._victory = VictoryConditions()
        log.info("Mission started: %r", self.galaxy)
        return self.galaxy

    @property
    def outcome(self) -> Outcome:
        return self._victory.outcome

    # ========================================================================
    # PLAYER ACTIONS
    # ========================================================================

    def navigate(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._movement.navigate(self._require_galaxy(), reader, output)

    def short_range_scan(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._sensors.short_range_scan(self._require_galaxy(), output)

    def long_range_scan(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._sensors.long_range_scan(self._require_galaxy(), output)

    def fire_phasers(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._combat.fire_phasers(self._require_galaxy(), reader, output)

    def fire_torpedo(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._combat.fire_torpedo(self._require_galaxy(), reader, output)

    def transfer_shields(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._shields.transfer(self._require_galaxy(), reader, output)

    def damage_report(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._damage.report(self._require_galaxy(), output)

    def computer_query(self, reader: InputReader, output: OutputWriter) -> CommandResult:
        return self._computer.query(self._require_galaxy(), reader, output)

    # ========================================================================
    # TURN LOOP
    # ========================================================================

    def step(
        self, command: Command, reader: InputReader, output: OutputWriter
    ) -> Tuple[CommandResult, Outcome]:
        """
        Run one player command and re-evaluate the outcome.

        A TransportError from the I/O capabilities propagates; the command
        is abandoned but the galaxy stays consistent because every mutation
        happens after input has been validated.

        Args:
            command: Command to run (QUIT is handled by the caller)
            reader: Line-input capability
            output: Line-output capability

        Returns:
            Tuple of (command result, outcome after the command)

        Raises:
            RuntimeError: If reset() hasn't been called or the mission is over
            ValueError: If the command has no handler
        """
        self._require_galaxy()
        if self.outcome.is_game_over:
            raise RuntimeError(f"Mission already over: {self.outcome}")

        handler = self._handlers().get(command)
        if handler is None:
            raise ValueError(f"No handler for command {command}")

        result = handler(reader, output)
        if not result.ok:
            log.debug("%s failed: %s %s", command, result.error_code, result.message)
        return result, self.check_game_over()

    def check_game_over(self) -> Outcome:
        """Evaluate (and latch) the mission outcome."""
        return self._victory.check_all(self._require_galaxy())

    def _handlers(self) -> Dict[Command, Handler]:
        return {
            Command.NAVIGATE: self.navigate,
            Command.SHORT_RANGE_SCAN: self.short_range_scan,
            Command.LONG_RANGE_SCAN: self.long_range_scan,
            Command.FIRE_PHASERS: self.fire_phasers,
            Command.FIRE_TORPEDO: self.fire_torpedo,
            Command.SHIELD_CONTROL: self.transfer_shields,
            Command.DAMAGE_REPORT: self.damage_report,
            Command.COMPUTER: self.computer_query,
        }

    def _require_galaxy(self) -> Galaxy:
        if self.galaxy is None:
            raise RuntimeError("Must call reset() before issuing commands")
        return self.galaxy
