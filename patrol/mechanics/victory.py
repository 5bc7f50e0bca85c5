"""
Mission outcome checking for the Star Patrol simulation.

The outcome is a small state machine:
- PLAYING until one of the end conditions holds
- VICTORY with an efficiency rating once every raider is destroyed
- DEFEAT when the ship is destroyed (or destroyed while stranded) or
  the mission deadline passes
Terminal outcomes are sticky: once reached, every later check returns the
same outcome.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from infra.logger import get_logger

from ..core.types import DefeatReason, GameStatus

if TYPE_CHECKING:
    from ..world.galaxy import Galaxy

log = get_logger(__name__)


@dataclass(frozen=True)
class Outcome:
    """
    Result of an outcome check.

    Attributes:
        status: PLAYING, VICTORY or DEFEAT
        rating: Efficiency rating (VICTORY only)
        reason: Why the mission was lost (DEFEAT only)
    """
    status: GameStatus
    rating: Optional[int] = None
    reason: Optional[DefeatReason] = None

    @staticmethod
    def playing() -> Outcome:
        return Outcome(GameStatus.PLAYING)

    @staticmethod
    def victory(rating: int) -> Outcome:
        return Outcome(GameStatus.VICTORY, rating=rating)

    @staticmethod
    def defeat(reason: DefeatReason) -> Outcome:
        return Outcome(GameStatus.DEFEAT, reason=reason)

    @property
    def is_game_over(self) -> bool:
        """Check if the mission has ended."""
        return self.status != GameStatus.PLAYING

    def __str__(self) -> str:
        if self.status == GameStatus.VICTORY:
            return f"Victory (rating {self.rating})"
        if self.status == GameStatus.DEFEAT:
            return f"Defeat: {self.reason}"
        return "Mission in progress"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the outcome to a plain dict."""
        return {
            "status": self.status.name,
            "rating": self.rating,
            "reason": self.reason.name if self.reason else None,
        }


class VictoryConditions:
    """
    Tracks the mission outcome across checks.

    Usage:
        conditions = VictoryConditions()
        outcome = conditions.check_all(galaxy)

        if outcome.is_game_over:
            print(outcome)
    """

    def __init__(self):
        self._outcome = Outcome.playing()

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    def check_all(self, galaxy: Galaxy) -> Outcome:
        """
        Evaluate the end conditions in priority order.

        1. Already terminal: return the same outcome
        2. No raiders left: victory
        3. Shields below zero: defeat (stranded if it happened while dead in space)
        4. Stardate past the deadline: defeat

        Args:
            galaxy: Current game state

        Returns:
            The (possibly unchanged) outcome
        """
        if self._outcome.is_game_over:
            return self._outcome

        outcome = self.evaluate(galaxy)
        if outcome.is_game_over:
            log.info("Mission over: %s", outcome)
        self._outcome = outcome
        return outcome

    def evaluate(self, galaxy: Galaxy) -> Outcome:
        """Stateless check of the end conditions against ``galaxy``."""
        if galaxy.all_raiders_destroyed():
            # Rated as if at least one stardate passed.
            return Outcome.victory(galaxy.efficiency_rating())

        if galaxy.ship.shields < 0:
            if galaxy.stranded:
                return Outcome.defeat(DefeatReason.STRANDED)
            return Outcome.defeat(DefeatReason.SHIP_DESTROYED)

        if galaxy.is_time_expired():
            return Outcome.defeat(DefeatReason.TIME_EXPIRED)

        return Outcome.playing()
