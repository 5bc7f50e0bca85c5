"""
Tunable game settings.

Defaults reproduce the classic mission. Any field can be overridden from the
environment (or a ``.env`` file) with a ``PATROL_`` prefix, for example
``PATROL_MISSION_DURATION=40``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "PATROL_"


class GameSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial_energy: float = Field(
        default=3000.0, gt=0, description="Energy on launch and after every docking."
    )
    initial_torpedoes: int = Field(
        default=10, ge=0, description="Photon torpedoes on launch and after every docking."
    )
    initial_shields: float = Field(
        default=0.0, ge=0, description="Shield level on launch and after every docking."
    )
    raider_shields: float = Field(
        default=200.0, gt=0, description="Shield strength of a freshly placed raider."
    )
    mission_duration: int = Field(
        default=30, gt=0, description="Stardates available to clear the galaxy."
    )
    low_shield_threshold: float = Field(
        default=200.0, ge=0, description="Shields at or below this trigger the combat-area warning."
    )
    damaged_warp_limit: float = Field(
        default=0.2, ge=0, le=8, description="Highest warp factor accepted with damaged engines."
    )
    damage_event_chance: float = Field(
        default=0.2, ge=0, le=1, description="Probability of a random damage event after a move."
    )

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> GameSettings:
        """
        Build settings from ``PATROL_*`` environment variables.

        Args:
            env_file: Optional dotenv file loaded first; variables already set
                      in the process environment take precedence.

        Raises:
            pydantic.ValidationError: If an override is out of range
        """
        load_dotenv(env_file)
        overrides: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                overrides[name] = raw.strip()
        return cls(**overrides)
