"""
Settings - Validated runtime configuration.

Defaults can be overridden with environment variables:
    DRAUGHTSIM_WIDTH, DRAUGHTSIM_HEIGHT     Board size
    DRAUGHTSIM_AI_DELAY                     Pacing delay (seconds) for AI turns
                                            when a human is watching
    DRAUGHTSIM_MAX_CONCURRENCY              Cap on simultaneous simulations
                                            per fan-out (unset = unbounded)
    DRAUGHTSIM_MAX_MOVES                    Stop a game after this many moves
                                            (unset = play until decided)
    DRAUGHTSIM_INPUT_BUFFER                 Capacity of the selection channel
    DRAUGHTSIM_LOG_LEVEL                    Logging level for the CLI
"""

from __future__ import annotations
from typing import Optional
import os

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "DRAUGHTSIM_"


class GameSettings(BaseModel):
    """Configuration shared by a game and every game it simulates."""

    width: int = Field(8, ge=1, description="Board width")
    height: int = Field(8, ge=1, description="Board height")
    ai_delay: float = Field(0.3, ge=0, description="Seconds an AI waits before moving in interactive games")
    max_concurrency: Optional[int] = Field(None, ge=1, description="Simultaneous simulations per fan-out")
    max_moves: Optional[int] = Field(None, ge=1, description="Move limit per game")
    input_buffer: int = Field(8, ge=1, description="Selection channel capacity")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> GameSettings:
        """
        Build settings from DRAUGHTSIM_* variables.

        Keyword overrides whose value is None are ignored, so CLI
        arguments can be passed straight through.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw not in (None, ""):
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


DEFAULT_SETTINGS = GameSettings()
