"""Simulation settings."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

ENV_PREFIX = "HORSESIM_"


class SimulationSettings(BaseModel):
    """Tunable parameters for a race program and its loop."""

    tick_interval_ms: float = Field(
        default=500,
        gt=0,
        description="Delay between race turns in milliseconds",
    )
    race_count: int = Field(default=6, ge=1, description="Races per program")
    horses_per_race: int = Field(default=10, ge=2, description="Lineup size of every race")
    seed: int | None = Field(default=None, description="Random seed for reproducible programs")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SimulationSettings":
        """Build settings from ``HORSESIM_*`` environment variables.

        Unset variables keep their defaults; values are validated as usual.

        Args:
            environ: Mapping to read instead of ``os.environ``
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls.model_validate(values)
