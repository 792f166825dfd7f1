from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Global application-level configuration.

    Single source of truth for:
    - environment selection
    - logging behavior
    - engine defaults (array size, algorithm, seed)
    - playback speed bounds
    """

    model_config = SettingsConfigDict(
        env_prefix="SORTSTEP_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------

    env: Literal["local", "staging", "prod"] = "local"

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"

    # ---- Engine defaults ---------------------------------------------

    default_size: int = Field(
        default=100,
        ge=1,
        description="Number of elements in a freshly constructed sequence",
    )

    default_algorithm: Literal["quick", "merge", "bubble", "heap"] = "quick"

    # None -> shuffles are not reproducible across processes
    default_seed: Optional[int] = Field(
        default=None,
        description="Seed for the engine's shuffle RNG",
    )

    # ---- Playback ----------------------------------------------------

    min_speed: float = Field(default=0.1, gt=0, description="Lowest playback speed multiplier")
    max_speed: float = Field(default=5.0, gt=0, description="Highest playback speed multiplier")
    default_speed: float = Field(default=1.0, gt=0, description="Initial playback speed multiplier")

    @model_validator(mode="after")
    def _validate_speed_bounds(self) -> "AppSettings":
        if self.min_speed > self.max_speed:
            raise ValueError("min_speed must be <= max_speed")
        return self


# Singleton settings object
settings = AppSettings()
