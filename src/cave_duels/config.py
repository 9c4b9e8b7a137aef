"""Engine configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

TurnCapPolicy = Literal["first_listed", "hp_fraction"]


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CAVE_DUELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Match rules
    max_turns: int = 30
    turn_cap_policy: TurnCapPolicy = "first_listed"  # Who wins when nobody dies before the cap

    # Raise on broken internal invariants instead of clamping them
    strict_invariants: bool = True

    # CLI defaults
    default_seed: int | None = None
    simulation_combats: int = 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
