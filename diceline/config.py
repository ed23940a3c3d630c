"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from diceline.dice.roller import MAX_DICE_PER_SET


class Settings(BaseSettings):
    """Application settings loaded from DICELINE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DICELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Rolling
    max_dice_per_set: int = MAX_DICE_PER_SET
    seed: int | None = None  # Fixed seed for reproducible sessions

    # Debug
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
