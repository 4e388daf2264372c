"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Calendar engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPCAL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Time grid
    px_per_hour: int = 48
    day_start_hour: int = 0
    week_length_days: int = 7
    min_event_height_px: int = 18
    min_timed_event_height_px: int = 24

    # Pointer gestures
    move_threshold_px: int = 5
    settle_delay_ms: int = 100

    # Drag-to-create selection (minutes)
    selection_granularity_min: int = 15
    default_event_duration_min: int = 60

    # All-day accommodation section (pixels)
    accommodation_row_height_px: int = 22
    accommodation_section_padding_px: int = 12
    accommodation_section_min_height_px: int = 48


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
