"""Shared pytest fixtures for all test suites."""

from datetime import datetime, timedelta

import pytest

from tripcal.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Grid settings pinned to the defaults (48px per hour, midnight day start)."""
    return Settings(
        px_per_hour=48,
        day_start_hour=0,
        week_length_days=7,
        move_threshold_px=5,
        settle_delay_ms=100,
        min_event_height_px=18,
        min_timed_event_height_px=24,
        selection_granularity_min=15,
        default_event_duration_min=60,
    )


@pytest.fixture
def week() -> list[datetime]:
    """Seven local midnights starting Monday 2025-06-09."""
    first = datetime(2025, 6, 9)
    return [first + timedelta(days=i) for i in range(7)]
