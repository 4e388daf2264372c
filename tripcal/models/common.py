"""Common types and the interval-overlap primitive shared across all models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open overlap test: touching at a boundary is not an overlap.

    Inverted or zero-length intervals are not special-cased.
    """
    return a_start < b_end and a_end > b_start


class EventType(str, Enum):
    """Kind of scheduled event."""

    travel = "travel"
    food = "food"
    activity = "activity"


class TimeInterval(BaseModel):
    """Wall-clock interval in local time, half-open [start, end)."""

    start: datetime
    end: datetime

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check strict overlap with another interval."""
        return intervals_overlap(self.start, self.end, other.start, other.end)

    @property
    def duration_minutes(self) -> float:
        """Length in minutes (negative when inverted)."""
        return (self.end - self.start).total_seconds() / 60
