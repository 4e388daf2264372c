"""Event models - scheduled events, per-day display copies and layout output."""

from datetime import datetime

from pydantic import BaseModel, Field

from tripcal.models.common import EventType, TimeInterval


class ScheduledEvent(TimeInterval):
    """A time-bounded itinerary event."""

    id: str
    type: EventType
    title: str


class DisplayEvent(ScheduledEvent):
    """Event as shown inside a single day cell.

    start/end keep the event's own bounds; original_* hold the pre-drag truth
    and display_* the portion visible within the day.
    """

    original_start: datetime
    original_end: datetime
    display_start: datetime
    display_end: datetime


class LayoutAssignment(BaseModel):
    """Horizontal placement of one event inside its day cell."""

    id: str
    column: int = Field(..., ge=0)
    total_columns: int = Field(..., ge=1)
    width: float  # Fraction of the day-cell width
    left: float  # Fraction of the day-cell width


class EventBox(BaseModel):
    """Vertical placement of a display event, in pixels."""

    top: float
    height: float


class EventUpdate(BaseModel):
    """Partial update emitted by the drag controller."""

    start: datetime
    end: datetime
