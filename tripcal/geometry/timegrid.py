"""Time-grid geometry - conversions between wall-clock time and grid pixels.

All datetimes are naive local wall-clock values. A day column is
`24 * px_per_hour` pixels tall, starting at `day_start_hour`.
"""

import math
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta
from typing import Literal

from tripcal.config import Settings, get_settings
from tripcal.models.common import EventType, intervals_overlap
from tripcal.models.events import DisplayEvent, EventBox, ScheduledEvent

MINUTES_PER_DAY = 24 * 60

EVENT_COLORS: dict[EventType, str] = {
    EventType.travel: "chart-1",
    EventType.activity: "chart-2",
    EventType.food: "chart-3",
}


def start_of_day(value: datetime) -> datetime:
    """Local midnight of the given datetime's day."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def time_to_pixel(value: datetime, settings: Settings | None = None) -> float:
    """Vertical offset of a time of day inside a day column.

    Clamps to 0 for times before the configured day start.
    """
    settings = settings or get_settings()
    minutes = value.hour * 60 + value.minute - settings.day_start_hour * 60
    if minutes <= 0:
        return 0.0
    return minutes * settings.px_per_hour / 60


def pixel_to_minutes(y: float, pointer_offset: float = 0.0, settings: Settings | None = None) -> float:
    """Minutes since local midnight for a vertical offset.

    Unclamped: negative values and values past a full day mean the position
    overflows into a neighbouring day.
    """
    settings = settings or get_settings()
    return (y - pointer_offset) * 60 / settings.px_per_hour + settings.day_start_hour * 60


def minutes_to_pixels(minutes: float, settings: Settings | None = None) -> float:
    """Convert a duration in minutes to a pixel height."""
    settings = settings or get_settings()
    return minutes * settings.px_per_hour / 60


def build_day_window(
    events: Sequence[ScheduledEvent],
    today: date | None = None,
    settings: Settings | None = None,
) -> list[datetime]:
    """Consecutive local midnights starting at the earliest event's day.

    Empty input starts the window at today.
    """
    settings = settings or get_settings()
    if events:
        first = min(events, key=lambda e: e.start).start
        anchor = start_of_day(first)
    else:
        anchor_date = today or date.today()
        anchor = datetime(anchor_date.year, anchor_date.month, anchor_date.day)
    return [anchor + timedelta(days=i) for i in range(settings.week_length_days)]


def build_travel_window(travel_start: datetime, travel_end: datetime) -> list[datetime]:
    """One local midnight per travel day (inclusive), never empty."""
    first = start_of_day(travel_start)
    total_days = max(1, (start_of_day(travel_end) - first).days + 1)
    return [first + timedelta(days=i) for i in range(total_days)]


def make_day_restriction(
    travel_start: datetime | None, travel_end: datetime | None
) -> Callable[[datetime], bool]:
    """Predicate telling whether a day falls inside the trip.

    Every day is allowed when either bound is unknown.
    """

    def is_day_within(day: datetime) -> bool:
        if travel_start is None or travel_end is None:
            return True
        day_start = start_of_day(day)
        return start_of_day(travel_start) <= day_start <= start_of_day(travel_end)

    return is_day_within


def format_short_time(value: datetime) -> str:
    """Compact 12-hour label, e.g. "8:30a", "3p", "12a"."""
    hours = value.hour
    display_hour = hours - 12 if hours > 12 else (12 if hours == 0 else hours)
    suffix = "p" if hours >= 12 else "a"
    minutes = f":{value.minute:02d}" if value.minute > 0 else ""
    return f"{display_hour}{minutes}{suffix}"


def events_for_date(events: Sequence[ScheduledEvent], day: datetime) -> list[DisplayEvent]:
    """Events intersecting the given day, clipped to it for display."""
    day_start = start_of_day(day)
    next_day = day_start + timedelta(days=1)

    display_events: list[DisplayEvent] = []
    for event in events:
        if not intervals_overlap(event.start, event.end, day_start, next_day):
            continue
        original_start = getattr(event, "original_start", event.start)
        original_end = getattr(event, "original_end", event.end)
        display_events.append(
            DisplayEvent(
                id=event.id,
                type=event.type,
                title=event.title,
                start=event.start,
                end=event.end,
                original_start=original_start,
                original_end=original_end,
                display_start=max(event.start, day_start),
                display_end=min(event.end, next_day),
            )
        )
    return display_events


def event_box(event: DisplayEvent, settings: Settings | None = None) -> EventBox:
    """Pixel top and height of a display event inside its day column."""
    settings = settings or get_settings()
    duration_min = (event.display_end - event.display_start).total_seconds() / 60
    if duration_min > 0:
        height = max(minutes_to_pixels(duration_min, settings), float(settings.min_timed_event_height_px))
    else:
        height = float(settings.min_event_height_px)
    return EventBox(top=time_to_pixel(event.display_start, settings), height=height)


def date_at_offset(day: datetime, y: float, settings: Settings | None = None) -> datetime:
    """Wall-clock time for a click `y` pixels down a day column."""
    settings = settings or get_settings()
    minutes = max(0.0, pixel_to_minutes(y, 0.0, settings))
    return start_of_day(day) + timedelta(minutes=math.floor(minutes))


def round_to_granularity(
    value: datetime,
    mode: Literal["floor", "ceil"],
    settings: Settings | None = None,
) -> datetime:
    """Snap to the selection granularity, dropping seconds."""
    settings = settings or get_settings()
    step = settings.selection_granularity_min
    remainder = value.minute % step
    snapped = value.replace(second=0, microsecond=0)
    if remainder == 0:
        return snapped
    if mode == "floor":
        return snapped - timedelta(minutes=remainder)
    return snapped + timedelta(minutes=step - remainder)


def clamp_to_day(day: datetime, value: datetime) -> datetime:
    """Clamp a datetime into [00:00, 23:59:59.999999] of `day`."""
    low = start_of_day(day)
    high = low + timedelta(days=1) - timedelta(microseconds=1)
    return min(max(value, low), high)


def event_color(event_type: EventType) -> str:
    """Palette token for an event type."""
    return EVENT_COLORS[event_type]
