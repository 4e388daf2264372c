"""Accommodation row packer - stacked lanes for multi-day stay bars."""

from collections.abc import Sequence
from datetime import datetime

from tripcal.config import Settings, get_settings
from tripcal.geometry.timegrid import start_of_day
from tripcal.models.accommodation import Accommodation, BarSpan, PlacedAccommodation


def visible_in_window(accommodation: Accommodation, window: Sequence[datetime]) -> bool:
    """Whether any day of the stay (check-in through check-out) is in the window."""
    if not window:
        return False
    first_day = start_of_day(window[0])
    last_day = start_of_day(window[-1])
    return (
        start_of_day(accommodation.start) <= last_day
        and start_of_day(accommodation.end) >= first_day
    )


def pack_accommodation_rows(
    accommodations: Sequence[Accommodation], window: Sequence[datetime]
) -> list[PlacedAccommodation]:
    """Assign each visible accommodation the lowest free row.

    Rows are lanes with an end-date watermark: a row is free for a stay when
    its watermark is at or before the stay's check-in, so a check-out and a
    check-in on the same date share a row.
    """
    visible = [a for a in accommodations if visible_in_window(a, window)]
    visible.sort(key=lambda a: (a.start, a.end))

    watermarks: list[datetime] = []
    placed: list[PlacedAccommodation] = []

    for accommodation in visible:
        row = next(
            (i for i, end in enumerate(watermarks) if end <= accommodation.start),
            len(watermarks),
        )
        if row == len(watermarks):
            watermarks.append(accommodation.end)
        else:
            watermarks[row] = max(watermarks[row], accommodation.end)
        placed.append(PlacedAccommodation(accommodation=accommodation, row=row))

    return placed


def accommodation_bar_span(
    accommodation: Accommodation, window: Sequence[datetime], day_width: float
) -> BarSpan | None:
    """Day columns covered by an accommodation bar, or None when not visible."""
    if not visible_in_window(accommodation, window):
        return None

    check_in = start_of_day(accommodation.start)
    check_out = start_of_day(accommodation.end)
    days = [start_of_day(d) for d in window]

    start_day = next((i for i, day in enumerate(days) if check_in <= day), 0)
    end_day = next((i for i, day in enumerate(days) if check_out <= day), len(days) - 1)

    return BarSpan(
        start_day=start_day,
        end_day=end_day,
        left=start_day * day_width,
        width=(end_day - start_day + 1) * day_width,
    )


def all_day_section_height(
    placed: Sequence[PlacedAccommodation], settings: Settings | None = None
) -> int:
    """Pixel height of the all-day section holding the accommodation rows."""
    settings = settings or get_settings()
    if not placed:
        return 0
    rows = max(p.row for p in placed) + 1
    return max(
        settings.accommodation_section_min_height_px,
        rows * settings.accommodation_row_height_px + settings.accommodation_section_padding_px,
    )

