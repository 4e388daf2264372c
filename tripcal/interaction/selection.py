"""Drag-to-create selection inside a single day column."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from tripcal.config import Settings, get_settings
from tripcal.geometry.timegrid import clamp_to_day, date_at_offset, round_to_granularity, start_of_day
from tripcal.models.common import TimeInterval


@dataclass
class Selection:
    """In-progress selection."""

    day_index: int
    anchor: datetime
    current: datetime


class SelectionController:
    """Turns a click or click-and-drag on empty grid space into a new-event interval."""

    def __init__(
        self,
        window: Sequence[datetime],
        is_day_within: Callable[[datetime], bool] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.window = list(window)
        self._is_day_within = is_day_within
        self._settings = settings or get_settings()
        self._selection: Selection | None = None
        self._suppress_next_click = False

    @property
    def selection(self) -> Selection | None:
        return self._selection

    def _day(self, day_index: int) -> datetime | None:
        if not 0 <= day_index < len(self.window):
            return None
        day = start_of_day(self.window[day_index])
        if self._is_day_within is not None and not self._is_day_within(day):
            return None
        return day

    def on_pointer_down(self, day_index: int, y: float) -> Selection | None:
        day = self._day(day_index)
        if day is None:
            return None
        start = round_to_granularity(date_at_offset(day, y, self._settings), "floor", self._settings)
        self._selection = Selection(day_index=day_index, anchor=start, current=start)
        return self._selection

    def on_pointer_move(self, day_index: int, y: float) -> Selection | None:
        selection = self._selection
        if selection is None or selection.day_index != day_index:
            return selection
        day = self._day(day_index)
        if day is None:
            return selection
        moved = round_to_granularity(date_at_offset(day, y, self._settings), "ceil", self._settings)
        selection.current = clamp_to_day(day, moved)
        return selection

    def on_pointer_up(self, day_index: int) -> TimeInterval | None:
        """Close the selection and return the proposed interval."""
        selection = self._selection
        if selection is None or selection.day_index != day_index:
            return None
        self._selection = None

        start, end = sorted((selection.anchor, selection.current))
        minimum = timedelta(minutes=self._settings.selection_granularity_min)
        if end - start < minimum:
            end = start + minimum
        end = clamp_to_day(start, end)

        # The click fired by this same pointer-up must not open a second draft
        self._suppress_next_click = True
        return TimeInterval(start=start, end=end)

    def click_interval(self, day_index: int, y: float) -> TimeInterval | None:
        """Default-length interval for a plain click, or None if suppressed."""
        if self._suppress_next_click:
            self._suppress_next_click = False
            return None
        day = self._day(day_index)
        if day is None:
            return None
        start = date_at_offset(day, y, self._settings)
        return TimeInterval(
            start=start,
            end=start + timedelta(minutes=self._settings.default_event_duration_min),
        )
