"""Drag/resize interaction controller - pointer gestures to event time updates.

State machine: idle -> armed (pointer down) -> dragging | resizing -> idle.

Each qualifying pointer-move emits a partial {start, end} update through the
host's callback, in pointer-move order. Nothing is batched to pointer-up;
hosts that persist remotely should coalesce calls themselves.
"""

import logging
import math
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from tripcal.config import Settings, get_settings
from tripcal.geometry.timegrid import (
    MINUTES_PER_DAY,
    events_for_date,
    minutes_to_pixels,
    pixel_to_minutes,
    start_of_day,
)
from tripcal.models.drag import (
    DragMode,
    DragState,
    ElementBox,
    PointerEvent,
    ResizeEdge,
    Viewport,
)
from tripcal.models.events import DisplayEvent, EventUpdate, ScheduledEvent
from tripcal.utils.logging import DragLogger
from tripcal.utils.metrics import DragMetrics

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str, EventUpdate], None]
ViewportProvider = Callable[[], Viewport | None]
DayPredicate = Callable[[datetime], bool]


def _as_display_event(event: ScheduledEvent, day: datetime) -> DisplayEvent:
    """Display copy of an event for the given day (unclipped if it misses the day)."""
    if isinstance(event, DisplayEvent):
        return event
    clipped = events_for_date([event], day)
    if clipped:
        return clipped[0]
    return DisplayEvent(
        **event.model_dump(),
        original_start=event.start,
        original_end=event.end,
        display_start=event.start,
        display_end=event.end,
    )


class DragController:
    """Owns the single active drag/resize gesture for one calendar view."""

    def __init__(
        self,
        window: Sequence[datetime],
        on_update: UpdateCallback | None,
        viewport: ViewportProvider,
        day_width: float = 0.0,
        is_day_within: DayPredicate | None = None,
        settings: Settings | None = None,
        metrics: DragMetrics | None = None,
        logger: DragLogger | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize controller.

        Args:
            window: Local midnights of the rendered day columns
            on_update: Host update callback; None makes the calendar read-only
            viewport: Returns the scrollable content area, or None if unmounted
            day_width: Pixel width of one day column
            is_day_within: Optional predicate vetoing targets on disallowed days
            settings: Settings (optional, defaults to get_settings())
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured gesture logger (optional, defaults to no-op)
            clock: Monotonic clock in seconds (default: time.monotonic)
        """
        self.window = list(window)
        if not self.window:
            raise ValueError("DragController needs at least one day in its window")
        self.day_width = day_width
        self._on_update = on_update
        self._viewport = viewport
        self._is_day_within = is_day_within
        self._settings = settings or get_settings()
        self._metrics = metrics or DragMetrics()
        self._logger = logger or DragLogger()
        self._clock = clock or time.monotonic
        self._state: DragState | None = None

    @property
    def state(self) -> DragState | None:
        """Current gesture state, for ghost rendering and click handling."""
        self._expire_settled()
        return self._state

    @property
    def is_active(self) -> bool:
        """Whether a gesture is in progress (settling gestures excluded)."""
        state = self.state
        return state is not None and not state.is_settling

    def suppresses_click(self) -> bool:
        """Whether a click arriving now belongs to a finished drag and must be ignored."""
        state = self.state
        return state is not None and state.has_crossed_move_threshold

    def day_at(self, day_index: int) -> datetime:
        """Midnight of a day column, extrapolated beyond the rendered window."""
        first = start_of_day(self.window[0])
        if 0 <= day_index < len(self.window):
            return start_of_day(self.window[day_index])
        return first + timedelta(days=day_index)

    def on_pointer_down(
        self,
        event: ScheduledEvent,
        day_index: int,
        pointer: PointerEvent,
        box: ElementBox,
        resize_edge: ResizeEdge | None = None,
    ) -> DragState | None:
        """Arm a gesture on an event box (body drag, or resize via an edge)."""
        if self._on_update is None:
            return None
        if self.is_active:
            logger.warning("Pointer down on %s ignored: a gesture is already active", event.id)
            return self._state

        display = _as_display_event(event, self.day_at(day_index))
        hidden_minutes = (display.display_start - display.original_start).total_seconds() / 60

        self._state = DragState(
            event=display,
            day_index=day_index,
            pointer_offset=pointer.client_y - box.top,
            mode=DragMode.dragging if resize_edge is None else DragMode.resizing,
            pointer_start_x=pointer.client_x,
            pointer_start_y=pointer.client_y,
            resize_edge=resize_edge,
            overflow_height=max(0.0, minutes_to_pixels(hidden_minutes, self._settings)),
        )
        return self._state

    def on_pointer_move(self, pointer: PointerEvent) -> EventUpdate | None:
        """Turn a pointer move into a time update, or None for a no-op frame."""
        state = self.state
        if state is None or state.is_settling or self._on_update is None:
            return None

        if not state.has_crossed_move_threshold:
            threshold = self._settings.move_threshold_px
            dx = abs(pointer.client_x - state.pointer_start_x)
            dy = abs(pointer.client_y - state.pointer_start_y)
            if dx <= threshold and dy <= threshold:
                return None
            state.has_crossed_move_threshold = True

        viewport = self._viewport()
        if viewport is None:
            return self._veto(state, "no_viewport")

        y = pointer.client_y - viewport.top + viewport.scroll_top

        if state.mode == DragMode.dragging:
            update = self._drag(state, pointer, viewport, y)
        else:
            update = self._resize(state, y)

        if update is None:
            return None

        state.updates_emitted += 1
        self._metrics.inc_update(state.mode.value)
        self._on_update(state.event_id, update)
        return update

    def on_pointer_up(self) -> None:
        """Finish the gesture; a real drag lingers briefly to swallow its click."""
        state = self.state
        if state is None or state.is_settling:
            return

        if not state.has_crossed_move_threshold:
            self._finish(state, "click")
            self._state = None
            return

        self._finish(state, "drag" if state.mode == DragMode.dragging else "resize")
        state.settle_deadline = self._clock() + self._settings.settle_delay_ms / 1000

    def cancel(self) -> None:
        """Drop any gesture immediately."""
        self._state = None

    def _drag(
        self, state: DragState, pointer: PointerEvent, viewport: Viewport, y: float
    ) -> EventUpdate | None:
        if self.day_width <= 0:
            return self._veto(state, "no_day_width")

        overflow_minutes = state.overflow_height * 60 / self._settings.px_per_hour
        total_minutes = pixel_to_minutes(y, state.pointer_offset, self._settings) - overflow_minutes

        # Drop float residue before flooring to whole minutes
        whole_minutes = math.floor(round(total_minutes, 6))
        # Vertical overflow rolls into neighbouring days
        day_offset, minutes_in_day = divmod(whole_minutes, MINUTES_PER_DAY)

        x = pointer.client_x - viewport.left + viewport.scroll_left
        target_index = math.floor(x / self.day_width) + day_offset
        target_day = self.day_at(target_index)

        if self._is_day_within is not None and not self._is_day_within(target_day):
            return self._veto(state, "restricted_day")

        duration = state.event.original_end - state.event.original_start
        new_start = target_day + timedelta(minutes=minutes_in_day)
        return EventUpdate(start=new_start, end=new_start + duration)

    def _resize(self, state: DragState, y: float) -> EventUpdate | None:
        target_day = self.day_at(state.day_index)
        if self._is_day_within is not None and not self._is_day_within(target_day):
            return self._veto(state, "restricted_day")

        minutes = max(0.0, pixel_to_minutes(y, 0.0, self._settings))
        new_time = target_day + timedelta(minutes=math.floor(minutes))
        original_start = state.event.original_start
        original_end = state.event.original_end

        if state.resize_edge == ResizeEdge.top:
            if new_time >= original_end:
                return self._veto(state, "inverted_resize")
            return EventUpdate(start=new_time, end=original_end)

        if new_time <= original_start:
            return self._veto(state, "inverted_resize")
        return EventUpdate(start=original_start, end=new_time)

    def _veto(self, state: DragState, reason: str) -> None:
        state.vetoes += 1
        self._metrics.inc_veto(reason)
        logger.debug("Frame vetoed for %s: %s", state.event_id, reason)
        return None

    def _finish(self, state: DragState, outcome: str) -> None:
        self._metrics.inc_gesture(outcome)
        self._logger.log_gesture(state, outcome)

    def _expire_settled(self) -> None:
        state = self._state
        if state is not None and state.settle_deadline is not None:
            if self._clock() >= state.settle_deadline:
                self._state = None
