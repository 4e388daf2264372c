"""Interval layout engine - side-by-side columns for overlapping events.

Events are sorted by (start, end) and greedily placed in the first column
with no overlapping occupant. Processing in start order keeps the number of
columns a cluster uses equal to its peak simultaneous overlap.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from tripcal.models.common import intervals_overlap
from tripcal.models.events import DisplayEvent, LayoutAssignment, ScheduledEvent

logger = logging.getLogger(__name__)


def _bounds(event: ScheduledEvent) -> tuple[datetime, datetime]:
    """Interval used for overlap tests (the visible part for display events)."""
    if isinstance(event, DisplayEvent):
        return event.display_start, event.display_end
    return event.start, event.end


def _assign_columns(spans: list[tuple[datetime, datetime]]) -> list[int]:
    """Greedy first-fit column per span; spans must be sorted by start."""
    columns: list[list[int]] = []
    assigned: list[int] = []

    for index, (start, end) in enumerate(spans):
        placed = -1
        for column_index, occupants in enumerate(columns):
            if not any(intervals_overlap(start, end, *spans[other]) for other in occupants):
                placed = column_index
                break

        if placed == -1:
            placed = len(columns)
            columns.append([])

        columns[placed].append(index)
        assigned.append(placed)

    return assigned


def _clusters(spans: list[tuple[datetime, datetime]]) -> list[list[int]]:
    """Connected components of the overlap graph, in first-member order."""
    seen: set[int] = set()
    clusters: list[list[int]] = []

    for root in range(len(spans)):
        if root in seen:
            continue
        seen.add(root)
        component = [root]
        frontier = [root]
        while frontier:
            current = frontier.pop()
            for other in range(len(spans)):
                if other in seen:
                    continue
                if intervals_overlap(*spans[current], *spans[other]):
                    seen.add(other)
                    component.append(other)
                    frontier.append(other)
        clusters.append(sorted(component))

    return clusters


def compute_event_layout(events: Sequence[ScheduledEvent]) -> dict[str, LayoutAssignment]:
    """Assign a column and a shared column count to every event.

    Every member of a connected overlap cluster gets the same total_columns,
    so the whole cluster renders at a consistent width.

    Args:
        events: Events of one day cell (display events use their clipped bounds)

    Returns:
        Mapping of event id to its LayoutAssignment
    """
    ordered = sorted(events, key=lambda e: _bounds(e))
    spans = [_bounds(e) for e in ordered]
    columns = _assign_columns(spans)

    layouts: dict[str, LayoutAssignment] = {}
    for cluster in _clusters(spans):
        used = sorted({columns[i] for i in cluster})
        total_columns = len(used)
        for i in cluster:
            column = used.index(columns[i])
            layouts[ordered[i].id] = LayoutAssignment(
                id=ordered[i].id,
                column=column,
                total_columns=total_columns,
                width=1 / total_columns,
                left=column / total_columns,
            )

    logger.debug("Laid out %d events in %d columns", len(layouts), len(set(columns)))
    return layouts


def max_simultaneous(events: Sequence[ScheduledEvent]) -> int:
    """Peak number of events active at the same instant (sweep line).

    Ends sort before starts at the same instant, matching the half-open
    overlap rule.
    """
    points: list[tuple[datetime, int]] = []
    for event in events:
        start, end = _bounds(event)
        if start < end:
            points.append((start, 1))
            points.append((end, -1))

    peak = active = 0
    for _, delta in sorted(points, key=lambda p: (p[0], p[1])):
        active += delta
        peak = max(peak, active)
    return peak
