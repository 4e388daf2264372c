"""Booking conflict detection and accommodation date verification.

Client-side mirror of the write path's checks, for immediate feedback. The
persistence layer repeats them authoritatively.
"""

import logging
import math
from collections.abc import Sequence
from datetime import datetime

from tripcal.models.accommodation import Accommodation
from tripcal.models.common import TimeInterval, intervals_overlap
from tripcal.models.violations import Violation, ViolationKind, ViolationSeverity
from tripcal.utils.metrics import BookingMetrics

logger = logging.getLogger(__name__)

_default_metrics = BookingMetrics()


def _candidates(
    existing: Sequence[Accommodation],
    travel_id: str | None,
    exclude_id: str | None,
) -> list[Accommodation]:
    """Existing stays of the same trip, minus the one being updated."""
    return sorted(
        (
            acc
            for acc in existing
            if acc.id != exclude_id and (travel_id is None or acc.travel_id == travel_id)
        ),
        key=lambda acc: (acc.start, acc.end),
    )


def find_booking_conflict(
    candidate: TimeInterval,
    existing: Sequence[Accommodation],
    exclude_id: str | None = None,
    metrics: BookingMetrics | None = None,
) -> Accommodation | None:
    """Return the earliest existing accommodation sharing a night with the candidate.

    Args:
        candidate: Requested stay (an Accommodation restricts the check to its trip)
        existing: Accommodations already booked
        exclude_id: Id to ignore, for updates of an existing stay
        metrics: Metrics recorder (optional, defaults to no-op)

    Returns:
        The conflicting accommodation, or None
    """
    travel_id = candidate.travel_id if isinstance(candidate, Accommodation) else None
    for acc in _candidates(existing, travel_id, exclude_id):
        if intervals_overlap(candidate.start, candidate.end, acc.start, acc.end):
            (metrics or _default_metrics).inc_conflict()
            logger.debug("Booking conflict with accommodation %s", acc.id)
            return acc
    return None


def has_booking_conflict(
    candidate: TimeInterval,
    existing: Sequence[Accommodation],
    exclude_id: str | None = None,
    metrics: BookingMetrics | None = None,
) -> bool:
    """Whether the candidate overlaps any existing accommodation."""
    return find_booking_conflict(candidate, existing, exclude_id, metrics) is not None


def overlap_window(a: TimeInterval, b: TimeInterval) -> TimeInterval | None:
    """Shared portion of two intervals, or None when they do not overlap."""
    if not a.overlaps(b):
        return None
    return TimeInterval(start=max(a.start, b.start), end=min(a.end, b.end))


def verify_accommodation(
    candidate: TimeInterval,
    existing: Sequence[Accommodation],
    travel_start: datetime,
    travel_end: datetime,
    exclude_id: str | None = None,
    metrics: BookingMetrics | None = None,
) -> list[Violation]:
    """Verify a requested stay against the trip dates and existing bookings.

    Checks:
    1. Check-in before check-out
    2. Stay inside the trip
    3. No night shared with another stay of the same trip

    Returns:
        List of BLOCKING violations (empty if the booking is acceptable)
    """
    affected = [candidate.id] if isinstance(candidate, Accommodation) else []
    dates = {
        "start": candidate.start.isoformat(),
        "end": candidate.end.isoformat(),
        "travel_start": travel_start.isoformat(),
        "travel_end": travel_end.isoformat(),
    }

    if candidate.start >= candidate.end:
        return [
            Violation(
                kind=ViolationKind.DATES,
                code="ACCOMMODATION_DATES_INVALID",
                message="Check-in must be before check-out.",
                severity=ViolationSeverity.BLOCKING,
                affected_accommodation_ids=affected,
                details=dates,
            )
        ]

    if candidate.start < travel_start or candidate.end > travel_end:
        return [
            Violation(
                kind=ViolationKind.DATES,
                code="ACCOMMODATION_OUTSIDE_TRAVEL",
                message="The stay must fall within the trip dates.",
                severity=ViolationSeverity.BLOCKING,
                affected_accommodation_ids=affected,
                details=dates,
            )
        ]

    conflict = find_booking_conflict(candidate, existing, exclude_id, metrics)
    if conflict is None:
        return []

    overlap_start = max(candidate.start, conflict.start)
    overlap_end = min(candidate.end, conflict.end)
    return [
        Violation(
            kind=ViolationKind.OVERLAP,
            code="ACCOMMODATION_OVERLAP_DETECTED",
            message="The stay dates conflict with another booking for this trip.",
            severity=ViolationSeverity.BLOCKING,
            affected_accommodation_ids=affected + [conflict.id],
            details={
                "conflicting_accommodation_id": conflict.id,
                "conflicting_accommodation_name": conflict.name,
                "overlap_start": overlap_start.isoformat(),
                "overlap_end": overlap_end.isoformat(),
            },
        )
    ]


def accommodation_nights(start: datetime, end: datetime) -> int:
    """Number of nights between check-in and check-out (rounded up)."""
    seconds = abs((end - start).total_seconds())
    return math.ceil(seconds / 86400)


def suggest_accommodation_dates(
    existing: Sequence[Accommodation],
    travel_start: datetime,
    travel_end: datetime,
) -> TimeInterval | None:
    """First stretch of the trip not covered by any stay.

    Gaps shorter than one night are skipped. Returns the whole trip when
    nothing is booked and None when every night is covered.
    """
    cursor = travel_start
    for acc in sorted(existing, key=lambda a: (a.start, a.end)):
        gap_end = min(acc.start, travel_end)
        if (gap_end - cursor).total_seconds() >= 86400:
            return TimeInterval(start=cursor, end=gap_end)
        cursor = max(cursor, acc.end)
        if cursor >= travel_end:
            return None

    if (travel_end - cursor).total_seconds() >= 86400:
        return TimeInterval(start=cursor, end=travel_end)
    return None
