"""Tests for booking conflict detection and accommodation verifiers."""

import random
from datetime import datetime, timedelta

import pytest
from prometheus_client import REGISTRY

from tripcal.models import Accommodation, TimeInterval, ViolationKind, ViolationSeverity
from tripcal.utils.metrics import PrometheusBookingMetrics
from tripcal.verification.bookings import (
    accommodation_nights,
    find_booking_conflict,
    has_booking_conflict,
    overlap_window,
    suggest_accommodation_dates,
    verify_accommodation,
)


def jan(day: int, hour: int = 0) -> datetime:
    return datetime(2025, 1, day, hour)


def make_accommodation(
    acc_id: str,
    start: datetime,
    end: datetime,
    travel_id: str = "trip-1",
) -> Accommodation:
    """Helper to create test accommodation."""
    return Accommodation(id=acc_id, travel_id=travel_id, name=f"Stay {acc_id}", start=start, end=end)


@pytest.fixture
def trip_bounds() -> tuple[datetime, datetime]:
    """Trip from Jan 1 to Jan 10."""
    return jan(1), jan(10)


# Conflict detection


def test_overlapping_booking_conflicts() -> None:
    """Test that Jan 2-4 conflicts with an existing Jan 3-6 stay."""
    existing = [make_accommodation("existing", jan(3), jan(6))]
    candidate = TimeInterval(start=jan(2), end=jan(4))

    assert has_booking_conflict(candidate, existing)
    conflict = find_booking_conflict(candidate, existing)
    assert conflict is not None
    assert conflict.id == "existing"


def test_boundary_touch_is_not_a_conflict() -> None:
    """Test that Jan 2-4 does not conflict with an existing Jan 4-6 stay."""
    existing = [make_accommodation("existing", jan(4), jan(6))]
    candidate = TimeInterval(start=jan(2), end=jan(4))

    assert not has_booking_conflict(candidate, existing)
    assert find_booking_conflict(candidate, existing) is None


def test_update_excludes_itself() -> None:
    existing = [
        make_accommodation("mine", jan(2), jan(4)),
        make_accommodation("other", jan(6), jan(8)),
    ]
    moved = make_accommodation("mine", jan(3), jan(5))

    assert not has_booking_conflict(moved, existing, exclude_id="mine")
    assert has_booking_conflict(moved, existing)


def test_other_trips_are_ignored() -> None:
    existing = [make_accommodation("elsewhere", jan(2), jan(5), travel_id="trip-2")]
    candidate = make_accommodation("new", jan(3), jan(4), travel_id="trip-1")

    assert not has_booking_conflict(candidate, existing)


def test_earliest_conflict_is_returned() -> None:
    existing = [
        make_accommodation("second", jan(5), jan(7)),
        make_accommodation("first", jan(2), jan(4)),
    ]
    candidate = TimeInterval(start=jan(3), end=jan(6))

    conflict = find_booking_conflict(candidate, existing)

    assert conflict is not None
    assert conflict.id == "first"


def test_conflict_is_symmetric() -> None:
    """Test conflict(A, B) == conflict(B, A) over random stays."""
    rng = random.Random(42)
    for i in range(200):
        a_start = jan(1) + timedelta(hours=rng.randint(0, 200))
        b_start = jan(1) + timedelta(hours=rng.randint(0, 200))
        a = make_accommodation(f"a{i}", a_start, a_start + timedelta(hours=rng.randint(1, 72)))
        b = make_accommodation(f"b{i}", b_start, b_start + timedelta(hours=rng.randint(1, 72)))

        assert has_booking_conflict(a, [b]) == has_booking_conflict(b, [a])


def test_conflict_records_metric() -> None:
    existing = [make_accommodation("existing", jan(3), jan(6))]
    before = REGISTRY.get_sample_value("booking_conflicts_total") or 0.0

    find_booking_conflict(
        TimeInterval(start=jan(2), end=jan(4)), existing, metrics=PrometheusBookingMetrics()
    )

    assert REGISTRY.get_sample_value("booking_conflicts_total") == before + 1


def test_overlap_window() -> None:
    shared = overlap_window(TimeInterval(start=jan(2), end=jan(5)), TimeInterval(start=jan(3), end=jan(8)))

    assert shared == TimeInterval(start=jan(3), end=jan(5))
    assert overlap_window(TimeInterval(start=jan(2), end=jan(3)), TimeInterval(start=jan(3), end=jan(4))) is None


# Verification


def test_verify_accepts_valid_booking(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [make_accommodation("existing", jan(1), jan(3))]
    candidate = make_accommodation("new", jan(3), jan(6))

    assert verify_accommodation(candidate, existing, *trip_bounds) == []


def test_verify_rejects_inverted_dates(trip_bounds: tuple[datetime, datetime]) -> None:
    candidate = make_accommodation("new", jan(5), jan(5))

    violations = verify_accommodation(candidate, [], *trip_bounds)

    assert len(violations) == 1
    assert violations[0].code == "ACCOMMODATION_DATES_INVALID"
    assert violations[0].kind == ViolationKind.DATES
    assert violations[0].severity == ViolationSeverity.BLOCKING
    assert violations[0].affected_accommodation_ids == ["new"]


def test_verify_rejects_stay_outside_trip(trip_bounds: tuple[datetime, datetime]) -> None:
    candidate = make_accommodation("new", jan(8), jan(12))

    violations = verify_accommodation(candidate, [], *trip_bounds)

    assert [v.code for v in violations] == ["ACCOMMODATION_OUTSIDE_TRAVEL"]
    assert violations[0].details["travel_end"] == jan(10).isoformat()


def test_verify_reports_overlap_details(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [make_accommodation("existing", jan(3), jan(6))]
    candidate = make_accommodation("new", jan(2), jan(4))

    violations = verify_accommodation(candidate, existing, *trip_bounds)

    assert len(violations) == 1
    violation = violations[0]
    assert violation.kind == ViolationKind.OVERLAP
    assert violation.code == "ACCOMMODATION_OVERLAP_DETECTED"
    assert violation.affected_accommodation_ids == ["new", "existing"]
    assert violation.details["conflicting_accommodation_id"] == "existing"
    assert violation.details["conflicting_accommodation_name"] == "Stay existing"
    assert violation.details["overlap_start"] == jan(3).isoformat()
    assert violation.details["overlap_end"] == jan(4).isoformat()


def test_verify_update_ignores_own_record(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [make_accommodation("mine", jan(2), jan(4))]
    candidate = make_accommodation("mine", jan(2), jan(5))

    assert verify_accommodation(candidate, existing, *trip_bounds, exclude_id="mine") == []


# Nights and suggestions


def test_accommodation_nights() -> None:
    assert accommodation_nights(jan(1), jan(4)) == 3
    assert accommodation_nights(jan(1, 15), jan(2, 11)) == 1
    assert accommodation_nights(jan(4), jan(1)) == 3


def test_suggest_whole_trip_when_nothing_booked(trip_bounds: tuple[datetime, datetime]) -> None:
    assert suggest_accommodation_dates([], *trip_bounds) == TimeInterval(start=jan(1), end=jan(10))


def test_suggest_gap_before_first_stay(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [make_accommodation("late", jan(3), jan(10))]

    assert suggest_accommodation_dates(existing, *trip_bounds) == TimeInterval(start=jan(1), end=jan(3))


def test_suggest_gap_between_stays(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [
        make_accommodation("second", jan(6), jan(10)),
        make_accommodation("first", jan(1), jan(4)),
    ]

    assert suggest_accommodation_dates(existing, *trip_bounds) == TimeInterval(start=jan(4), end=jan(6))


def test_suggest_gap_after_last_stay(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [make_accommodation("early", jan(1), jan(5))]

    assert suggest_accommodation_dates(existing, *trip_bounds) == TimeInterval(start=jan(5), end=jan(10))


def test_suggest_none_when_fully_covered(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [
        make_accommodation("first", jan(1), jan(5)),
        make_accommodation("second", jan(5), jan(10)),
    ]

    assert suggest_accommodation_dates(existing, *trip_bounds) is None


def test_suggest_skips_gap_shorter_than_a_night(trip_bounds: tuple[datetime, datetime]) -> None:
    existing = [
        make_accommodation("first", jan(1), jan(5, 10)),
        make_accommodation("second", jan(5, 20), jan(8)),
    ]

    assert suggest_accommodation_dates(existing, *trip_bounds) == TimeInterval(start=jan(8), end=jan(10))
