"""Prometheus metrics for drag gestures and booking checks."""

from prometheus_client import Counter

# Drag/resize metrics
drag_updates_total = Counter(
    "drag_updates_total",
    "Total partial event updates emitted by drag gestures",
    ["mode"],
)

drag_vetoes_total = Counter(
    "drag_vetoes_total",
    "Total pointer-move frames that produced no update",
    ["reason"],
)

drag_gestures_total = Counter(
    "drag_gestures_total",
    "Total finished pointer gestures",
    ["outcome"],
)

# Booking metrics
booking_conflicts_total = Counter(
    "booking_conflicts_total",
    "Total accommodation booking conflicts detected client-side",
)


class DragMetrics:
    """Interface for drag gesture metrics (no-op default)."""

    def inc_update(self, mode: str) -> None:
        """Count an emitted update."""
        pass

    def inc_veto(self, reason: str) -> None:
        """Count a vetoed frame."""
        pass

    def inc_gesture(self, outcome: str) -> None:
        """Count a finished gesture."""
        pass


class BookingMetrics:
    """Interface for booking check metrics (no-op default)."""

    def inc_conflict(self) -> None:
        """Count a detected conflict."""
        pass


class PrometheusDragMetrics(DragMetrics):
    """Prometheus-based drag metrics implementation."""

    def inc_update(self, mode: str) -> None:
        drag_updates_total.labels(mode=mode).inc()

    def inc_veto(self, reason: str) -> None:
        drag_vetoes_total.labels(reason=reason).inc()

    def inc_gesture(self, outcome: str) -> None:
        drag_gestures_total.labels(outcome=outcome).inc()


class PrometheusBookingMetrics(BookingMetrics):
    """Prometheus-based booking metrics implementation."""

    def inc_conflict(self) -> None:
        booking_conflicts_total.inc()
