"""Models package - re-exports for convenience."""

from tripcal.models.accommodation import (
    Accommodation,
    AccommodationType,
    BarSpan,
    PlacedAccommodation,
)
from tripcal.models.common import EventType, TimeInterval, intervals_overlap
from tripcal.models.drag import (
    DragMode,
    DragState,
    ElementBox,
    PointerEvent,
    ResizeEdge,
    Viewport,
)
from tripcal.models.events import (
    DisplayEvent,
    EventBox,
    EventUpdate,
    LayoutAssignment,
    ScheduledEvent,
)
from tripcal.models.violations import Violation, ViolationKind, ViolationSeverity

__all__ = [
    # Common
    "EventType",
    "TimeInterval",
    "intervals_overlap",
    # Events
    "ScheduledEvent",
    "DisplayEvent",
    "LayoutAssignment",
    "EventBox",
    "EventUpdate",
    # Accommodation
    "Accommodation",
    "AccommodationType",
    "PlacedAccommodation",
    "BarSpan",
    # Drag
    "DragMode",
    "DragState",
    "ElementBox",
    "PointerEvent",
    "ResizeEdge",
    "Viewport",
    # Violations
    "Violation",
    "ViolationKind",
    "ViolationSeverity",
]
