"""Violation models - problems found when checking an accommodation booking."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for booking violations."""

    ADVISORY = "advisory"
    BLOCKING = "blocking"


class ViolationKind(str, Enum):
    """Categories of booking checks."""

    DATES = "dates"
    OVERLAP = "overlap"


class Violation(BaseModel):
    """A booking problem detected client-side.

    The write path turns these into user-facing messages; the server repeats
    the check authoritatively.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "ACCOMMODATION_OVERLAP_DETECTED"
    message: str  # Human-readable description (1-2 sentences)
    severity: ViolationSeverity
    affected_accommodation_ids: list[str]
    details: dict[str, JsonValue] = Field(default_factory=dict)
