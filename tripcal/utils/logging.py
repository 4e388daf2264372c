"""Structured logging for drag gestures."""

import logging
from typing import Any

from tripcal.models.drag import DragState

logger = logging.getLogger(__name__)


class DragLogger:
    """Interface for gesture logging (no-op default)."""

    def log_gesture(self, state: DragState, outcome: str) -> None:
        """Log a finished gesture."""
        pass


class StructuredDragLogger(DragLogger):
    """Structured logger for finished drag/resize gestures."""

    def log_gesture(self, state: DragState, outcome: str) -> None:
        """Log gesture outcome with structured data."""
        log_data: dict[str, Any] = {
            "event_id": state.event_id,
            "day_index": state.day_index,
            "mode": state.mode.value,
            "outcome": outcome,
            "updates_emitted": state.updates_emitted,
            "vetoes": state.vetoes,
        }

        if state.resize_edge is not None:
            log_data["resize_edge"] = state.resize_edge.value

        log_msg = f"Gesture finished: {state.event_id} - {outcome}"

        if state.updates_emitted or outcome == "click":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
