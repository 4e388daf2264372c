"""Pointer gesture models - raw pointer input and the live drag state."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from tripcal.models.events import DisplayEvent


class DragMode(str, Enum):
    """What a gesture does to the grabbed event."""

    dragging = "dragging"
    resizing = "resizing"


class ResizeEdge(str, Enum):
    """Edge affordance grabbed for a resize."""

    top = "top"
    bottom = "bottom"


class PointerEvent(BaseModel):
    """Pointer position in client (viewport) coordinates."""

    client_x: float
    client_y: float


class ElementBox(BaseModel):
    """Client rect of the rendered event box that received pointer-down."""

    top: float
    height: float


class Viewport(BaseModel):
    """Scrollable content area handle supplied by the host."""

    left: float
    top: float
    scroll_left: float = 0.0
    scroll_top: float = 0.0


@dataclass
class DragState:
    """State of the single active gesture, owned by a DragController."""

    event: DisplayEvent
    day_index: int
    pointer_offset: float
    mode: DragMode
    pointer_start_x: float
    pointer_start_y: float
    resize_edge: ResizeEdge | None = None
    has_crossed_move_threshold: bool = False
    # Pixel height of the event hidden above the grabbed box (event began on an earlier day)
    overflow_height: float = 0.0
    settle_deadline: float | None = None
    updates_emitted: int = 0
    vetoes: int = 0

    @property
    def event_id(self) -> str:
        return self.event.id

    @property
    def is_settling(self) -> bool:
        return self.settle_deadline is not None
