"""Single-pointer drag tracking and swipe classification."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from swiper.config import SWIPE_THRESHOLD
from swiper.models import Direction

# Vertical follow is damped so the card mostly slides sideways.
_VERTICAL_DAMPING = 0.1
_MAX_TILT_DEG = 20.0


class GestureIntent(str, Enum):
    PENDING = "pending"
    COMMIT_LEFT = "commit_left"
    COMMIT_RIGHT = "commit_right"
    RESET = "reset"

    @property
    def direction(self) -> Direction | None:
        if self is GestureIntent.COMMIT_LEFT:
            return Direction.LEFT
        if self is GestureIntent.COMMIT_RIGHT:
            return Direction.RIGHT
        return None


@dataclass(frozen=True)
class DragState:
    """An open drag for one pointer."""

    origin_x: float
    origin_y: float
    current_x: float
    current_y: float
    active: bool = True
    pointer_id: int = 0

    @property
    def dx(self) -> float:
        return self.current_x - self.origin_x

    @property
    def dy(self) -> float:
        return self.current_y - self.origin_y


@dataclass(frozen=True)
class CardTransform:
    """Presentational offset and tilt of the card being dragged."""

    translate_x: float = 0.0
    translate_y: float = 0.0
    rotate_deg: float = 0.0


NEUTRAL_TRANSFORM = CardTransform()


class GestureTracker:
    """
    Turn pointer positions into a drag vector and a swipe intent.

    The tracker holds only configuration; drag state is passed in and returned
    so callers can keep it inside an immutable state value.
    """

    def __init__(self, threshold: float = SWIPE_THRESHOLD) -> None:
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self.threshold = threshold

    def begin(
        self,
        drag: DragState | None,
        x: float,
        y: float,
        pointer_id: int = 0,
        locked: bool = False,
    ) -> DragState | None:
        """Open a drag at (x, y) unless locked or a drag is already active."""
        if locked:
            return drag
        if drag is not None and drag.active:
            # First gesture wins; duplicate down events do not restart it.
            return drag
        return DragState(origin_x=x, origin_y=y, current_x=x, current_y=y, pointer_id=pointer_id)

    def update(self, drag: DragState | None, x: float, y: float, pointer_id: int = 0) -> DragState | None:
        if drag is None or not drag.active or drag.pointer_id != pointer_id:
            return drag
        return replace(drag, current_x=x, current_y=y)

    def transform(self, drag: DragState | None) -> CardTransform:
        if drag is None or not drag.active:
            return NEUTRAL_TRANSFORM
        return CardTransform(
            translate_x=drag.dx,
            translate_y=drag.dy * _VERTICAL_DAMPING,
            rotate_deg=(drag.dx / self.threshold) * _MAX_TILT_DEG,
        )

    def classify(self, dx: float) -> GestureIntent:
        if abs(dx) > self.threshold:
            return GestureIntent.COMMIT_RIGHT if dx > 0 else GestureIntent.COMMIT_LEFT
        return GestureIntent.RESET

    def end(self, drag: DragState | None) -> GestureIntent:
        """Classify a released drag. The caller discards the drag afterwards."""
        if drag is None or not drag.active:
            return GestureIntent.PENDING
        return self.classify(drag.dx)
