"""Tests for drag tracking and swipe classification."""

from __future__ import annotations

import pytest

from swiper.gesture import NEUTRAL_TRANSFORM, DragState, GestureIntent, GestureTracker
from swiper.models import Direction


def test_begin_opens_drag_at_pointer() -> None:
    drag = GestureTracker().begin(None, 10, 20)

    assert drag == DragState(origin_x=10, origin_y=20, current_x=10, current_y=20)
    assert drag.dx == 0
    assert drag.dy == 0


def test_begin_while_active_keeps_first_gesture() -> None:
    tracker = GestureTracker()
    first = tracker.begin(None, 10, 20)

    assert tracker.begin(first, 300, 300) is first


def test_begin_when_locked_is_noop() -> None:
    assert GestureTracker().begin(None, 10, 20, locked=True) is None


def test_update_moves_current_point_only() -> None:
    tracker = GestureTracker()
    drag = tracker.update(tracker.begin(None, 10, 20), 70, 5)

    assert (drag.origin_x, drag.origin_y) == (10, 20)
    assert (drag.dx, drag.dy) == (60, -15)


def test_update_ignores_other_pointers_and_missing_drag() -> None:
    tracker = GestureTracker()
    drag = tracker.begin(None, 0, 0, pointer_id=1)

    assert tracker.update(drag, 50, 50, pointer_id=2) is drag
    assert tracker.update(None, 50, 50) is None


def test_transform_damps_vertical_and_tilts_with_dx() -> None:
    tracker = GestureTracker(threshold=100)
    drag = tracker.update(tracker.begin(None, 0, 0), 50, 20)

    transform = tracker.transform(drag)

    assert transform.translate_x == 50
    assert transform.translate_y == pytest.approx(2.0)
    assert transform.rotate_deg == pytest.approx(10.0)
    assert tracker.transform(None) == NEUTRAL_TRANSFORM


@pytest.mark.parametrize(
    ("dx", "intent"),
    [
        (150, GestureIntent.COMMIT_RIGHT),
        (-120, GestureIntent.COMMIT_LEFT),
        (100, GestureIntent.RESET),
        (-100, GestureIntent.RESET),
        (40, GestureIntent.RESET),
    ],
)
def test_end_classifies_against_threshold(dx: float, intent: GestureIntent) -> None:
    tracker = GestureTracker(threshold=100)
    drag = tracker.update(tracker.begin(None, 200, 200), 200 + dx, 230)

    assert tracker.end(drag) is intent


def test_end_without_drag_is_pending() -> None:
    assert GestureTracker().end(None) is GestureIntent.PENDING


def test_threshold_is_unit_agnostic() -> None:
    cells = GestureTracker(threshold=12)

    assert cells.classify(13).direction is Direction.RIGHT
    assert cells.classify(-13).direction is Direction.LEFT
    assert cells.classify(12).direction is None


def test_threshold_must_be_positive() -> None:
    with pytest.raises(ValueError):
        GestureTracker(threshold=0)
