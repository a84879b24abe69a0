"""Shared fixtures for swipe controller tests."""

from __future__ import annotations

import pytest

from swiper.controller import SwipeController
from swiper.gesture import GestureTracker
from swiper.models import ContentItem
from tests.fakes import FakeScheduler, FakeSink, FakeView, make_item


@pytest.fixture
def items() -> list[ContentItem]:
    return [make_item(1, "A"), make_item(2, "B")]


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def view() -> FakeView:
    return FakeView()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def controller(sink: FakeSink, view: FakeView, scheduler: FakeScheduler) -> SwipeController:
    return SwipeController(sink=sink, view=view, schedule=scheduler, tracker=GestureTracker(100))
