"""Smoke tests for the Textual app driven through the pilot."""

from __future__ import annotations

import asyncio

from swiper.controller import Phase
from swiper.models import Action
from swiper.sources import ContentLoadError
from swiper.swiper_app import NewsSwiperApp
from tests.fakes import FakeSink, make_item


class ListSource:
    def __init__(self, items) -> None:
        self.items = list(items)
        self.fetches = 0

    def fetch(self, per_page: int = 20):
        self.fetches += 1
        return self.items[:per_page]


class BrokenSource:
    def fetch(self, per_page: int = 20):
        raise ContentLoadError("server down")


async def _wait_for(pilot, predicate, timeout: float = 3.0) -> None:
    for _ in range(int(timeout / 0.05)):
        if predicate():
            return
        await pilot.pause(0.05)
    assert predicate()


def test_keyboard_swipes_walk_the_deck() -> None:
    sink = FakeSink()
    app = NewsSwiperApp(ListSource([make_item(1, "A"), make_item(2, "B")]), sink, settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            await pilot.press("right")
            await _wait_for(pilot, lambda: app.controller.deck.cursor == 1 and len(sink.calls) == 1)
            await pilot.press("left")
            await _wait_for(pilot, lambda: app.controller.phase is Phase.EXHAUSTED and len(sink.calls) == 2)

    asyncio.run(scenario())

    assert [action for _, action in sink.calls] == [Action.SAVE, Action.SKIP]
    assert [item.title for item, _ in sink.calls] == ["A", "B"]
    assert app.controller.closed


def test_receipts_can_be_switched_off() -> None:
    sink = FakeSink()
    app = NewsSwiperApp(ListSource([make_item(1)]), sink, settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            await pilot.press("p")
            await pilot.press("right")
            await _wait_for(pilot, lambda: app.controller.phase is Phase.EXHAUSTED)

    asyncio.run(scenario())

    assert app.controller.state.recording is False
    assert sink.calls == []


def test_load_failure_then_start_over() -> None:
    app = NewsSwiperApp(BrokenSource(), FakeSink(), settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.system_status == "Failed to load news")
            assert app.controller.phase is Phase.EXHAUSTED
            assert len(app.controller.deck) == 0

            app.source = ListSource([make_item(7)])
            await pilot.press("o")
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            assert app.controller.deck.current().id == 7

    asyncio.run(scenario())


def _card_origin(app: NewsSwiperApp) -> tuple[int, int]:
    card = app.query_one("#card")
    return card.region.x + 10, card.region.y + 2


def _card_offset_x(app: NewsSwiperApp) -> float:
    return app.query_one("#card").styles.offset.x.value


def test_mouse_drag_past_threshold_saves() -> None:
    sink = FakeSink()
    app = NewsSwiperApp(ListSource([make_item(1, "A"), make_item(2, "B")]), sink, settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            x, y = _card_origin(app)

            await pilot.mouse_down(offset=(x, y))
            await _wait_for(pilot, lambda: app.controller.phase is Phase.DRAGGING)
            await pilot.hover(offset=(x + 5, y))
            await _wait_for(pilot, lambda: _card_offset_x(app) == 5)
            assert app.query_one("#card").border_title
            await pilot.hover(offset=(x + 15, y))
            await pilot.hover(offset=(x + 25, y))
            await pilot.mouse_up(offset=(x + 25, y))

            await _wait_for(pilot, lambda: app.controller.deck.cursor == 1 and len(sink.calls) == 1)
            assert _card_offset_x(app) == 0
            assert app.mouse_captured is None

    asyncio.run(scenario())

    assert sink.calls[0][0].title == "A"
    assert sink.calls[0][1] is Action.SAVE


def test_short_mouse_drag_springs_back() -> None:
    sink = FakeSink()
    app = NewsSwiperApp(ListSource([make_item(1)]), sink, settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            x, y = _card_origin(app)

            await pilot.mouse_down(offset=(x, y))
            await pilot.hover(offset=(x - 6, y))
            await _wait_for(pilot, lambda: _card_offset_x(app) == -6)
            await pilot.mouse_up(offset=(x - 6, y))

            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            assert _card_offset_x(app) == 0
            assert app.query_one("#card").border_title == ""

    asyncio.run(scenario())

    assert sink.calls == []


def test_key_swipe_drops_a_drag_that_never_ended() -> None:
    sink = FakeSink()
    app = NewsSwiperApp(ListSource([make_item(1), make_item(2)]), sink, settle_delay_ms=10)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await _wait_for(pilot, lambda: app.controller.phase is Phase.IDLE)
            x, y = _card_origin(app)

            await pilot.mouse_down(offset=(x, y))
            await pilot.hover(offset=(x - 4, y))
            await _wait_for(pilot, lambda: app.controller.phase is Phase.DRAGGING)

            await pilot.press("right")
            await _wait_for(pilot, lambda: app.controller.deck.cursor == 1 and len(sink.calls) == 1)
            assert app.mouse_captured is None
            assert app.system_status == "Card 2 of 2 (1 left)"

    asyncio.run(scenario())

    assert sink.calls[0][1] is Action.SAVE
