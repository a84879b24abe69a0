"""Main Textual app class."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Header, Static

from swiper.config import NOTIFICATION_TIMEOUT_S, PAGE_SIZE, SETTLE_DELAY_MS, TERMINAL_SWIPE_THRESHOLD
from swiper.controller import ActionSink, JobDone, Phase, SwipeController
from swiper.gesture import CardTransform, GestureTracker
from swiper.models import ContentItem, Direction, NotifyLevel
from swiper.rendering import exit_label, format_card, format_error, format_exhausted, tilt_marker
from swiper.sources import ContentSource

logger = logging.getLogger(__name__)

_SEVERITY_BY_LEVEL = {
    NotifyLevel.INFO: "information",
    NotifyLevel.SUCCESS: "information",
    NotifyLevel.ERROR: "error",
}


class SwipeCard(Static):
    """The current news card. Mouse drags on it feed the swipe controller."""

    def __init__(self, controller: SwipeController, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.controller = controller

    def on_mouse_down(self, event: events.MouseDown) -> None:
        # Capture so the drag keeps tracking while the card slides under the pointer.
        self.capture_mouse()
        self.controller.begin(event.screen_x, event.screen_y)
        event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.controller.update(event.screen_x, event.screen_y)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.release_mouse()
        self.controller.end()
        event.stop()


class NewsSwiperApp(App):
    """A Textual app for swiping through news cards and printing receipts."""

    TITLE = "News Swiper"
    SUB_TITLE = "Skip / Save"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
        align: center middle;
    }

    #card {
        width: 60;
        height: auto;
        min-height: 12;
        border: round $primary;
        background: $panel;
        padding: 1 2;
    }

    #card.swiped-left {
        border: round $error;
    }

    #card.swiped-right {
        border: round $success;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }
    """

    BINDINGS = [
        ("left", "swipe('left')", "Skip"),
        ("h", "swipe('left')", "Skip"),
        ("right", "swipe('right')", "Save"),
        ("l", "swipe('right')", "Save"),
        ("p", "toggle_receipts", "Toggle receipts"),
        ("o", "start_over", "Start over"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        source: ContentSource,
        sink: ActionSink,
        threshold: float = TERMINAL_SWIPE_THRESHOLD,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        page_size: int = PAGE_SIZE,
        recording: bool = True,
    ) -> None:
        super().__init__()
        self.source = source
        self.sink = sink
        self.page_size = page_size
        self.system_status = "Loading news..."
        self.controller = SwipeController(
            sink=sink,
            view=self,
            schedule=self.set_timer,
            run_job=self._run_in_thread,
            tracker=GestureTracker(threshold),
            settle_delay_ms=settle_delay_ms,
            recording=recording,
        )
        logger.debug("app_init threshold=%s settle_delay_ms=%s", threshold, settle_delay_ms)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-layout"):
            yield SwipeCard(self.controller, "Loading news...", id="card")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_status()
        self._load_deck()

    def on_unmount(self) -> None:
        self.controller.close()
        for resource in (self.source, self.sink):
            close = getattr(resource, "close", None)
            if callable(close):
                close()
        logger.debug("app_unmount")

    def action_swipe(self, direction: str) -> None:
        if self.controller.phase is Phase.DRAGGING:
            # A drag whose mouse-up never arrived would otherwise block key swipes.
            card = self._card()
            if card is not None:
                card.release_mouse()
            self.controller.cancel_drag()
        self.controller.swipe(Direction(direction))

    def action_toggle_receipts(self) -> None:
        self.controller.set_recording(not self.controller.state.recording)
        self._refresh_status()

    def action_start_over(self) -> None:
        self.system_status = "Loading news..."
        self._refresh_status()
        self._load_deck()

    def _run_in_thread(self, job: Callable[[], Any], done: JobDone) -> None:
        """Run a blocking job off the event loop and report back on it."""

        async def work() -> None:
            try:
                result = await asyncio.to_thread(job)
            except Exception as exc:
                done(None, exc)
                return
            done(result, None)

        self.run_worker(work(), group="jobs", exit_on_error=False)

    def _load_deck(self) -> None:
        self._run_in_thread(lambda: self.source.fetch(self.page_size), self._on_deck_fetched)

    def _on_deck_fetched(self, items: list[ContentItem] | None, error: BaseException | None) -> None:
        if error is not None or items is None:
            self.controller.load_failed(str(error))
            return
        logger.debug("deck_loaded rows=%s", len(items))
        self.controller.load(items)

    def _card(self) -> SwipeCard | None:
        try:
            return self.query_one("#card", SwipeCard)
        except NoMatches:
            return None

    def _reset_card(self, card: SwipeCard) -> None:
        card.styles.offset = (0, 0)
        card.border_title = ""
        card.remove_class("swiped-left", "swiped-right")

    # SwipeView

    def render_item(self, item: ContentItem) -> None:
        card = self._card()
        if card is None:
            return
        self._reset_card(card)
        card.update(format_card(item))
        deck = self.controller.deck
        self.system_status = f"Card {deck.cursor + 1} of {len(deck)} ({deck.remaining} left)"
        self._refresh_status()

    def render_exhausted(self) -> None:
        card = self._card()
        if card is None:
            return
        self._reset_card(card)
        card.update(format_exhausted())
        self.system_status = "No more news"
        self._refresh_status()

    def render_error(self, message: str) -> None:
        card = self._card()
        if card is None:
            return
        self._reset_card(card)
        card.update(format_error(message))
        self.system_status = message
        self._refresh_status()

    def show_transform(self, transform: CardTransform) -> None:
        card = self._card()
        if card is None:
            return
        card.styles.offset = (round(transform.translate_x), round(transform.translate_y))
        card.border_title = tilt_marker(transform, self.controller.tracker.threshold)

    def animate_exit(self, direction: Direction) -> None:
        card = self._card()
        if card is None:
            return
        card.add_class(f"swiped-{direction.value}")
        card.border_title = exit_label(direction)
        width = max(1, card.size.width)
        card.styles.offset = (width if direction is Direction.RIGHT else -width, 0)

    def notify_user(self, message: str, level: NotifyLevel) -> None:
        logger.debug("notify level=%s message=%r", level.value, message)
        self.notify(message, severity=_SEVERITY_BY_LEVEL[level], timeout=NOTIFICATION_TIMEOUT_S)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        receipts = "ON" if self.controller.state.recording else "OFF"
        text = Text()
        text.append("←/H skip · →/L save · drag the card · P receipts: ")
        text.append(receipts, style="bold green" if receipts == "ON" else "bold red")
        text.append(" · O start over · Ctrl+Q quit\n")
        text.append(self.system_status or "Ready", style="dim")
        bar.update(text)
