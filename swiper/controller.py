"""
Swipe state machine and the shell that runs its effects.

`transition` is pure: it takes the current `SwipeState` and one event and
returns the next state plus a list of effects. `SwipeController` owns the
state, executes effects against a view, a timer scheduler and a job runner,
and feeds sink results back in as events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, Protocol

from swiper.config import SETTLE_DELAY_MS
from swiper.deck import CardDeck
from swiper.gesture import NEUTRAL_TRANSFORM, CardTransform, DragState, GestureIntent, GestureTracker
from swiper.models import Action, ContentItem, Direction, NotifyLevel, OutcomeKind, SinkOutcome

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load news"


class Phase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SwipeState:
    deck: CardDeck = field(default_factory=CardDeck)
    phase: Phase = Phase.EXHAUSTED
    drag: DragState | None = None
    recording: bool = True


# Events


@dataclass(frozen=True)
class DeckLoaded:
    items: tuple[ContentItem, ...]


@dataclass(frozen=True)
class LoadFailed:
    reason: str


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerUp:
    pointer_id: int = 0


@dataclass(frozen=True)
class PointerCancel:
    pass


@dataclass(frozen=True)
class SwipeRequested:
    direction: Direction


@dataclass(frozen=True)
class SettleElapsed:
    pass


@dataclass(frozen=True)
class SinkFinished:
    item: ContentItem
    action: Action
    outcome: SinkOutcome


@dataclass(frozen=True)
class SinkErrored:
    item: ContentItem
    action: Action
    error: str


@dataclass(frozen=True)
class RecordingToggled:
    enabled: bool


Event = (
    DeckLoaded
    | LoadFailed
    | PointerDown
    | PointerMove
    | PointerUp
    | PointerCancel
    | SwipeRequested
    | SettleElapsed
    | SinkFinished
    | SinkErrored
    | RecordingToggled
)


# Effects


@dataclass(frozen=True)
class Render:
    item: ContentItem


@dataclass(frozen=True)
class RenderExhausted:
    pass


@dataclass(frozen=True)
class RenderError:
    message: str


@dataclass(frozen=True)
class ShowTransform:
    transform: CardTransform


@dataclass(frozen=True)
class AnimateExit:
    direction: Direction


@dataclass(frozen=True)
class RecordAction:
    item: ContentItem
    action: Action


@dataclass(frozen=True)
class StartSettleTimer:
    delay_ms: int


@dataclass(frozen=True)
class CancelSettleTimer:
    pass


@dataclass(frozen=True)
class Notify:
    message: str
    level: NotifyLevel = NotifyLevel.INFO


Effect = (
    Render
    | RenderExhausted
    | RenderError
    | ShowTransform
    | AnimateExit
    | RecordAction
    | StartSettleTimer
    | CancelSettleTimer
    | Notify
)


def initial_state(recording: bool = True) -> SwipeState:
    """Empty deck: nothing to swipe until a deck is loaded."""
    return SwipeState(recording=recording)


def _render_current(deck: CardDeck) -> Effect:
    item = deck.current()
    if item is None:
        return RenderExhausted()
    return Render(item)


def _resting_phase(deck: CardDeck) -> Phase:
    return Phase.EXHAUSTED if deck.is_exhausted() else Phase.IDLE


def sink_notification(outcome: SinkOutcome) -> Notify:
    """Map a three-way sink outcome to a user-facing notification."""
    kind = outcome.kind
    if kind is OutcomeKind.SUCCESS:
        return Notify("Receipt printed successfully!", NotifyLevel.SUCCESS)
    if kind is OutcomeKind.DEGRADED:
        return Notify(f"{outcome.message} - {outcome.warning}", NotifyLevel.INFO)
    return Notify("Receipt printing failed", NotifyLevel.ERROR)


def _commit(state: SwipeState, direction: Direction, settle_delay_ms: int) -> tuple[SwipeState, list[Effect]]:
    item = state.deck.current()
    if item is None:
        return (replace(state, phase=Phase.EXHAUSTED, drag=None), [])

    # The settle timer is armed before the sink runs so advancement never waits on it.
    effects: list[Effect] = [AnimateExit(direction), StartSettleTimer(settle_delay_ms)]
    if state.recording:
        effects.append(Notify("Printing receipt...", NotifyLevel.INFO))
        effects.append(RecordAction(item, direction.action))
    return (replace(state, phase=Phase.COMMITTING, drag=None), effects)


def transition(
    state: SwipeState,
    event: Event,
    tracker: GestureTracker,
    settle_delay_ms: int = SETTLE_DELAY_MS,
) -> tuple[SwipeState, list[Effect]]:
    """Apply one event to the state and return the new state and its effects."""
    if isinstance(event, DeckLoaded):
        deck = CardDeck.of(event.items)
        effects: list[Effect] = []
        if state.phase is Phase.COMMITTING:
            effects.append(CancelSettleTimer())
        effects.append(_render_current(deck))
        return (replace(state, deck=deck, phase=_resting_phase(deck), drag=None), effects)

    if isinstance(event, LoadFailed):
        effects = []
        if state.phase is Phase.COMMITTING:
            effects.append(CancelSettleTimer())
        effects.append(RenderError(LOAD_FAILED_MESSAGE))
        return (replace(state, deck=CardDeck(), phase=Phase.EXHAUSTED, drag=None), effects)

    if isinstance(event, PointerDown):
        if state.phase not in (Phase.IDLE, Phase.DRAGGING):
            return (state, [])
        drag = tracker.begin(
            state.drag,
            event.x,
            event.y,
            pointer_id=event.pointer_id,
            locked=state.deck.is_exhausted(),
        )
        if drag is None or drag is state.drag:
            return (state, [])
        return (replace(state, phase=Phase.DRAGGING, drag=drag), [])

    if isinstance(event, PointerMove):
        if state.phase is not Phase.DRAGGING:
            return (state, [])
        drag = tracker.update(state.drag, event.x, event.y, pointer_id=event.pointer_id)
        if drag is state.drag:
            return (state, [])
        return (replace(state, drag=drag), [ShowTransform(tracker.transform(drag))])

    if isinstance(event, PointerUp):
        if state.phase is not Phase.DRAGGING or state.drag is None:
            return (state, [])
        if state.drag.pointer_id != event.pointer_id:
            return (state, [])
        intent = tracker.end(state.drag)
        direction = intent.direction
        if direction is None:
            return (replace(state, phase=Phase.IDLE, drag=None), [ShowTransform(NEUTRAL_TRANSFORM)])
        return _commit(state, direction, settle_delay_ms)

    if isinstance(event, PointerCancel):
        # The release was lost, e.g. the button came up outside the terminal.
        if state.phase is not Phase.DRAGGING:
            return (state, [])
        return (replace(state, phase=Phase.IDLE, drag=None), [ShowTransform(NEUTRAL_TRANSFORM)])

    if isinstance(event, SwipeRequested):
        if state.phase is not Phase.IDLE:
            return (state, [])
        return _commit(state, event.direction, settle_delay_ms)

    if isinstance(event, SettleElapsed):
        if state.phase is not Phase.COMMITTING:
            return (state, [])
        deck = state.deck.advance()
        return (replace(state, deck=deck, phase=_resting_phase(deck)), [_render_current(deck)])

    if isinstance(event, SinkFinished):
        return (state, [sink_notification(event.outcome)])

    if isinstance(event, SinkErrored):
        return (state, [Notify("Receipt printing error", NotifyLevel.ERROR)])

    if isinstance(event, RecordingToggled):
        label = "enabled" if event.enabled else "disabled"
        return (replace(state, recording=event.enabled), [Notify(f"Receipt printing {label}", NotifyLevel.INFO)])

    raise TypeError(f"Unknown swipe event: {event!r}")


class ActionSink(Protocol):
    def record(self, item: ContentItem, action: Action) -> SinkOutcome: ...


class SwipeView(Protocol):
    def render_item(self, item: ContentItem) -> None: ...

    def render_exhausted(self) -> None: ...

    def render_error(self, message: str) -> None: ...

    def show_transform(self, transform: CardTransform) -> None: ...

    def animate_exit(self, direction: Direction) -> None: ...

    def notify_user(self, message: str, level: NotifyLevel) -> None: ...


class TimerHandle(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]
JobDone = Callable[[Any, "BaseException | None"], None]
JobRunner = Callable[[Callable[[], Any], JobDone], None]


def run_inline(job: Callable[[], Any], done: JobDone) -> None:
    """Run a job on the calling thread and report its result."""
    try:
        result = job()
    except Exception as exc:
        done(None, exc)
        return
    done(result, None)


class SwipeController:
    """Hold the swipe state and execute the effects of each transition."""

    def __init__(
        self,
        sink: ActionSink,
        view: SwipeView,
        schedule: Scheduler,
        run_job: JobRunner = run_inline,
        tracker: GestureTracker | None = None,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        recording: bool = True,
    ) -> None:
        self.sink = sink
        self.view = view
        self.tracker = tracker or GestureTracker()
        self.settle_delay_ms = settle_delay_ms
        self.state = initial_state(recording=recording)
        self._schedule = schedule
        self._run_job = run_job
        self._timer: TimerHandle | None = None
        self._closed = False

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def deck(self) -> CardDeck:
        return self.state.deck

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, event: Event) -> None:
        if self._closed:
            return
        previous = self.state.phase
        self.state, effects = transition(self.state, event, self.tracker, self.settle_delay_ms)
        if self.state.phase is not previous:
            logger.debug(
                "phase %s -> %s event=%s cursor=%s/%s",
                previous.value,
                self.state.phase.value,
                type(event).__name__,
                self.state.deck.cursor,
                len(self.state.deck),
            )
        for effect in effects:
            self._execute(effect)

    def load(self, items: Iterable[ContentItem]) -> None:
        self.dispatch(DeckLoaded(tuple(items)))

    def load_failed(self, reason: str) -> None:
        logger.error("load_failed reason=%s", reason)
        self.dispatch(LoadFailed(reason))

    def begin(self, x: float, y: float, pointer_id: int = 0) -> None:
        self.dispatch(PointerDown(x, y, pointer_id))

    def update(self, x: float, y: float, pointer_id: int = 0) -> None:
        self.dispatch(PointerMove(x, y, pointer_id))

    def end(self, pointer_id: int = 0) -> None:
        self.dispatch(PointerUp(pointer_id))

    def cancel_drag(self) -> None:
        self.dispatch(PointerCancel())

    def swipe(self, direction: Direction) -> None:
        self.dispatch(SwipeRequested(direction))

    def set_recording(self, enabled: bool) -> None:
        self.dispatch(RecordingToggled(enabled))

    def close(self) -> None:
        """Abandon the pending settle timer and any late sink results."""
        self._closed = True
        self._stop_timer()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _on_settle(self) -> None:
        self._timer = None
        self.dispatch(SettleElapsed())

    def _execute(self, effect: Effect) -> None:
        if isinstance(effect, Render):
            self.view.render_item(effect.item)
        elif isinstance(effect, RenderExhausted):
            self.view.render_exhausted()
        elif isinstance(effect, RenderError):
            self.view.render_error(effect.message)
        elif isinstance(effect, ShowTransform):
            self.view.show_transform(effect.transform)
        elif isinstance(effect, AnimateExit):
            self.view.animate_exit(effect.direction)
        elif isinstance(effect, Notify):
            self.view.notify_user(effect.message, effect.level)
        elif isinstance(effect, StartSettleTimer):
            self._stop_timer()
            self._timer = self._schedule(effect.delay_ms / 1000.0, self._on_settle)
        elif isinstance(effect, CancelSettleTimer):
            self._stop_timer()
        elif isinstance(effect, RecordAction):
            self._record(effect.item, effect.action)

    def _record(self, item: ContentItem, action: Action) -> None:
        logger.debug("record_start item_id=%s action=%s", item.id, action.value)

        def job() -> SinkOutcome:
            return self.sink.record(item, action)

        def done(outcome: SinkOutcome | None, error: BaseException | None) -> None:
            if self._closed:
                return
            if error is not None or outcome is None:
                logger.error("record_error item_id=%s action=%s error=%r", item.id, action.value, error)
                self.dispatch(SinkErrored(item, action, str(error)))
                return
            if outcome.kind is OutcomeKind.FAILED:
                logger.error("record_failed item_id=%s action=%s error=%r", item.id, action.value, outcome.error)
            else:
                logger.debug(
                    "record_done item_id=%s action=%s kind=%s", item.id, action.value, outcome.kind.value
                )
            self.dispatch(SinkFinished(item, action, outcome))

        self._run_job(job, done)
