"""Scheduler backed by Textual timers."""

from __future__ import annotations

from collections.abc import Callable

from textual.message_pump import MessagePump
from textual.timer import Timer


class TimerHandle:
    """Cancels a Textual timer."""

    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class DeferredCall:
    """A callback queued after the next refresh; cancelling turns it into a no-op."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __call__(self) -> None:
        if not self.cancelled:
            self._callback()


class TextualScheduler:
    """Runs callbacks on a widget's message loop (the screen, usually)."""

    def __init__(self, owner: MessagePump) -> None:
        self._owner = owner

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return TimerHandle(self._owner.set_timer(delay, callback))

    def call_soon(self, callback: Callable[[], None]) -> DeferredCall:
        # The next refresh is the terminal's equivalent of an animation frame
        call = DeferredCall(callback)
        self._owner.call_after_refresh(call)
        return call
