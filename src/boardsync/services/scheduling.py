"""Timer abstraction used by the deep-link resolver."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules callbacks on the UI loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback after delay seconds."""
        ...

    def call_soon(self, callback: Callable[[], None]) -> Cancellable:
        """Run callback on the next frame/loop iteration."""
        ...


class AsyncioScheduler:
    """Scheduler on top of the running asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        return self.loop.call_later(delay, callback)

    def call_soon(self, callback: Callable[[], None]) -> Cancellable:
        return self.loop.call_soon(callback)
