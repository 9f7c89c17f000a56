"""Fire-and-forget dispatch of persistence calls.

The optimistic store is always updated first. A ``Patch`` then names the
gateway call that records the change, and ``dispatch`` starts it as an
asyncio task that nobody awaits. Calls are independent: there is no queue,
no coalescing, and no guarantee that they complete in the order they were
issued. A failed call is logged and reported through ``on_failure``; the
store is never rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..repositories import GatewayProtocol

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100

GATEWAY_OPERATIONS = frozenset(
    {
        "move_card",
        "reorder_cards",
        "reorder_columns",
        "archive_card",
        "restore_card",
        "create_card",
        "update_card",
        "create_column",
        "rename_column",
        "delete_column",
    }
)


@dataclass(frozen=True)
class Patch:
    """One persistence call: a gateway operation and its arguments."""

    operation: str
    args: tuple = ()

    def __post_init__(self) -> None:
        if self.operation not in GATEWAY_OPERATIONS:
            raise ValueError(f"Unknown gateway operation: {self.operation}")

    def describe(self) -> str:
        return f"{self.operation}{self.args!r}"


@dataclass
class CommitResult:
    """Outcome of committing a patch."""

    patch: Patch
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


FailureHook = Callable[[CommitResult], Any]


@dataclass
class Dispatcher:
    """Starts gateway calls without waiting for them."""

    gateway: GatewayProtocol
    on_failure: FailureHook | None = None
    _in_flight: set[asyncio.Task] = field(default_factory=set, init=False, repr=False)
    # Most recent results only; failures are also handed to on_failure
    history: deque[CommitResult] = field(
        default_factory=lambda: deque(maxlen=HISTORY_LIMIT), init=False, repr=False
    )

    async def commit(self, patch: Patch) -> CommitResult:
        """Await one gateway call and report how it went."""
        method = getattr(self.gateway, patch.operation)
        try:
            await method(*patch.args)
        except Exception as e:
            logger.warning("Persistence failed: %s", patch.describe(), exc_info=True)
            result = CommitResult(patch, e)
            if self.on_failure is not None:
                self.on_failure(result)
        else:
            logger.debug("Persisted: %s", patch.describe())
            result = CommitResult(patch)
        self.history.append(result)
        return result

    def dispatch(self, patch: Patch) -> asyncio.Task:
        """
        Start committing a patch on the running loop and return immediately.

        Raises RuntimeError when called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.commit(patch), name=f"boardsync:{patch.operation}")
        # Hold a reference until done so the task isn't garbage collected
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        logger.debug("Dispatched: %s", patch.describe())
        return task

    @property
    def in_flight(self) -> int:
        """Number of calls started but not finished."""
        return len(self._in_flight)

    async def drain(self) -> None:
        """Wait for every in-flight call. Used at shutdown and in tests."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
