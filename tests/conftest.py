"""Shared fixtures and fakes for boardsync tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from boardsync.models import Board, Card, Column
from boardsync.repositories import MemoryGateway
from boardsync.services import BoardStore


def make_board(
    layout: dict[str, list[str]],
    board_id: str = "b1",
    titles: dict[str, str] | None = None,
) -> Board:
    """Build a board from {column_id: [card_id, ...]} in display order."""
    titles = titles or {}
    columns = []
    for col_idx, (column_id, card_ids) in enumerate(layout.items()):
        cards = [
            Card(id=card_id, title=f"Card {card_id}", column_id=column_id, position=i)
            for i, card_id in enumerate(card_ids)
        ]
        title = titles.get(column_id, column_id.replace("_", " ").title())
        columns.append(Column(id=column_id, title=title, position=col_idx, cards=cards))
    return Board(id=board_id, name="Test board", columns=columns)


def layout_of(board: Board) -> dict[str, list[str]]:
    """{column_id: [card_id, ...]} for assertions."""
    return {column.id: column.card_ids for column in board.columns}


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose time only moves when a test calls advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def call_soon(self, callback: Callable[[], None]) -> ManualTimer:
        return self.call_later(0.0, callback)

    def advance(self, seconds: float = 0.0) -> None:
        """Fire every live timer due within the next `seconds`, in due order."""
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.cancelled and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = max(self.now, timer.due)
            timer.callback()
        self.now = target

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]


class RecordingView:
    """BoardView that records what the resolver asked for."""

    def __init__(self) -> None:
        self.opened: list[tuple[str, str]] = []
        self.highlights: list[str | None] = []
        self.scrolled: list[str] = []
        self.cleared = 0
        self.mounted = True

    @property
    def highlighted(self) -> str | None:
        return self.highlights[-1] if self.highlights else None

    def open_detail(self, card: Card, column_title: str) -> None:
        self.opened.append((card.id, column_title))

    def set_highlight(self, card_id: str | None) -> None:
        self.highlights.append(card_id)

    def scroll_to_card(self, card_id: str) -> bool:
        if not self.mounted:
            return False
        self.scrolled.append(card_id)
        return True

    def clear_deep_link(self) -> None:
        self.cleared += 1


@pytest.fixture
def board() -> Board:
    """Three columns: To Do [a, b, c, d], Doing [e], Done []."""
    return make_board(
        {"todo": ["a", "b", "c", "d"], "doing": ["e"], "done": []},
        titles={"todo": "To Do", "doing": "Doing", "done": "Done"},
    )


@pytest.fixture
def store(board: Board) -> BoardStore:
    return BoardStore(board)


@pytest.fixture
def gateway(board: Board) -> MemoryGateway:
    return MemoryGateway([board])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()
