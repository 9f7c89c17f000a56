"""Open a card's detail view from a link in navigation state."""

from __future__ import annotations

import logging
from typing import Protocol

from ..models import Card
from .scheduling import Cancellable, Scheduler
from .store import BoardStore

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_SECONDS = 1.2
DEFAULT_INITIAL_DELAY = 0.05
DEFAULT_CLEAR_DELAY = 0.4


class BoardView(Protocol):
    """What the resolver needs from the UI."""

    def open_detail(self, card: Card, column_title: str) -> None:
        """Show the detail view for a card."""
        ...

    def set_highlight(self, card_id: str | None) -> None:
        """Highlight one card, or clear the highlight with None."""
        ...

    def scroll_to_card(self, card_id: str) -> bool:
        """Bring a card's element into view. False if it isn't mounted."""
        ...

    def clear_deep_link(self) -> None:
        """Remove the card id from navigation state."""
        ...


class DeepLinkResolver:
    """
    Resolves a linked card id exactly once per navigation.

    The link is resolved a short delay after it changes (and again whenever
    the board reloads) until the card is found. Once found the detail view
    opens, the card is highlighted briefly, one deferred scroll is attempted,
    and the link is scrubbed from navigation state. Closing the detail view
    resets the processed marker so the same card can be linked again.
    """

    def __init__(
        self,
        store: BoardStore,
        view: BoardView,
        scheduler: Scheduler,
        highlight_duration: float = DEFAULT_HIGHLIGHT_SECONDS,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
    ) -> None:
        self.store = store
        self.view = view
        self.scheduler = scheduler
        self.highlight_duration = highlight_duration
        self.initial_delay = initial_delay
        self.clear_delay = clear_delay

        self._link: str | None = None
        self._processed: str | None = None
        self._disposed = False

        self._resolve_timer: Cancellable | None = None
        self._scroll_timer: Cancellable | None = None
        self._clear_timer: Cancellable | None = None
        self._highlight_timer: Cancellable | None = None

    @property
    def link(self) -> str | None:
        return self._link

    @property
    def processed(self) -> str | None:
        return self._processed

    def set_link(self, card_id: str | None) -> None:
        """Navigation state changed. Schedules resolution for a new id."""
        if card_id == self._link:
            return
        self._link = card_id
        # A clear scheduled for the previous link must not scrub this one
        _cancel(self._clear_timer)
        self._clear_timer = None
        self._schedule_resolve()

    def board_changed(self) -> None:
        """The store was (re)loaded; retry a link that wasn't found yet."""
        if self._link and self._processed != self._link:
            self._schedule_resolve()

    def resolve(self) -> bool:
        """Try to open the linked card now. True if it was opened."""
        self._resolve_timer = None
        card_id = self._link
        if self._disposed or not card_id or self._processed == card_id:
            return False

        card = self.store.find_card(card_id)
        column = self.store.column_of(card_id)
        if card is None or column is None:
            # The board may still be loading; leave the link in place
            logger.debug("Deep link target not on board (yet): %s", card_id)
            return False

        self._processed = card_id
        self.view.open_detail(card, column.title)
        self._start_highlight(card_id)

        _cancel(self._scroll_timer)
        self._scroll_timer = self.scheduler.call_soon(lambda: self._scroll(card_id))

        _cancel(self._clear_timer)
        self._clear_timer = self.scheduler.call_later(self.clear_delay, self._clear_link)

        logger.info("Deep link opened: %s", card_id)
        return True

    def detail_closed(self) -> None:
        """The detail view closed; allow the same id to be linked again."""
        self._processed = None
        _cancel(self._highlight_timer)
        _cancel(self._clear_timer)
        self._highlight_timer = self._clear_timer = None
        self.view.set_highlight(None)
        if self._link is not None:
            self._clear_link()

    def jump_to_card(self, card_id: str) -> bool:
        """Scroll to a card and highlight it without opening it."""
        if not self.view.scroll_to_card(card_id):
            return False
        self._start_highlight(card_id)
        return True

    def dispose(self) -> None:
        """Cancel all timers. Nothing fires after this."""
        self._disposed = True
        for timer in (self._resolve_timer, self._scroll_timer, self._clear_timer, self._highlight_timer):
            _cancel(timer)
        self._resolve_timer = self._scroll_timer = self._clear_timer = self._highlight_timer = None

    # --- Private Methods ---

    def _schedule_resolve(self) -> None:
        _cancel(self._resolve_timer)
        self._resolve_timer = None
        if self._link is None or self._disposed:
            return
        self._resolve_timer = self.scheduler.call_later(self.initial_delay, self.resolve)

    def _start_highlight(self, card_id: str) -> None:
        # A new highlight replaces any running one; only one timer is live
        _cancel(self._highlight_timer)
        self.view.set_highlight(card_id)
        self._highlight_timer = self.scheduler.call_later(self.highlight_duration, self._end_highlight)

    def _end_highlight(self) -> None:
        self._highlight_timer = None
        if not self._disposed:
            self.view.set_highlight(None)

    def _scroll(self, card_id: str) -> None:
        self._scroll_timer = None
        if self._disposed:
            return
        # One attempt only: an element that isn't mounted yet is skipped
        if not self.view.scroll_to_card(card_id):
            logger.debug("Deep link scroll skipped, element not mounted: %s", card_id)

    def _clear_link(self) -> None:
        self._clear_timer = None
        if self._disposed:
            return
        self._link = None
        self.view.clear_deep_link()


def _cancel(timer: Cancellable | None) -> None:
    if timer is not None:
        timer.cancel()
