"""Archive with a single, time-bounded undo."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..models import Card
from .dispatch import Dispatcher, Patch
from .store import BoardStore

logger = logging.getLogger(__name__)

DEFAULT_UNDO_WINDOW = 5.0


@dataclass(frozen=True)
class PendingUndo:
    """The one archive that can still be undone."""

    card: Card  # Carries its last column_id/position as the restore hint
    deadline: float

    @property
    def card_id(self) -> str:
        return self.card.id


class UndoManager:
    """
    Archives cards and restores the most recent one within a window.

    Only one archive is undoable at a time: archiving another card forfeits
    the previous undo, and that card stays archived.
    """

    def __init__(
        self,
        store: BoardStore,
        dispatcher: Dispatcher,
        window: float = DEFAULT_UNDO_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.window = window
        self._clock = clock
        self._pending: PendingUndo | None = None

    @property
    def pending(self) -> PendingUndo | None:
        """The pending entry, or None once it has expired."""
        if self._pending is not None and self._clock() >= self._pending.deadline:
            logger.debug("Undo window closed for %s", self._pending.card_id)
            self._pending = None
        return self._pending

    @property
    def pending_card_id(self) -> str | None:
        pending = self.pending
        return pending.card_id if pending else None

    @property
    def can_undo(self) -> bool:
        return self.pending is not None

    def remaining(self) -> float:
        """Seconds left in the undo window, for the countdown."""
        pending = self.pending
        if pending is None:
            return 0.0
        return max(0.0, pending.deadline - self._clock())

    def archive(self, card_id: str) -> bool:
        """Remove a card from the board now and archive it in the backend."""
        card = self.store.remove_card(card_id)
        if card is None:
            logger.debug("archive: card not found: %s", card_id)
            return False

        previous = self._pending
        if previous is not None:
            logger.debug("Undo for %s forfeited by archiving %s", previous.card_id, card_id)

        card.archived = True
        self._pending = PendingUndo(card=card, deadline=self._clock() + self.window)
        self.dispatcher.dispatch(Patch("archive_card", (card_id,)))
        logger.info("Card archived: %s (undo for %.1fs)", card_id, self.window)
        return True

    def undo(self) -> bool:
        """Restore the pending card if the window is still open."""
        pending = self.pending
        if pending is None:
            logger.debug("undo: nothing to undo")
            return False

        self._pending = None
        card = pending.card.model_copy(update={"archived": False})
        self.dispatcher.dispatch(Patch("restore_card", (card.id,)))
        if not self.store.insert_card(card, card.column_id, card.position):
            logger.debug("undo: column %s is gone, card restored in backend only", card.column_id)
        logger.info("Archive undone: %s", card.id)
        return True

    def clear(self) -> None:
        """Drop the pending entry, e.g. when the board is closed."""
        self._pending = None
