"""Service for board state management.

Ties the optimistic store to the drag state machine, the persistence
dispatcher, archive/undo and deep links. Every user action updates the
store synchronously, then dispatches its persistence call without waiting.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..models import (
    IDLE,
    Board,
    Card,
    Column,
    CommitCardOrder,
    CommitColumnOrder,
    DragCancel,
    DragEffect,
    DragEnd,
    DragEvent,
    DragOver,
    DragStart,
    DragState,
    EngineConfig,
    PersistCardMove,
    ProvisionalMove,
)
from ..repositories import GatewayProtocol
from .deep_link import BoardView, DeepLinkResolver
from .dispatch import Dispatcher, FailureHook, Patch
from .drag import transition
from .filter_service import CardView, ColumnView, Filter, FilterService
from .scheduling import Scheduler
from .store import BoardStore
from .undo import UndoManager

if TYPE_CHECKING:
    from .config_service import ConfigService
    from .session_service import SessionService

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Identifier for cards and columns created on the client."""
    return uuid.uuid4().hex


class BoardService:
    """Service for board state management."""

    def __init__(
        self,
        gateway: GatewayProtocol,
        config_service: ConfigService | None = None,
        session_service: SessionService | None = None,
        on_failure: FailureHook | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.gateway = gateway
        self._config_service = config_service
        self._session_service = session_service
        self.store = BoardStore()
        self.dispatcher = Dispatcher(gateway, on_failure=on_failure)
        self.filter_service = FilterService()
        self.drag_state: DragState = IDLE

        engine = self._get_engine_config()
        self.undo = UndoManager(self.store, self.dispatcher, window=engine.undo_window_seconds, clock=clock)
        self.deep_link: DeepLinkResolver | None = None

    def _get_engine_config(self) -> EngineConfig:
        """Get engine timings, using defaults if no config service."""
        if self._config_service:
            return self._config_service.get_engine_config()
        return EngineConfig()

    @property
    def board(self) -> Board:
        return self.store.board

    # --- Lifecycle ---

    async def load_board(self, board_id: str) -> Board:
        """Load a board snapshot into the store. Called once per board view mount."""
        board = await self.gateway.load_board(board_id)
        self.store.reset(board)
        self.drag_state = IDLE
        self.undo.clear()
        if self._session_service:
            self._session_service.remember(board.id)
        if self.deep_link:
            self.deep_link.board_changed()
        logger.info("Board loaded: %s (%d cards)", board.id, len(board.all_cards()))
        return board

    def attach_view(self, view: BoardView, scheduler: Scheduler) -> DeepLinkResolver:
        """Connect the UI so deep links can open cards."""
        if self.deep_link:
            self.deep_link.dispose()
        engine = self._get_engine_config()
        self.deep_link = DeepLinkResolver(
            self.store,
            view,
            scheduler,
            highlight_duration=engine.highlight_seconds,
            initial_delay=engine.deep_link_delay_seconds,
            clear_delay=engine.deep_link_clear_seconds,
        )
        return self.deep_link

    async def close(self) -> None:
        """Stop timers and let in-flight persistence finish."""
        if self.deep_link:
            self.deep_link.dispose()
        await self.dispatcher.drain()

    # --- Drag and drop ---

    def drag_start(self, entity_id: str) -> list[DragEffect]:
        return self._handle(DragStart(entity_id))

    def drag_over(self, over_id: str) -> list[DragEffect]:
        return self._handle(DragOver(over_id))

    def drag_end(self, over_id: str | None) -> list[DragEffect]:
        return self._handle(DragEnd(over_id))

    def drag_cancel(self) -> list[DragEffect]:
        return self._handle(DragCancel())

    def _handle(self, event: DragEvent) -> list[DragEffect]:
        self.drag_state, effects = transition(self.drag_state, event, self.store.board)
        for effect in effects:
            self._apply(effect)
        if effects:
            self._verify()
        return effects

    def _apply(self, effect: DragEffect) -> None:
        if isinstance(effect, ProvisionalMove):
            self.store.move_card_to_column(effect.card_id, effect.column_id, effect.index)
        elif isinstance(effect, CommitCardOrder):
            self.store.reorder_cards_in_column(effect.column_id, effect.ordered_ids)
            self.dispatcher.dispatch(Patch("reorder_cards", (effect.column_id, list(effect.ordered_ids))))
        elif isinstance(effect, CommitColumnOrder):
            self.store.reorder_columns(effect.ordered_ids)
            self.dispatcher.dispatch(
                Patch("reorder_columns", (self.store.board_id, list(effect.ordered_ids)))
            )
        elif isinstance(effect, PersistCardMove):
            self.dispatcher.dispatch(Patch("move_card", (effect.card_id, effect.column_id, effect.index)))
            logger.info("Card moved: %s -> %s @ %d", effect.card_id, effect.column_id, effect.index)

    # --- Card actions ---

    def move_card(self, card_id: str, column_id: str) -> bool:
        """Move a card to the end of another column (list view status change)."""
        source = self.store.column_of(card_id)
        target = self.store.find_column(column_id)
        if source is None or target is None or source is target:
            return False

        index = len(target.cards)
        self.store.move_card_to_column(card_id, column_id, index)
        self.dispatcher.dispatch(Patch("move_card", (card_id, column_id, index)))
        self._verify()
        logger.info("Card moved: %s (%s -> %s)", card_id, source.id, column_id)
        return True

    def update_card(self, card_id: str, **fields: Any) -> bool:
        """Edit card fields; visible in every view immediately."""
        if not self.store.update_card_fields(card_id, **fields):
            return False
        self.dispatcher.dispatch(Patch("update_card", (card_id, fields)))
        return True

    def add_card(self, title: str, column_id: str | None = None) -> Card | None:
        """Append a new card. Without a column, uses the session's default."""
        if column_id is None:
            column_id = self.default_column()
        column = self.store.find_column(column_id) if column_id else None
        if column is None:
            logger.debug("add_card: no column to add to: %s", column_id)
            return None

        card = Card(id=new_id(), title=title, column_id=column.id)
        self.store.add_card(card, column.id)
        if self._session_service:
            self._session_service.remember(self.store.board_id, column.id)
        self.dispatcher.dispatch(Patch("create_card", (card.model_copy(deep=True),)))
        self._verify()
        logger.info("Card created: %s in %s", card.id, column.id)
        return card

    def open_card(self, card_id: str) -> tuple[Card, str] | None:
        """Look up a card for the detail view and remember its column."""
        card = self.store.find_card(card_id)
        column = self.store.column_of(card_id)
        if card is None or column is None:
            return None
        if self._session_service:
            self._session_service.remember(self.store.board_id, column.id)
        return card, column.title

    def find_cards(self, query: str) -> list[CardView]:
        """
        Cards for a jump query, in board order.

        An exact card id wins; otherwise the query is read as a filter
        expression over the whole board.
        """
        query = query.strip()
        if not query:
            return []
        views = self.filter_service.project_list(self.store.board)
        exact = [view for view in views if view.id == query]
        if exact:
            return exact
        return self.filter_service.project_list(self.store.board, self.filter_service.parse(query))

    def jump_to_card(self, card_id: str) -> bool:
        """Scroll to and briefly highlight a card without opening it."""
        if self.deep_link is None or self.store.find_card(card_id) is None:
            return False
        return self.deep_link.jump_to_card(card_id)

    def default_column(self) -> str | None:
        """Where a quick-captured card goes on this board."""
        if self._session_service:
            return self._session_service.default_column(self.store.board)
        columns = self.store.board.columns
        return columns[0].id if columns else None

    def archive_card(self, card_id: str) -> bool:
        """Archive a card; it can be restored until the undo window closes."""
        archived = self.undo.archive(card_id)
        if archived:
            self._verify()
        return archived

    def undo_archive(self) -> bool:
        """Restore the most recently archived card if still possible."""
        restored = self.undo.undo()
        if restored:
            self._verify()
        return restored

    # --- Column actions ---

    def add_column(self, title: str = "New Column") -> Column:
        column = Column(id=new_id(), title=title)
        self.store.add_column(column)
        self.dispatcher.dispatch(Patch("create_column", (self.store.board_id, column.model_copy(deep=True))))
        self._verify()
        return column

    def rename_column(self, column_id: str, title: str) -> bool:
        if not self.store.rename_column(column_id, title):
            return False
        self.dispatcher.dispatch(Patch("rename_column", (column_id, title)))
        return True

    def delete_column(self, column_id: str) -> bool:
        if self.store.remove_column(column_id) is None:
            return False
        self.dispatcher.dispatch(Patch("delete_column", (column_id,)))
        self._verify()
        return True

    # --- Projection ---

    def project(self, filter_: Filter | None = None) -> list[ColumnView]:
        """What the board view renders."""
        return self.filter_service.project_board(self.store.board, filter_)

    def _verify(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            self.store.check_invariants()
