"""In-process gateway that keeps boards in memory."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..errors import BoardNotFoundError, GatewayError
from ..models import STRUCTURAL_FIELDS, Board, Card, Column
from ..utils import clamp_index, order_by_ids, renumber

logger = logging.getLogger(__name__)


class MemoryGateway:
    """
    Gateway backed by in-memory boards.

    Every call is recorded in ``calls`` as ``(operation, args)`` in the order
    the calls started. ``fail_on`` names operations that raise GatewayError,
    and ``delays`` adds per-operation latency, so tests can reproduce failed
    or out-of-order persistence.
    """

    def __init__(self, boards: list[Board] | None = None) -> None:
        self._boards: dict[str, Board] = {}
        self._archived: dict[str, Card] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: set[str] = set()
        self.delays: dict[str, float] = {}
        for board in boards or []:
            self.add_board(board)

    def add_board(self, board: Board) -> None:
        """Seed a board. The gateway keeps its own copy."""
        self._boards[board.id] = board.model_copy(deep=True)

    def stored_board(self, board_id: str) -> Board:
        """Copy of what the gateway has persisted for a board."""
        return self._boards[board_id].model_copy(deep=True)

    def is_archived(self, card_id: str) -> bool:
        return card_id in self._archived

    async def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        delay = self.delays.get(operation)
        if delay:
            await asyncio.sleep(delay)
        if operation in self.fail_on:
            raise GatewayError(f"{operation} rejected")

    def _column(self, column_id: str) -> Column | None:
        for board in self._boards.values():
            column = board.get_column(column_id)
            if column is not None:
                return column
        return None

    def _board_of_column(self, column_id: str) -> Board | None:
        for board in self._boards.values():
            if board.get_column(column_id) is not None:
                return board
        return None

    def _take_card(self, card_id: str) -> Card | None:
        for board in self._boards.values():
            column = board.column_of(card_id)
            if column is not None:
                card = column.cards.pop(column.index_of(card_id))
                renumber(column.cards)
                return card
        return None

    # --- GatewayProtocol ---

    async def load_board(self, board_id: str) -> Board:
        await self._record("load_board", board_id)
        board = self._boards.get(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        return board.model_copy(deep=True)

    async def move_card(self, card_id: str, target_column_id: str, target_index: int) -> None:
        await self._record("move_card", card_id, target_column_id, target_index)
        target = self._column(target_column_id)
        if target is None:
            return
        card = self._take_card(card_id)
        if card is None:
            return
        card.column_id = target.id
        target.cards.insert(clamp_index(target_index, len(target.cards)), card)
        renumber(target.cards)

    async def reorder_cards(self, column_id: str, ordered_card_ids: list[str]) -> None:
        await self._record("reorder_cards", column_id, list(ordered_card_ids))
        column = self._column(column_id)
        if column is None:
            return
        column.cards = renumber(order_by_ids(column.cards, ordered_card_ids, key=lambda c: c.id))

    async def reorder_columns(self, board_id: str, ordered_column_ids: list[str]) -> None:
        await self._record("reorder_columns", board_id, list(ordered_column_ids))
        board = self._boards.get(board_id)
        if board is None:
            return
        board.columns = renumber(order_by_ids(board.columns, ordered_column_ids, key=lambda c: c.id))

    async def archive_card(self, card_id: str) -> None:
        await self._record("archive_card", card_id)
        card = self._take_card(card_id)
        if card is None:
            return
        card.archived = True
        self._archived[card_id] = card

    async def restore_card(self, card_id: str) -> None:
        await self._record("restore_card", card_id)
        card = self._archived.pop(card_id, None)
        if card is None:
            return
        column = self._column(card.column_id)
        if column is None:
            return
        card.archived = False
        column.cards.insert(clamp_index(card.position, len(column.cards)), card)
        renumber(column.cards)

    async def create_card(self, card: Card) -> None:
        await self._record("create_card", card.id)
        column = self._column(card.column_id)
        if column is None:
            return
        stored = card.model_copy(deep=True)
        column.cards.append(stored)
        renumber(column.cards)

    async def update_card(self, card_id: str, fields: dict[str, Any]) -> None:
        await self._record("update_card", card_id, dict(fields))
        for board in self._boards.values():
            card = board.get_card(card_id)
            if card is None:
                continue
            for name, value in fields.items():
                if name not in STRUCTURAL_FIELDS and name in Card.model_fields:
                    setattr(card, name, value)

    async def create_column(self, board_id: str, column: Column) -> None:
        await self._record("create_column", board_id, column.id)
        board = self._boards.get(board_id)
        if board is None:
            return
        board.columns.append(column.model_copy(deep=True))
        renumber(board.columns)

    async def rename_column(self, column_id: str, title: str) -> None:
        await self._record("rename_column", column_id, title)
        column = self._column(column_id)
        if column is not None:
            column.title = title

    async def delete_column(self, column_id: str) -> None:
        await self._record("delete_column", column_id)
        board = self._board_of_column(column_id)
        if board is None:
            return
        board.columns = renumber([c for c in board.columns if c.id != column_id])
