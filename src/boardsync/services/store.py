"""Optimistic in-memory board store.

Every mutation is synchronous and leaves the board structurally valid: each
card is in exactly one column and positions are dense per container. Unknown
ids are a silent no-op, since they usually come from a stale render.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import StoreInvariantError
from ..models import STRUCTURAL_FIELDS, Board, Card, Column, DragKind
from ..utils import clamp_index, is_dense, order_by_ids, renumber

logger = logging.getLogger(__name__)


class BoardStore:
    """The single in-memory source of truth for a board's columns and cards."""

    def __init__(self, board: Board | None = None) -> None:
        self.reset(board or Board(id=""))

    @property
    def board_id(self) -> str:
        return self.board.id

    def reset(self, board: Board) -> None:
        """Replace the whole snapshot, e.g. after loading a board."""
        self.board = board
        renumber(self.board.columns)
        for column in self.board.columns:
            for card in column.cards:
                card.column_id = column.id
            renumber(column.cards)

    # --- Lookups ---

    def find_card(self, card_id: str) -> Card | None:
        """Get a card by id."""
        return self.board.get_card(card_id)

    def find_column(self, column_id: str) -> Column | None:
        """Get a column by id."""
        return self.board.get_column(column_id)

    def column_of(self, card_id: str) -> Column | None:
        """Get the column currently holding a card."""
        return self.board.column_of(card_id)

    def resolve_column(self, entity_id: str) -> Column | None:
        """Resolve a column id, or a card id to its owning column."""
        return self.find_column(entity_id) or self.column_of(entity_id)

    def card_index(self, card_id: str) -> int:
        """Index of a card in its column, or -1."""
        column = self.column_of(card_id)
        return column.index_of(card_id) if column else -1

    def column_index(self, column_id: str) -> int:
        """Index of a column on the board, or -1."""
        try:
            return self.board.column_ids.index(column_id)
        except ValueError:
            return -1

    def classify(self, entity_id: str) -> DragKind | None:
        """Tell whether an id names a column or a card. Columns win."""
        if self.find_column(entity_id) is not None:
            return DragKind.COLUMN
        if self.column_of(entity_id) is not None:
            return DragKind.CARD
        return None

    def snapshot(self) -> Board:
        """Deep copy of the current board."""
        return self.board.model_copy(deep=True)

    # --- Card mutations ---

    def move_card_to_column(self, card_id: str, target_column_id: str, target_index: int) -> bool:
        """
        Move a card into a column at an index.

        Removes the card from its current column, points it at the target
        column and inserts it at the clamped index. Works within a single
        column too. Returns False when nothing changed.
        """
        source = self.column_of(card_id)
        target = self.find_column(target_column_id)
        if source is None or target is None:
            logger.debug("move_card_to_column: not found: %s -> %s", card_id, target_column_id)
            return False

        current_index = source.index_of(card_id)
        if source is target:
            target_index = clamp_index(target_index, len(target.cards) - 1)
            if target_index == current_index:
                return False

        card = source.cards.pop(current_index)
        card.column_id = target.id
        target.cards.insert(clamp_index(target_index, len(target.cards)), card)

        renumber(source.cards)
        if target is not source:
            renumber(target.cards)
        logger.debug(
            "Card moved in store: %s (%s -> %s @ %d)", card_id, source.id, target.id, card.position
        )
        return True

    def reorder_cards_in_column(self, column_id: str, ordered_card_ids: list[str]) -> bool:
        """Reorder a column's cards to follow ordered_card_ids."""
        column = self.find_column(column_id)
        if column is None:
            logger.debug("reorder_cards_in_column: column not found: %s", column_id)
            return False

        reordered = order_by_ids(column.cards, ordered_card_ids, key=lambda c: c.id)
        if [c.id for c in reordered] == column.card_ids:
            return False

        column.cards = renumber(reordered)
        logger.debug("Cards reordered in store: %s -> %s", column_id, column.card_ids)
        return True

    def update_card_fields(self, card_id: str, **fields: Any) -> bool:
        """
        Shallow-merge fields into a card.

        Keeps edits made outside the board view (e.g. the list view) visible
        everywhere immediately. id, column_id and position are not writable
        here; use the move/reorder operations.
        """
        card = self.find_card(card_id)
        if card is None:
            logger.debug("update_card_fields: card not found: %s", card_id)
            return False

        rejected = STRUCTURAL_FIELDS.intersection(fields)
        if rejected:
            logger.debug("update_card_fields: ignoring structural fields %s", sorted(rejected))

        changed = False
        for name, value in fields.items():
            if name in STRUCTURAL_FIELDS or name not in Card.model_fields:
                continue
            if getattr(card, name) != value:
                setattr(card, name, value)
                changed = True
        return changed

    def remove_card(self, card_id: str) -> Card | None:
        """
        Remove a card from whichever column holds it.

        The returned card keeps its column_id and position as a restore hint.
        """
        column = self.column_of(card_id)
        if column is None:
            logger.debug("remove_card: card not found: %s", card_id)
            return None

        card = column.cards.pop(column.index_of(card_id))
        renumber(column.cards)
        return card

    def insert_card(self, card: Card, column_id: str, index: int) -> bool:
        """Insert a card into a column at the clamped index."""
        column = self.find_column(column_id)
        if column is None:
            logger.debug("insert_card: column not found: %s", column_id)
            return False
        if self.find_card(card.id) is not None:
            logger.debug("insert_card: card already on board: %s", card.id)
            return False

        card.column_id = column.id
        card.archived = False
        column.cards.insert(clamp_index(index, len(column.cards)), card)
        renumber(column.cards)
        return True

    def add_card(self, card: Card, column_id: str) -> bool:
        """Append a new card to the end of a column."""
        column = self.find_column(column_id)
        if column is None:
            return False
        return self.insert_card(card, column_id, len(column.cards))

    # --- Column mutations ---

    def reorder_columns(self, ordered_column_ids: list[str]) -> bool:
        """Reorder the board's columns to follow ordered_column_ids."""
        reordered = order_by_ids(self.board.columns, ordered_column_ids, key=lambda c: c.id)
        if [c.id for c in reordered] == self.board.column_ids:
            return False

        self.board.columns = renumber(reordered)
        logger.debug("Columns reordered in store: %s", self.board.column_ids)
        return True

    def add_column(self, column: Column) -> bool:
        """Append a column to the board."""
        if self.find_column(column.id) is not None:
            return False
        for card in column.cards:
            card.column_id = column.id
        renumber(column.cards)
        self.board.columns.append(column)
        renumber(self.board.columns)
        return True

    def rename_column(self, column_id: str, title: str) -> bool:
        """Change a column's title. Cards derive it, so nothing else changes."""
        column = self.find_column(column_id)
        if column is None or column.title == title:
            return False
        column.title = title
        return True

    def remove_column(self, column_id: str) -> Column | None:
        """Remove a column together with its cards."""
        index = self.column_index(column_id)
        if index == -1:
            return None
        column = self.board.columns.pop(index)
        renumber(self.board.columns)
        return column

    # --- Invariants ---

    def check_invariants(self) -> None:
        """Raise StoreInvariantError if the board is structurally invalid."""
        if not is_dense(self.board.columns):
            raise StoreInvariantError("Column positions are not dense")
        if len(set(self.board.column_ids)) != len(self.board.columns):
            raise StoreInvariantError("Duplicate column id on board")

        seen: dict[str, str] = {}
        for column in self.board.columns:
            if not is_dense(column.cards):
                raise StoreInvariantError(f"Card positions are not dense in column {column.id}")
            for card in column.cards:
                if card.id in seen:
                    raise StoreInvariantError(
                        f"Card {card.id} is in both {seen[card.id]} and {column.id}"
                    )
                seen[card.id] = column.id
                if card.column_id != column.id:
                    raise StoreInvariantError(
                        f"Card {card.id} points at {card.column_id} but lives in {column.id}"
                    )
                if card.archived:
                    raise StoreInvariantError(f"Archived card {card.id} is still on the board")
