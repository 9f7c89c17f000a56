"""Board state models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .card import Card


class Column(BaseModel):
    """A column holding an ordered list of cards."""

    id: str
    title: str
    position: int = Field(default=0, ge=0)
    cards: list[Card] = Field(default_factory=list)

    @property
    def card_ids(self) -> list[str]:
        """Card ids in display order."""
        return [card.id for card in self.cards]

    def index_of(self, card_id: str) -> int:
        """Index of a card in this column, or -1 if absent."""
        for idx, card in enumerate(self.cards):
            if card.id == card_id:
                return idx
        return -1


class Board(BaseModel):
    """A board with its columns in display order."""

    id: str
    name: str = ""
    background: str = ""
    columns: list[Column] = Field(default_factory=list)

    @property
    def column_ids(self) -> list[str]:
        """Column ids in display order."""
        return [column.id for column in self.columns]

    def get_column(self, column_id: str) -> Column | None:
        """Get a column by id."""
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def column_of(self, card_id: str) -> Column | None:
        """Get the column currently holding a card."""
        for column in self.columns:
            if column.index_of(card_id) != -1:
                return column
        return None

    def get_card(self, card_id: str) -> Card | None:
        """Get a card by id from whichever column holds it."""
        column = self.column_of(card_id)
        if column is None:
            return None
        return column.cards[column.index_of(card_id)]

    def all_cards(self) -> list[Card]:
        """All cards on the board, column by column."""
        return [card for column in self.columns for card in column.cards]
