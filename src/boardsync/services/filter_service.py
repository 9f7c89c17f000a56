"""Service for parsing filters and projecting the board for display."""

import re
from dataclasses import dataclass, field

from ..models import Board, Card


@dataclass
class Filter:
    """Represents a parsed filter expression."""

    text: str | None = None  # Free text search
    labels: list[str] = field(default_factory=list)  # label:value
    exclude_labels: list[str] = field(default_factory=list)  # -label:value
    priorities: list[str] = field(default_factory=list)  # priority:value
    assignees: list[str] = field(default_factory=list)  # assignee:value
    columns: list[str] = field(default_factory=list)  # column:id-or-title

    @property
    def is_empty(self) -> bool:
        return not (
            self.text or self.labels or self.exclude_labels or self.priorities or self.assignees or self.columns
        )


@dataclass(frozen=True)
class CardView:
    """A card as rendered, with its column title derived from the owner."""

    card: Card
    column_id: str
    column_title: str

    @property
    def id(self) -> str:
        return self.card.id


@dataclass(frozen=True)
class ColumnView:
    """A column as rendered: its visible cards and the unfiltered count."""

    column_id: str
    title: str
    cards: list[CardView]
    total: int


class FilterService:
    """Service for parsing filters and deriving what the UI renders."""

    # Pattern for key:value tokens
    TOKEN_PATTERN = re.compile(r"(-?)(?:(label|priority|assignee|column):)?(\S+)")

    def parse(self, expression: str) -> Filter:
        """
        Parse a filter expression string.

        Syntax:
        - Free text: matches title or description
        - label:value: filter by label name
        - -label:value: exclude label
        - priority:p1/p2/p3/p4
        - assignee:name
        - column:id or column:title (spaces as underscores)

        Multiple conditions are ANDed together.
        """
        f = Filter()
        text_parts: list[str] = []

        for match in self.TOKEN_PATTERN.finditer(expression):
            negated = match.group(1) == "-"
            key = match.group(2)
            value = match.group(3).lower()

            if key is None:
                # Free text (might be negated, but we ignore that for text)
                if not negated:
                    text_parts.append(match.group(3))

            elif key == "label":
                if negated:
                    f.exclude_labels.append(value)
                else:
                    f.labels.append(value)

            elif key == "priority":
                f.priorities.append(value)

            elif key == "assignee":
                f.assignees.append(value.lstrip("@"))

            elif key == "column":
                f.columns.append(value)

        if text_parts:
            f.text = " ".join(text_parts)

        return f

    def project_board(self, board: Board, filter_: Filter | None = None) -> list[ColumnView]:
        """Columns in display order with the cards that pass the filter."""
        f = filter_ or Filter()
        views: list[ColumnView] = []
        for column in board.columns:
            column_ok = self._column_matches(column.id, column.title, f)
            cards = [
                CardView(card, column.id, column.title)
                for card in column.cards
                if column_ok and self.matches(card, f)
            ]
            views.append(ColumnView(column.id, column.title, cards, len(column.cards)))
        return views

    def project_list(self, board: Board, filter_: Filter | None = None) -> list[CardView]:
        """Flattened card list for the list view, column by column."""
        return [card for column in self.project_board(board, filter_) for card in column.cards]

    def matches(self, card: Card, f: Filter) -> bool:
        """Check if a card matches the card-level parts of a filter."""
        # Text search (case-insensitive)
        if f.text:
            search_text = f.text.lower()
            title = card.title.lower()
            description = (card.description or "").lower()
            if search_text not in title and search_text not in description:
                return False

        # Label inclusion (any match)
        if f.labels and not any(label in card.label_names for label in f.labels):
            return False

        # Label exclusion (no matches)
        if f.exclude_labels and any(label in card.label_names for label in f.exclude_labels):
            return False

        # Priority filter (any match)
        if f.priorities and (card.priority or "").lower() not in f.priorities:
            return False

        # Assignee filter (any match)
        if f.assignees and (card.assignee or "").lower() not in f.assignees:
            return False

        return True

    def _column_matches(self, column_id: str, title: str, f: Filter) -> bool:
        if not f.columns:
            return True
        title_key = title.lower().replace(" ", "_")
        return any(value in (column_id.lower(), title_key) for value in f.columns)
