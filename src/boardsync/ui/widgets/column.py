"""Board column widget."""

from __future__ import annotations

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import BoardsyncConfig
from ...services import ColumnView
from .card import CardWidget


def column_css_id(column_id: str) -> str:
    """CSS-safe widget id for a column."""
    return "column-" + "".join(c if c.isalnum() or c in "-_" else "-" for c in column_id)


class CardListScroll(VerticalScroll):
    """Scroll container for a column's cards.

    Raises SkipAction for navigation keys so they bubble up to the App
    for card navigation and keyboard dragging.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no visible cards."""


class BoardColumn(Widget):
    """A single column on the board, rendered from its projection."""

    def __init__(self, view: ColumnView, config: BoardsyncConfig | None = None, *args, **kwargs) -> None:
        kwargs.setdefault("id", column_css_id(view.column_id))
        super().__init__(*args, **kwargs)
        self.view = view
        self._config = config

    @property
    def column_id(self) -> str:
        return self.view.column_id

    @property
    def card_count(self) -> int:
        return len(self.view.cards)

    @property
    def header_text(self) -> str:
        """Title with the visible count, and the total when filtered."""
        shown = len(self.view.cards)
        count = f"{shown}" if shown == self.view.total else f"{shown}/{self.view.total}"
        return f"{self.view.title} [dim]({count})[/]"

    def compose(self) -> ComposeResult:
        yield Static(self.header_text, classes="column-header")
        with CardListScroll(classes="column-content"):
            if not self.view.cards:
                yield EmptyColumnMessage("No cards")
            for card_view in self.view.cards:
                priority = self._config.get_priority(card_view.card.priority) if self._config else None
                yield CardWidget(card_view, priority_config=priority)

    def card_at(self, index: int) -> str | None:
        """Card id at a visible index."""
        if 0 <= index < len(self.view.cards):
            return self.view.cards[index].id
        return None

    def index_of(self, card_id: str) -> int:
        for i, card_view in enumerate(self.view.cards):
            if card_view.id == card_id:
                return i
        return -1

    def get_card_widget(self, card_id: str) -> CardWidget | None:
        for widget in self.query(CardWidget):
            if widget.card_id == card_id:
                return widget
        return None

    def focus_card(self, index: int) -> bool:
        """Focus the card at the given visible index."""
        card_id = self.card_at(index)
        widget = self.get_card_widget(card_id) if card_id else None
        if widget is None:
            return False
        widget.focus()
        widget.scroll_visible()
        return True
