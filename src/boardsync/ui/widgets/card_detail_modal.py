"""Card detail modal."""

from rich.markdown import Markdown
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...models import Card


class CardDetailModal(ModalScreen[str | None]):
    """Shows one card with its column title.

    Dismisses with "archive" when the user archives from here, None otherwise.
    """

    DEFAULT_CSS = """
    CardDetailModal {
        align: center middle;
    }

    CardDetailModal > VerticalScroll {
        width: 80%;
        height: 80%;
        border: solid $primary;
        background: $surface;
    }

    CardDetailModal #title-bar {
        height: 1;
        width: 100%;
        background: $primary-darken-2;
        color: $text;
        text-align: center;
    }

    CardDetailModal #meta, CardDetailModal #description {
        width: 100%;
        height: auto;
        padding: 0 1;
    }

    CardDetailModal #footer-bar {
        height: 1;
        width: 100%;
        background: $surface-lighten-1;
        color: $text-muted;
        text-align: center;
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("a", "archive", "Archive", show=False),
    ]

    # Keys that scroll content instead of closing
    SCROLL_KEYS = {"up", "down", "pageup", "pagedown", "home", "end"}

    def __init__(self, card: Card, column_title: str) -> None:
        super().__init__()
        self.card = card
        self.column_title = column_title

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(self.card.title, id="title-bar")
            yield Static(self.meta_text(), id="meta")
            yield Static(Markdown(self.card.description or "*No description*"), id="description")
            yield Static("[a] Archive  [any key] Close", id="footer-bar")

    def meta_text(self) -> str:
        """Rich markup lines for the card's fields."""
        card = self.card
        lines = [f"[dim]Column:[/] {self.column_title}"]
        if card.priority:
            lines.append(f"[dim]Priority:[/] {card.priority}")
        if card.due_date:
            lines.append(f"[dim]Due:[/] {card.due_date.isoformat()}")
        if card.estimated_time:
            lines.append(f"[dim]Estimate:[/] {card.estimated_time} min")
        if card.assignee:
            lines.append(f"[dim]Assignee:[/] @{card.assignee}")
        if card.labels:
            labels = " ".join(f"[{label.color}]#{label.name}[/]" for label in card.labels)
            lines.append(f"[dim]Labels:[/] {labels}")
        return "\n".join(lines)

    def on_key(self, event) -> None:
        if event.key in self.SCROLL_KEYS or event.key == "a":
            return
        event.stop()
        self.dismiss(None)

    def action_archive(self) -> None:
        self.dismiss("archive")
