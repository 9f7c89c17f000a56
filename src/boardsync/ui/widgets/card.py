"""Card widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import PriorityConfig
from ...services import CardView


def card_css_id(card_id: str) -> str:
    """CSS-safe widget id for a card."""
    return "card-" + "".join(c if c.isalnum() or c in "-_" else "-" for c in card_id)


class CardWidget(Widget, can_focus=True):
    """A card displayed in a column."""

    def __init__(
        self,
        view: CardView,
        priority_config: PriorityConfig | None = None,
        *args,
        **kwargs,
    ) -> None:
        kwargs.setdefault("id", card_css_id(view.id))
        super().__init__(*args, **kwargs)
        self.view = view
        self._priority_config = priority_config

    @property
    def card_id(self) -> str:
        return self.view.id

    def compose(self) -> ComposeResult:
        card = self.view.card
        yield Static(self._truncate(card.title, 40), classes="card-title")

        meta = [part for part in (self._format_priority(), self._format_due()) if part]
        if meta:
            with Horizontal(classes="card-meta"):
                for part in meta:
                    yield Static(part)

        if card.labels:
            yield Static(self._format_labels(), classes="card-labels")

        if card.assignee:
            yield Static(f"@{card.assignee}", classes="card-assignee")
        elif card.description:
            preview = self._get_description_preview()
            if preview:
                yield Static(preview, classes="card-preview")

    def set_dragging(self, dragging: bool) -> None:
        self.set_class(dragging, "-dragging")

    def set_highlighted(self, highlighted: bool) -> None:
        self.set_class(highlighted, "-highlight")

    def _format_priority(self) -> str:
        priority = self.view.card.priority
        if priority is None:
            return ""
        if self._priority_config:
            cfg = self._priority_config
            return f"[{cfg.color}]{cfg.symbol}[/] {cfg.label}"
        return f"● {priority}"

    def _format_due(self) -> str:
        due = self.view.card.due_date
        return f"[dim]due {due.isoformat()}[/]" if due else ""

    def _format_labels(self) -> str:
        max_labels = 3
        labels = self.view.card.labels
        formatted = " ".join(f"[{label.color}]#{label.name}[/]" for label in labels[:max_labels])
        if len(labels) > max_labels:
            formatted += f" [dim]+{len(labels) - max_labels}[/]"
        return formatted

    def _get_description_preview(self) -> str:
        """First non-empty, non-heading line of the description."""
        for line in (self.view.card.description or "").split("\n"):
            line = line.strip()
            if line and not line.startswith("#"):
                return self._truncate(line, 50)
        return ""

    def _truncate(self, text: str, max_len: int) -> str:
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"
