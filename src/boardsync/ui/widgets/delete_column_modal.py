"""Confirmation before deleting a column."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


def delete_warning(card_count: int) -> str:
    if card_count == 0:
        return "The column is empty."
    noun = "card" if card_count == 1 else "cards"
    return f"Its {card_count} {noun} will be deleted with it."


class DeleteColumnModal(ModalScreen[bool]):
    """Asks before deleting a column. Dismisses True to delete."""

    DEFAULT_CSS = """
    DeleteColumnModal {
        align: center middle;
    }

    #delete-dialog {
        width: 56;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    #delete-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #delete-dialog .warning {
        color: $text-muted;
        margin-bottom: 1;
    }

    #delete-buttons {
        height: auto;
        align-horizontal: right;
    }

    #delete-buttons Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("d", "delete", "Delete"),
        Binding("k", "keep", "Keep"),
    ]

    def __init__(self, column_title: str, card_count: int) -> None:
        super().__init__()
        self.column_title = column_title
        self.card_count = card_count

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-dialog"):
            yield Static(f"Delete column '{self.column_title}'?", id="delete-title", markup=False)
            yield Static(delete_warning(self.card_count), classes="warning")
            with Horizontal(id="delete-buttons"):
                yield Button("Keep", id="keep")
                yield Button("Delete", id="delete", variant="error")

    def on_mount(self) -> None:
        # Enter on the default button must not destroy anything
        self.query_one("#keep", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_delete(self) -> None:
        self.dismiss(True)

    def action_keep(self) -> None:
        self.dismiss(False)
