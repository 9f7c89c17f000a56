"""Filter bar widget."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

FILTER_HINT = "label:bug -label:docs priority:p1 assignee:kim column:done text"


class CommandBar(Widget):
    """
    Filter bar docked at the bottom of the board.

    Hidden until opened. Submitting closes the bar and posts
    ``CommandBar.Applied``; an empty expression means no filter.
    """

    class Applied(Message):
        """A filter expression was submitted."""

        def __init__(self, expression: str) -> None:
            super().__init__()
            self.expression = expression

    DEFAULT_CSS = """
    CommandBar {
        dock: bottom;
        height: 1;
        layer: command;
        display: none;
        background: $boost;
    }

    CommandBar.-open {
        display: block;
    }

    CommandBar #filter-label {
        width: 3;
        content-align: center middle;
        background: $accent;
        color: $text;
    }

    CommandBar Input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="command-bar")
        self._expression = ""

    @property
    def expression(self) -> str:
        """The filter currently applied to the board."""
        return self._expression

    @property
    def is_open(self) -> bool:
        return self.has_class("-open")

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("/", id="filter-label")
            yield Input(value=self._expression, placeholder=FILTER_HINT, id="filter-input")

    def open(self) -> None:
        """Show the bar with the applied expression ready to edit."""
        self.add_class("-open")
        field = self.query_one("#filter-input", Input)
        field.value = self._expression
        field.cursor_position = len(self._expression)
        field.focus()

    def close(self) -> None:
        self.remove_class("-open")

    def clear(self) -> None:
        self._expression = ""
        self.query_one("#filter-input", Input).value = ""

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._expression = event.value.strip()
        self.close()
        self.post_message(self.Applied(self._expression))
