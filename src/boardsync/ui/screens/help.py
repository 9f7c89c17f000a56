"""Help screen showing keyboard shortcuts."""

from rich.table import Table
from textual import events
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("h / Left", "Previous column"),
            ("l / Right", "Next column"),
            ("k / Up", "Previous card"),
            ("j / Down", "Next card"),
        ],
    ),
    (
        "Drag and drop",
        [
            ("Space", "Pick up card"),
            ("Shift+Space", "Pick up column"),
            ("Arrows", "Move over target"),
            ("Enter", "Drop"),
            ("Escape", "Release without target"),
        ],
    ),
    (
        "Cards",
        [
            ("Enter", "Open details"),
            ("n", "New card"),
            ("L / Shift+Right", "Send to next column"),
            ("H / Shift+Left", "Send to previous column"),
            ("a", "Archive"),
            ("u", "Undo archive"),
        ],
    ),
    (
        "Columns",
        [
            ("c", "Add column"),
            ("R", "Rename column"),
            ("D", "Delete column"),
        ],
    ),
    (
        "Filter",
        [
            ("/", "Open the filter bar"),
            ("Escape", "Close the bar, then clear the filter"),
            ("text", "Match title or description"),
            ("label:name", "Filter by label (-label: excludes)"),
            ("priority:p1", "Filter by priority"),
            ("assignee:name", "Filter by assignee"),
            ("column:done", "Filter by column"),
            ("g", "Jump to a card by id or filter"),
        ],
    ),
    (
        "General",
        [
            ("r", "Reload board"),
            ("?", "Show this help"),
            ("q", "Quit"),
        ],
    ),
]


def section_table(rows: list[tuple[str, str]]) -> Table:
    """Two-column key table for one help section."""
    table = Table(box=None, show_header=False, padding=(0, 2, 0, 0), expand=True)
    table.add_column(style="bold", width=18, no_wrap=True)
    table.add_column(style="dim", ratio=1)
    for key, description in rows:
        table.add_row(key, description)
    return table


class HelpScreen(ModalScreen):
    """Key reference. Any key closes it."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-body {
        width: 72;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $panel;
        border: round $accent;
        border-title-align: center;
    }

    #help-body .section {
        height: auto;
        margin-bottom: 1;
    }

    #help-body .heading {
        color: $accent;
        text-style: bold underline;
    }
    """

    def compose(self) -> ComposeResult:
        body = VerticalScroll(id="help-body")
        body.border_title = "boardsync keys"
        with body:
            for heading, rows in HELP_SECTIONS:
                yield Static(heading, classes="heading")
                yield Static(section_table(rows), classes="section")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.dismiss()
