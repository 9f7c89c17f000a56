"""boardsync TUI application."""

import logging

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .cli.init import sample_board
from .config import Settings
from .models import Board, Column
from .repositories import FilesystemGateway, GatewayProtocol, MemoryGateway
from .services import BoardService, CommitResult, ConfigService, FilterService, SessionService
from .ui.screens.board import BoardScreen
from .ui.screens.help import HelpScreen
from .ui.widgets import CommandBar, DeleteColumnModal, PromptModal

logger = logging.getLogger(__name__)


class BoardsyncApp(App):
    """boardsync - terminal kanban board."""

    TITLE = "boardsync"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "reload", "Reload", show=False),
        # Navigation - vim style and arrows
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Card", show=False),
        Binding("k", "nav_up", "↑ Card", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Card", show=False),
        Binding("up", "nav_up", "↑ Card", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Drag and drop
        Binding("space", "pick_up_card", "Pick up", show=True),
        Binding("shift+space", "pick_up_column", "Pick up column", show=False),
        Binding("enter", "enter", "Drop / Open", show=False),
        # Card actions
        Binding("n", "new_card", "New", show=True),
        Binding("L", "send_right", "Send →", show=False),
        Binding("H", "send_left", "Send ←", show=False),
        Binding("shift+right", "send_right", "Send →", show=False),
        Binding("shift+left", "send_left", "Send ←", show=False),
        Binding("a", "archive_card", "Archive", show=True),
        Binding("u", "undo", "Undo", show=True),
        # Column actions
        Binding("c", "add_column", "Add column", show=False),
        Binding("R", "rename_column", "Rename column", show=False),
        Binding("D", "delete_column", "Delete column", show=False),
        # Filter mode
        Binding("/", "enter_filter", "Filter", show=True),
        Binding("g", "jump", "Jump to card", show=False),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        gateway: GatewayProtocol | None = None,
        deep_link: str | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.deep_link = deep_link
        self._init_services(gateway)

    def _init_services(self, gateway: GatewayProtocol | None) -> None:
        """Initialize gateway and services."""
        self.config_service = ConfigService(self.settings.project_root)
        config = self.config_service.get_config()

        # An injected gateway (e.g. --demo) doesn't touch the project directory
        in_memory = gateway is not None
        self.session_service = SessionService(None if in_memory else self.settings.project_root)
        self.gateway: GatewayProtocol = gateway or FilesystemGateway(self.config_service.board_root)

        self.board_service = BoardService(
            self.gateway,
            self.config_service,
            self.session_service,
            on_failure=self._on_persist_failure,
        )
        self.filter_service = FilterService()
        self.board_id = self.settings.board_id or self.session_service.default_board_id(config.default_board)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        if self.config_service.has_config_error:
            self.notify(f"{self.config_service.config_error}. Using defaults.", severity="warning")
        if isinstance(self.gateway, FilesystemGateway):
            self._ensure_board(self.gateway)
        self.push_screen(BoardScreen())

    def _ensure_board(self, gateway: FilesystemGateway) -> None:
        """Create an empty board with the configured columns on first run."""
        gateway.ensure_directory()
        if gateway.board_exists(self.board_id):
            return
        config = self.config_service.get_config()
        columns = [Column(id=c.id, title=c.title, position=i) for i, c in enumerate(config.columns)]
        gateway.write_board(Board(id=self.board_id, name=self.board_id, columns=columns))
        logger.info("Created board %s", self.board_id)

    def _on_persist_failure(self, result: CommitResult) -> None:
        """The board keeps the change; tell the user it wasn't saved."""
        self.notify(f"Could not save: {result.patch.describe()}", severity="error", timeout=5)

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    async def action_reload(self) -> None:
        """Reload the board from storage."""
        screen = self._board_screen()
        if screen and not screen.is_dragging:
            await screen.load_board()

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    # Navigation actions
    def action_nav_left(self) -> None:
        screen = self._board_screen()
        if screen:
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        screen = self._board_screen()
        if screen:
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        screen = self._board_screen()
        if screen:
            screen.navigate_card(-1)

    def action_nav_down(self) -> None:
        screen = self._board_screen()
        if screen:
            screen.navigate_card(1)

    # Drag and drop
    def action_pick_up_card(self) -> None:
        screen = self._board_screen()
        if screen and not screen.is_dragging:
            screen.pick_up_card()

    def action_pick_up_column(self) -> None:
        screen = self._board_screen()
        if screen and not screen.is_dragging:
            screen.pick_up_column()

    def action_enter(self) -> None:
        """Drop while dragging, otherwise open the card under the cursor."""
        screen = self._board_screen()
        if screen is None:
            return
        if screen.is_dragging:
            screen.drop()
            return

        card_id = screen.current_card_id
        if card_id is None:
            return
        opened = self.board_service.open_card(card_id)
        if opened:
            card, column_title = opened
            screen.open_detail(card, column_title)

    # Card actions
    def action_new_card(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        column_id = screen.current_column_id
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            PromptModal("New card title"),
            callback=lambda title: self._create_card(title, column_id),
        )

    def _create_card(self, title: str | None, column_id: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        card = self.board_service.add_card(title, column_id)
        if card:
            screen.refresh_board(focus_card_id=card.id)
            self.notify("Card created", timeout=2)

    def action_send_right(self) -> None:
        self._send_card(1)

    def action_send_left(self) -> None:
        self._send_card(-1)

    def _send_card(self, delta: int) -> None:
        """Move the current card to the end of the neighbouring column."""
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        card_id = screen.current_card_id
        column_ids = self.board_service.board.column_ids
        current = self.board_service.store.column_of(card_id) if card_id else None
        if card_id is None or current is None:
            return

        index = column_ids.index(current.id) + delta
        if not 0 <= index < len(column_ids):
            return
        if self.board_service.move_card(card_id, column_ids[index]):
            target = self.board_service.store.find_column(column_ids[index])
            screen.refresh_board(focus_card_id=card_id)
            self.notify(f"Moved to {target.title if target else column_ids[index]}", timeout=2)

    def action_archive_card(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        card_id = screen.current_card_id
        if card_id:
            self.archive_card(card_id)

    def archive_card(self, card_id: str) -> None:
        """Archive a card and offer undo for the length of the window."""
        screen = self._board_screen()
        if not self.board_service.archive_card(card_id):
            return
        if screen:
            screen.refresh_board()
        window = self.board_service.undo.window
        self.notify("Card archived. Press u to undo", timeout=window)

    def action_undo(self) -> None:
        screen = self._board_screen()
        pending = self.board_service.undo.pending_card_id
        if not self.board_service.undo_archive():
            self.notify("Nothing to undo", timeout=2)
            return
        if screen:
            screen.refresh_board(focus_card_id=pending)
        self.notify("Card restored", timeout=2)

    # Column actions
    def action_add_column(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            PromptModal("New column title", value="New Column"),
            callback=self._create_column,
        )

    def _create_column(self, title: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        column = self.board_service.add_column(title)
        screen.refresh_board(focus_column_id=column.id)

    def action_rename_column(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        column_id = screen.current_column_id
        column = self.board_service.store.find_column(column_id) if column_id else None
        if column is None:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            PromptModal("Rename column", value=column.title),
            callback=lambda title: self._rename_column(column.id, title),
        )

    def _rename_column(self, column_id: str, title: str | None) -> None:
        screen = self._board_screen()
        if title and screen and self.board_service.rename_column(column_id, title):
            screen.refresh_board(focus_column_id=column_id)

    def action_delete_column(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        column_id = screen.current_column_id
        column = self.board_service.store.find_column(column_id) if column_id else None
        if column is None:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            DeleteColumnModal(column.title, len(column.cards)),
            callback=lambda confirmed: self._delete_column(column.id, confirmed),
        )

    def _delete_column(self, column_id: str, confirmed: bool) -> None:
        screen = self._board_screen()
        if confirmed and screen and self.board_service.delete_column(column_id):
            screen.refresh_board()
            self.notify("Column deleted", timeout=2)

    # Filter actions
    def action_enter_filter(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        screen.query_one(CommandBar).open()

    def action_jump(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            PromptModal("Jump to card (id or filter)"),
            callback=self._jump,
        )

    def _jump(self, query: str | None) -> None:
        """Move to the first card matching the query and flash it."""
        screen = self._board_screen()
        if not query or screen is None:
            return
        matches = self.board_service.find_cards(query)
        if not matches:
            self.notify(f"No card matches {query!r}", severity="warning", timeout=3)
            return
        target = matches[0]
        if not screen.jump_to(target.id):
            self.notify(f"{target.card.title} is hidden by the filter", timeout=3)
        elif len(matches) > 1:
            self.notify(f"{len(matches)} matches, showing the first", timeout=2)

    def action_escape(self) -> None:
        """Dismiss a modal, release a drag, leave filter mode or clear the filter."""
        screen = self.screen

        if isinstance(screen, ModalScreen):
            screen.dismiss()
            return

        if not isinstance(screen, BoardScreen):
            return

        if screen.is_dragging:
            screen.release()
            return

        command_bar = screen.query_one(CommandBar)
        if command_bar.is_open:
            command_bar.close()
        elif command_bar.expression:
            command_bar.clear()
            self._apply_filter("")

    def on_command_bar_applied(self, message: CommandBar.Applied) -> None:
        self._apply_filter(message.expression)

    def _apply_filter(self, expression: str) -> None:
        screen = self._board_screen()
        if screen is None:
            return
        if expression.strip():
            screen.set_filter(self.filter_service.parse(expression), expression)
        else:
            screen.set_filter(None, "")

    async def on_unmount(self) -> None:
        await self.board_service.close()


def run(settings: Settings | None = None, deep_link: str | None = None, demo: bool = False) -> None:
    """Run the boardsync application."""
    gateway = None
    if demo:
        settings = settings or Settings()
        config = ConfigService(settings.project_root).get_config()
        gateway = MemoryGateway([sample_board(config, settings.board_id)])
    app = BoardsyncApp(settings, gateway=gateway, deep_link=deep_link)
    app.run()
