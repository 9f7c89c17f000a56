"""Main kanban board screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...errors import BoardNotFoundError
from ...models import Card, DraggingCard, DraggingColumn, DragState
from ...services import Filter
from ...utils import ease_out_cubic, scroll_duration_ms, scroll_target
from ..scheduler import TextualScheduler
from ..widgets.card import CardWidget
from ..widgets.card_detail_modal import CardDetailModal
from ..widgets.column import BoardColumn, CardListScroll
from ..widgets.command_bar import CommandBar

if TYPE_CHECKING:
    from ...services import BoardService


class BoardScreen(Screen):
    """
    Board screen with keyboard navigation and keyboard drag and drop.

    The cursor (current column and card) doubles as the drag pointer: while
    something is picked up, moving the cursor reports the card or column
    under it to the board service, and dropping releases over it.

    Also the deep-link resolver's view: it opens card details, highlights
    cards and scrolls them into view.
    """

    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_card = 0
        self._filter: Filter | None = None
        self._highlighted: str | None = None

    @property
    def board_service(self) -> BoardService:
        return self.app.board_service  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="board-container"):
            yield Horizontal(id="columns")
        yield Static("", id="drag-status", classes="status-bar")
        yield Static("", id="filter-status", classes="status-bar")
        yield CommandBar()
        yield Footer()

    async def on_mount(self) -> None:
        """Load the board, then hand any deep link to the resolver."""
        resolver = self.board_service.attach_view(self, TextualScheduler(self))
        await self.load_board()
        deep_link = self.app.deep_link  # pyrefly: ignore[missing-attribute]
        if deep_link:
            resolver.set_link(deep_link)

    async def load_board(self) -> None:
        """(Re)load the board snapshot from the gateway and render it."""
        board_id = self.app.board_id  # pyrefly: ignore[missing-attribute]
        try:
            board = await self.board_service.load_board(board_id)
        except BoardNotFoundError:
            self.app.notify(f"Board not found: {board_id}", severity="error")
            return
        self.sub_title = board.name or board.id
        await self.rebuild()

    # --- Rendering ---

    @property
    def columns(self) -> list[BoardColumn]:
        """Column widgets in display order."""
        return list(self.query(BoardColumn))

    def refresh_board(self, focus_card_id: str | None = None, focus_column_id: str | None = None) -> None:
        """Re-render from the store after the DOM settles."""
        self.call_after_refresh(self.rebuild, focus_card_id, focus_column_id)

    async def rebuild(self, focus_card_id: str | None = None, focus_column_id: str | None = None) -> None:
        """Replace all column widgets with a fresh projection of the store."""
        views = self.board_service.project(self._filter)
        config = self.app.config_service.get_config()  # pyrefly: ignore[missing-attribute]

        container = self.query_one("#columns", Horizontal)
        await container.remove_children()
        await container.mount_all([BoardColumn(view, config) for view in views])

        self._restore_position(focus_card_id, focus_column_id)
        self._restore_marks()
        self._update_focus()
        self._update_drag_status()

    def _restore_position(self, focus_card_id: str | None, focus_column_id: str | None) -> None:
        columns = self.columns
        if focus_card_id:
            for col_idx, column in enumerate(columns):
                card_idx = column.index_of(focus_card_id)
                if card_idx != -1:
                    self._current_column, self._current_card = col_idx, card_idx
                    return
        if focus_column_id:
            for col_idx, column in enumerate(columns):
                if column.column_id == focus_column_id:
                    self._current_column = col_idx
                    break
        self._clamp_position()

    def _clamp_position(self) -> None:
        columns = self.columns
        self._current_column = max(0, min(self._current_column, len(columns) - 1))
        column = self._get_column(self._current_column)
        if column and column.card_count > 0:
            self._current_card = max(0, min(self._current_card, column.card_count - 1))
        else:
            self._current_card = 0

    def _restore_marks(self) -> None:
        """Re-apply highlight and drag classes lost when widgets were replaced."""
        state = self.board_service.drag_state
        dragged_card = state.card_id if isinstance(state, DraggingCard) else None
        dragged_column = state.column_id if isinstance(state, DraggingColumn) else None
        for widget in self.query(CardWidget):
            widget.set_highlighted(widget.card_id == self._highlighted)
            widget.set_dragging(widget.card_id == dragged_card)
        for column in self.columns:
            column.set_class(column.column_id == dragged_column, "-dragging")

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column is None:
            return
        if not column.focus_card(self._current_card):
            column.scroll_visible()

    def _update_drag_status(self) -> None:
        status = self.query_one("#drag-status", Static)
        state = self.board_service.drag_state
        if isinstance(state, DraggingCard):
            card = self.board_service.store.find_card(state.card_id)
            title = card.title if card else state.card_id
            status.update(f"[b]Moving card:[/] {title} [dim](Enter to drop, Esc to release)[/]")
            status.display = True
        elif isinstance(state, DraggingColumn):
            column = self.board_service.store.find_column(state.column_id)
            title = column.title if column else state.column_id
            status.update(f"[b]Moving column:[/] {title} [dim](Enter to drop, Esc to release)[/]")
            status.display = True
        else:
            status.update("")
            status.display = False

    def _get_column(self, index: int) -> BoardColumn | None:
        columns = self.columns
        if 0 <= index < len(columns):
            return columns[index]
        return None

    # --- Cursor ---

    @property
    def current_column(self) -> BoardColumn | None:
        return self._get_column(self._current_column)

    @property
    def current_column_id(self) -> str | None:
        column = self.current_column
        return column.column_id if column else None

    @property
    def current_card_id(self) -> str | None:
        column = self.current_column
        return column.card_at(self._current_card) if column else None

    def jump_to(self, card_id: str) -> bool:
        """Put the cursor on a card and flash it. False if the card isn't shown."""
        if not any(column.index_of(card_id) != -1 for column in self.columns):
            return False
        self._restore_position(card_id, None)
        self._update_focus()
        return self.board_service.jump_to_card(card_id)

    def navigate_column(self, delta: int) -> None:
        """Move the cursor to another column; while dragging, hover it."""
        new_column = max(0, min(self._current_column + delta, len(self.columns) - 1))
        if new_column == self._current_column:
            return
        self._current_column = new_column
        self._clamp_position()
        self._update_focus()
        self._hover()

    def navigate_card(self, delta: int) -> None:
        """Move the cursor within the column; while dragging, hover that card."""
        column = self.current_column
        if column is None or column.card_count == 0:
            return
        new_card = max(0, min(self._current_card + delta, column.card_count - 1))
        if new_card == self._current_card:
            return
        self._current_card = new_card
        self._update_focus()
        self._hover()

    # --- Keyboard drag and drop ---

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.board_service.drag_state, DraggingCard | DraggingColumn)

    @property
    def hover_target(self) -> str | None:
        """Id under the cursor: a card, or the column itself when empty or dragging a column."""
        if isinstance(self.board_service.drag_state, DraggingColumn):
            return self.current_column_id
        return self.current_card_id or self.current_column_id

    def pick_up_card(self) -> bool:
        card_id = self.current_card_id
        if card_id is None:
            return False
        self.board_service.drag_start(card_id)
        self._restore_marks()
        self._update_drag_status()
        return True

    def pick_up_column(self) -> bool:
        column_id = self.current_column_id
        if column_id is None:
            return False
        self.board_service.drag_start(column_id)
        self._restore_marks()
        self._update_drag_status()
        return True

    def _hover(self) -> None:
        if not self.is_dragging:
            return
        over = self.hover_target
        if over is None:
            return
        state = self.board_service.drag_state
        if self.board_service.drag_over(over) and isinstance(state, DraggingCard):
            # The card now sits at the end of the hovered column
            self.refresh_board(focus_card_id=state.card_id)

    def drop(self) -> None:
        """Release over the cursor target."""
        state = self.board_service.drag_state
        self.board_service.drag_end(self.hover_target)
        self._refresh_after_drag(state)

    def release(self) -> None:
        """Release with no target: the gesture is discarded, nothing persisted."""
        state = self.board_service.drag_state
        self.board_service.drag_end(None)
        self._refresh_after_drag(state)

    def _refresh_after_drag(self, state: DragState) -> None:
        if isinstance(state, DraggingCard):
            self.refresh_board(focus_card_id=state.card_id)
        elif isinstance(state, DraggingColumn):
            self.refresh_board(focus_column_id=state.column_id)
        else:
            self.refresh_board()

    # --- Filter ---

    def set_filter(self, filter_: Filter | None, expression: str = "") -> None:
        self._filter = filter_
        status = self.query_one("#filter-status", Static)
        if expression.strip():
            status.update(f"[dim]Filter:[/] {expression} [dim](Esc to clear)[/]")
            status.display = True
        else:
            status.update("")
            status.display = False
        self.refresh_board(focus_card_id=self.current_card_id)

    # --- BoardView ---

    def open_detail(self, card: Card, column_title: str) -> None:
        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            CardDetailModal(card, column_title),
            callback=lambda result: self._detail_closed(card.id, result),
        )

    def _detail_closed(self, card_id: str, result: str | None) -> None:
        if self.board_service.deep_link:
            self.board_service.deep_link.detail_closed()
        if result == "archive":
            self.app.archive_card(card_id)  # pyrefly: ignore[missing-attribute]

    def set_highlight(self, card_id: str | None) -> None:
        self._highlighted = card_id
        for widget in self.query(CardWidget):
            widget.set_highlighted(widget.card_id == card_id)

    def scroll_to_card(self, card_id: str) -> bool:
        """Center a card in its column with an eased scroll."""
        widget = next((w for w in self.query(CardWidget) if w.card_id == card_id), None)
        if widget is None:
            return False
        scroll = next((node for node in widget.ancestors if isinstance(node, CardListScroll)), None)
        if scroll is None:
            return False

        current = scroll.scroll_y
        target = scroll_target(
            current,
            element_offset=widget.virtual_region.y - current,
            element_size=widget.outer_size.height,
            viewport_size=scroll.scrollable_content_region.height,
            content_size=scroll.virtual_size.height,
            block="center",
        )
        duration = scroll_duration_ms(target - current) / 1000
        scroll.scroll_to(y=target, animate=True, duration=duration, easing=ease_out_cubic)
        # Bring the column itself into view horizontally
        scroll.parent.scroll_visible()
        return True

    def clear_deep_link(self) -> None:
        self.app.deep_link = None  # pyrefly: ignore[missing-attribute]
