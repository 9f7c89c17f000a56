"""Tests for the drag state machine."""

import pytest

from boardsync.models import (
    IDLE,
    Board,
    CommitCardOrder,
    CommitColumnOrder,
    DragCancel,
    DragEnd,
    DraggingCard,
    DraggingColumn,
    DragOver,
    DragStart,
    PersistCardMove,
    ProvisionalMove,
)
from boardsync.services import BoardStore, transition

from conftest import make_board


class TestDragStart:
    def test_card_id_starts_card_drag(self, board: Board):
        state, effects = transition(IDLE, DragStart("b"), board)
        assert state == DraggingCard("b", "todo")
        assert effects == []

    def test_column_id_starts_column_drag(self, board: Board):
        state, effects = transition(IDLE, DragStart("doing"), board)
        assert state == DraggingColumn("doing", 1)
        assert effects == []

    def test_unknown_id_stays_idle(self, board: Board):
        state, _ = transition(IDLE, DragStart("nope"), board)
        assert state == IDLE

    def test_column_wins_when_ids_collide(self):
        """An id naming both a column and a card is treated as a column."""
        board = make_board({"x": ["x"], "y": []})
        state, _ = transition(IDLE, DragStart("x"), board)
        assert isinstance(state, DraggingColumn)


class TestDragOver:
    def test_over_other_column_appends_provisionally(self, board: Board):
        state = DraggingCard("a", "todo")
        new_state, effects = transition(state, DragOver("doing"), board)
        assert new_state == state
        assert effects == [ProvisionalMove("a", "doing", 1)]

    def test_over_card_in_other_column_resolves_to_its_column(self, board: Board):
        _, effects = transition(DraggingCard("a", "todo"), DragOver("e"), board)
        assert effects == [ProvisionalMove("a", "doing", 1)]

    def test_over_empty_column(self, board: Board):
        _, effects = transition(DraggingCard("a", "todo"), DragOver("done"), board)
        assert effects == [ProvisionalMove("a", "done", 0)]

    def test_over_same_column_does_nothing(self, board: Board):
        _, effects = transition(DraggingCard("a", "todo"), DragOver("c"), board)
        assert effects == []

    def test_over_unknown_does_nothing(self, board: Board):
        _, effects = transition(DraggingCard("a", "todo"), DragOver("nope"), board)
        assert effects == []

    def test_column_drag_ignores_hover(self, board: Board):
        state = DraggingColumn("todo", 0)
        assert transition(state, DragOver("done"), board) == (state, [])

    def test_idle_ignores_hover(self, board: Board):
        assert transition(IDLE, DragOver("done"), board) == (IDLE, [])


class TestDragEndColumn:
    def test_reorders_columns(self, board: Board):
        state, effects = transition(DraggingColumn("todo", 0), DragEnd("done"), board)
        assert state == IDLE
        assert effects == [CommitColumnOrder(["doing", "done", "todo"])]

    def test_drop_on_card_uses_its_column(self, board: Board):
        _, effects = transition(DraggingColumn("done", 2), DragEnd("b"), board)
        assert effects == [CommitColumnOrder(["done", "todo", "doing"])]

    def test_drop_on_itself_is_noop(self, board: Board):
        assert transition(DraggingColumn("todo", 0), DragEnd("a"), board) == (IDLE, [])


class TestDragEndCard:
    def test_reorder_within_column(self, board: Board):
        """Dropping A over C in [A, B, C, D] gives [B, C, A, D]."""
        state, effects = transition(DraggingCard("a", "todo"), DragEnd("c"), board)
        assert state == IDLE
        assert effects == [CommitCardOrder("todo", ["b", "c", "a", "d"])]

    def test_drop_on_itself_is_noop(self, board: Board):
        assert transition(DraggingCard("b", "todo"), DragEnd("b"), board) == (IDLE, [])

    def test_drop_on_column_in_place_is_noop(self, board: Board):
        assert transition(DraggingCard("b", "todo"), DragEnd("todo"), board) == (IDLE, [])

    def test_release_without_target(self, board: Board):
        assert transition(DraggingCard("a", "todo"), DragEnd(None), board) == (IDLE, [])

    def test_after_provisional_move_persists_column_change(self, board: Board):
        """Hover moved the card into Doing; dropping on the column persists it."""
        store = BoardStore(board)
        store.move_card_to_column("a", "doing", 1)

        _, effects = transition(DraggingCard("a", "todo"), DragEnd("doing"), store.board)

        assert effects == [PersistCardMove("a", "doing", 1)]

    def test_reorder_and_move_uses_final_index(self, board: Board):
        """Both the new order and the move are emitted; the move index is post-reorder."""
        store = BoardStore(board)
        store.move_card_to_column("a", "doing", 1)  # doing: [e, a]

        _, effects = transition(DraggingCard("a", "todo"), DragEnd("e"), store.board)

        assert effects == [
            CommitCardOrder("doing", ["a", "e"]),
            PersistCardMove("a", "doing", 0),
        ]

    def test_card_gone_mid_drag(self, board: Board):
        store = BoardStore(board)
        store.remove_card("a")
        assert transition(DraggingCard("a", "todo"), DragEnd("b"), store.board) == (IDLE, [])


class TestMisc:
    def test_cancel_returns_to_idle(self, board: Board):
        assert transition(DraggingCard("a", "todo"), DragCancel(), board) == (IDLE, [])

    def test_idle_end_is_noop(self, board: Board):
        assert transition(IDLE, DragEnd("a"), board) == (IDLE, [])

    def test_transition_does_not_mutate_board(self, board: Board):
        before = board.model_copy(deep=True)
        transition(DraggingCard("a", "todo"), DragOver("doing"), board)
        transition(DraggingCard("a", "todo"), DragEnd("c"), board)
        transition(DraggingColumn("todo", 0), DragEnd("done"), board)
        assert board == before

    def test_unknown_event(self, board: Board):
        with pytest.raises(TypeError):
            transition(IDLE, object(), board)  # type: ignore[arg-type]
