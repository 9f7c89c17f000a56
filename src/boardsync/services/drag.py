"""Drag state machine.

``transition(state, event, board)`` is pure: it reads the board, never
mutates it, and returns the next state plus the effects the caller should
apply. Effects are ordered; later ones assume earlier ones were applied.
"""

from __future__ import annotations

import logging

from ..models import (
    IDLE,
    Board,
    Column,
    CommitCardOrder,
    CommitColumnOrder,
    DragCancel,
    DragEffect,
    DragEnd,
    DragEvent,
    DraggingCard,
    DraggingColumn,
    DragOver,
    DragStart,
    DragState,
    PersistCardMove,
    ProvisionalMove,
)
from ..utils import array_move

logger = logging.getLogger(__name__)

Transition = tuple[DragState, list[DragEffect]]


def _resolve_column(board: Board, entity_id: str) -> Column | None:
    """A column id resolves to itself, a card id to the column holding it."""
    return board.get_column(entity_id) or board.column_of(entity_id)


def transition(state: DragState, event: DragEvent, board: Board) -> Transition:
    """Compute the next drag state and its effects."""
    if isinstance(event, DragStart):
        return _on_start(event, board)
    if isinstance(event, DragOver):
        return _on_over(state, event, board)
    if isinstance(event, DragEnd):
        return _on_end(state, event, board)
    if isinstance(event, DragCancel):
        return IDLE, []
    raise TypeError(f"Unknown drag event: {event!r}")


def _on_start(event: DragStart, board: Board) -> Transition:
    column = board.get_column(event.entity_id)
    if column is not None:
        return DraggingColumn(column.id, board.column_ids.index(column.id)), []

    owner = board.column_of(event.entity_id)
    if owner is not None:
        return DraggingCard(event.entity_id, owner.id), []

    logger.debug("drag start ignored, unknown id: %s", event.entity_id)
    return IDLE, []


def _on_over(state: DragState, event: DragOver, board: Board) -> Transition:
    # Only card drags react while hovering; column order is settled on release
    if not isinstance(state, DraggingCard):
        return state, []

    current = board.column_of(state.card_id)
    over = _resolve_column(board, event.over_id)
    if current is None or over is None or current.id == over.id:
        return state, []

    # Provisional: appended for live feedback, persisted only on release
    return state, [ProvisionalMove(state.card_id, over.id, len(over.cards))]


def _on_end(state: DragState, event: DragEnd, board: Board) -> Transition:
    if event.over_id is None:
        # Released over nothing. A provisional move made while hovering stays.
        return IDLE, []

    if isinstance(state, DraggingColumn):
        return IDLE, _end_column_drag(state, event.over_id, board)
    if isinstance(state, DraggingCard):
        return IDLE, _end_card_drag(state, event.over_id, board)
    return IDLE, []


def _end_column_drag(state: DraggingColumn, over_id: str, board: Board) -> list[DragEffect]:
    target = _resolve_column(board, over_id)
    column_ids = board.column_ids
    if target is None or state.column_id not in column_ids:
        return []

    from_index = column_ids.index(state.column_id)
    to_index = column_ids.index(target.id)
    if from_index == to_index:
        return []
    return [CommitColumnOrder(array_move(column_ids, from_index, to_index))]


def _end_card_drag(state: DraggingCard, over_id: str, board: Board) -> list[DragEffect]:
    column = board.column_of(state.card_id)
    if column is None:
        return []

    effects: list[DragEffect] = []
    card_ids = column.card_ids
    active_index = card_ids.index(state.card_id)
    over_index = column.index_of(over_id)

    if over_index != -1 and over_index != active_index:
        card_ids = array_move(card_ids, active_index, over_index)
        effects.append(CommitCardOrder(column.id, card_ids))

    # The column change is persisted separately from the ordering
    if column.id != state.origin_column_id:
        effects.append(PersistCardMove(state.card_id, column.id, card_ids.index(state.card_id)))

    return effects
