"""Data models."""

from .board import Board, Column
from .boardsync_config import (
    BoardsyncConfig,
    ColumnConfig,
    EngineConfig,
    PriorityConfig,
)
from .card import STRUCTURAL_FIELDS, Card, Label
from .drag import (
    IDLE,
    CommitCardOrder,
    CommitColumnOrder,
    DragCancel,
    DragEffect,
    DragEnd,
    DragEvent,
    DraggingCard,
    DraggingColumn,
    DragKind,
    DragOver,
    DragStart,
    DragState,
    Idle,
    PersistCardMove,
    ProvisionalMove,
)
from .session import SessionContext

__all__ = [
    "IDLE",
    "STRUCTURAL_FIELDS",
    "Board",
    "BoardsyncConfig",
    "Card",
    "Column",
    "ColumnConfig",
    "CommitCardOrder",
    "CommitColumnOrder",
    "DragCancel",
    "DragEffect",
    "DragEnd",
    "DragEvent",
    "DragKind",
    "DragOver",
    "DragStart",
    "DragState",
    "DraggingCard",
    "DraggingColumn",
    "EngineConfig",
    "Idle",
    "Label",
    "PersistCardMove",
    "PriorityConfig",
    "ProvisionalMove",
    "SessionContext",
]
