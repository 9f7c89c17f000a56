"""Drag session states, events and effects."""

from dataclasses import dataclass, field
from enum import Enum


class DragKind(str, Enum):
    """What kind of entity an id refers to on the board."""

    CARD = "card"
    COLUMN = "column"


# --- States ---


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""


@dataclass(frozen=True)
class DraggingCard:
    """A card is being dragged."""

    card_id: str
    origin_column_id: str  # Column at drag start, used to detect a move


@dataclass(frozen=True)
class DraggingColumn:
    """A column is being dragged."""

    column_id: str
    origin_index: int


DragState = Idle | DraggingCard | DraggingColumn

IDLE = Idle()


# --- Events ---


@dataclass(frozen=True)
class DragStart:
    entity_id: str


@dataclass(frozen=True)
class DragOver:
    over_id: str


@dataclass(frozen=True)
class DragEnd:
    over_id: str | None = None  # None: released over empty space


@dataclass(frozen=True)
class DragCancel:
    pass


DragEvent = DragStart | DragOver | DragEnd | DragCancel


# --- Effects ---


@dataclass(frozen=True)
class ProvisionalMove:
    """Move a card in the store only; nothing is persisted."""

    card_id: str
    column_id: str
    index: int


@dataclass(frozen=True)
class CommitCardOrder:
    """Apply a column's card order to the store and persist it."""

    column_id: str
    ordered_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommitColumnOrder:
    """Apply the board's column order to the store and persist it."""

    ordered_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PersistCardMove:
    """Tell the backend a card changed columns. The store already reflects it."""

    card_id: str
    column_id: str
    index: int


DragEffect = ProvisionalMove | CommitCardOrder | CommitColumnOrder | PersistCardMove
