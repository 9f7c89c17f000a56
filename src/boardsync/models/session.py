"""Session context: where the user last worked."""

from pydantic import BaseModel


class SessionContext(BaseModel):
    """Last-used board and column.

    Loaded at session start and updated when the user opens or adds a card.
    Components that need a default insertion point receive it explicitly.
    """

    last_board_id: str | None = None
    last_column_id: str | None = None
