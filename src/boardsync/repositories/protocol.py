"""Gateway protocol for board persistence backends."""

from typing import Any, Protocol

from ..models import Board, Card, Column


class GatewayProtocol(Protocol):
    """Interface for the store that durably records board state.

    The engine never consumes the results of the write methods: they are
    fired as unawaited tasks after the optimistic store has been updated.
    Backends re-derive and store positions from the indexes they are given.
    """

    async def load_board(self, board_id: str) -> Board:
        """Load a board snapshot with columns and their ordered, non-archived cards.

        Raises:
            BoardNotFoundError: if the board does not exist.
        """
        ...

    async def move_card(self, card_id: str, target_column_id: str, target_index: int) -> None:
        """Record that a card now lives in target_column_id at target_index."""
        ...

    async def reorder_cards(self, column_id: str, ordered_card_ids: list[str]) -> None:
        """Store position = index for each card id in the column."""
        ...

    async def reorder_columns(self, board_id: str, ordered_column_ids: list[str]) -> None:
        """Store position = index for each column id on the board."""
        ...

    async def archive_card(self, card_id: str) -> None:
        """Soft-delete a card. Its column and position are left as they were."""
        ...

    async def restore_card(self, card_id: str) -> None:
        """Clear the archived flag on a card."""
        ...

    async def create_card(self, card: Card) -> None:
        """Persist a new card at the end of its column."""
        ...

    async def update_card(self, card_id: str, fields: dict[str, Any]) -> None:
        """Persist non-structural field edits."""
        ...

    async def create_column(self, board_id: str, column: Column) -> None:
        """Persist a new column at the end of the board."""
        ...

    async def rename_column(self, column_id: str, title: str) -> None:
        """Persist a column title."""
        ...

    async def delete_column(self, column_id: str) -> None:
        """Delete a column and its cards."""
        ...
