"""Exceptions raised by boardsync."""


class BoardsyncError(Exception):
    """Base class for boardsync errors."""


class StoreInvariantError(BoardsyncError):
    """The optimistic store is structurally invalid."""


class BoardNotFoundError(BoardsyncError):
    """A board could not be loaded from the gateway."""

    def __init__(self, board_id: str) -> None:
        super().__init__(f"Board not found: {board_id}")
        self.board_id = board_id


class GatewayError(BoardsyncError):
    """A persistence call was rejected by the backing store."""
