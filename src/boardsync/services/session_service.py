"""Service for the user's session context (last board and column)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import Board, SessionContext

logger = logging.getLogger(__name__)


class SessionService:
    """
    Loads, updates and saves the session context.

    The context is read once at session start and written whenever it
    changes. Callers that need a default insertion point ask for it
    explicitly via ``default_column``.
    """

    SESSION_FILE = ".boardsync-session.yml"

    def __init__(self, project_root: Path | None) -> None:
        """
        Args:
            project_root: Where the session file lives. None keeps the
                context in memory only.
        """
        self.project_root = project_root
        self.context = self._load()

    @property
    def path(self) -> Path | None:
        if self.project_root is None:
            return None
        return self.project_root / self.SESSION_FILE

    def remember(self, board_id: str, column_id: str | None = None) -> None:
        """Record where the user just worked."""
        updated = SessionContext(
            last_board_id=board_id,
            last_column_id=column_id if column_id is not None else self.context.last_column_id,
        )
        if updated == self.context:
            return
        self.context = updated
        self._save()

    def default_board_id(self, fallback: str) -> str:
        """Board to open when none was asked for."""
        return self.context.last_board_id or fallback

    def default_column(self, board: Board) -> str | None:
        """
        Column new cards go to when none is given.

        The last used column if it is still on this board, otherwise the
        board's first column. None for a board without columns.
        """
        last = self.context.last_column_id
        if self.context.last_board_id == board.id and last and board.get_column(last):
            return last
        return board.columns[0].id if board.columns else None

    def _load(self) -> SessionContext:
        path = self.path
        if path is None or not path.exists():
            return SessionContext()
        try:
            with path.open() as f:
                data = yaml.safe_load(f) or {}
            return SessionContext(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", path, e)
            return SessionContext()

    def _save(self) -> None:
        path = self.path
        if path is None:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            yaml.safe_dump(self.context.model_dump(), f, default_flow_style=False, sort_keys=False)
