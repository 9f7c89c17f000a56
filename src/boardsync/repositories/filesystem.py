"""Filesystem-based gateway for board storage."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from ..errors import BoardNotFoundError
from ..models import STRUCTURAL_FIELDS, Board, Card, Column

logger = logging.getLogger(__name__)


class FilesystemGateway:
    """
    Gateway for boards stored on the filesystem.

    Each board is a directory under board_root::

        <board_root>/<board_id>/board.yaml       name, background, columns
        <board_root>/<board_id>/cards/<id>.md    one card per file

    Cards are markdown files with YAML front matter holding their column,
    position and archived flag; the body is the description. Positions are
    stored exactly as given; ordering on load is by (position, id).

    File IO runs inline in the coroutines, on the event loop. Boards are
    small local directories, and no method body awaits anything that
    suspends, so each call's read-modify-write of board.yaml and the card
    files completes before another call starts. Moving the IO to worker
    threads would need a per-board lock to keep that guarantee.
    """

    BOARD_YAML = "board.yaml"
    CARDS_DIR = "cards"

    def __init__(self, board_root: Path) -> None:
        """
        Initialize gateway.

        Args:
            board_root: Directory containing one subdirectory per board
        """
        self.board_root = board_root

    def ensure_directory(self) -> None:
        """Create the board root if it doesn't exist."""
        self.board_root.mkdir(parents=True, exist_ok=True)

    def board_exists(self, board_id: str) -> bool:
        return (self.board_root / board_id / self.BOARD_YAML).exists()

    def write_board(self, board: Board) -> None:
        """Write a whole board (layout and cards) to disk."""
        board_dir = self.board_root / board.id
        (board_dir / self.CARDS_DIR).mkdir(parents=True, exist_ok=True)
        self._save_layout(board.id, self._layout_from_board(board))
        for column in board.columns:
            for card in column.cards:
                self._write_card(board.id, card)

    # --- GatewayProtocol ---

    async def load_board(self, board_id: str) -> Board:
        """Load a board with its non-archived cards in position order."""
        layout = self._load_layout(board_id)
        columns = [
            Column(id=raw["id"], title=raw["title"], position=raw.get("position", idx))
            for idx, raw in enumerate(layout.get("columns", []))
        ]
        columns.sort(key=lambda c: c.position)
        by_id = {column.id: column for column in columns}

        for card in self._iter_cards(board_id):
            if card.archived:
                continue
            column = by_id.get(card.column_id)
            if column is None:
                logger.warning("Card %s points at unknown column %s, skipping", card.id, card.column_id)
                continue
            column.cards.append(card)

        for column in columns:
            column.cards.sort(key=lambda c: (c.position, c.id))

        logger.info("Loaded board %s (%d columns)", board_id, len(columns))
        return Board(
            id=board_id,
            name=layout.get("name", board_id),
            background=layout.get("background", ""),
            columns=columns,
        )

    async def move_card(self, card_id: str, target_column_id: str, target_index: int) -> None:
        """Shift cards at and after target_index down by one, then place the card."""
        located = self._locate_card(card_id)
        if located is None:
            return
        board_id, card = located

        siblings = sorted(
            (c for c in self._iter_cards(board_id) if c.column_id == target_column_id and not c.archived),
            key=lambda c: (c.position, c.id),
        )
        for i in range(target_index, len(siblings)):
            sibling = siblings[i]
            sibling.position = i + 1
            self._write_card(board_id, sibling)

        card.column_id = target_column_id
        card.position = max(0, target_index)
        self._write_card(board_id, card)

    async def reorder_cards(self, column_id: str, ordered_card_ids: list[str]) -> None:
        for index, card_id in enumerate(ordered_card_ids):
            located = self._locate_card(card_id)
            if located is None:
                continue
            board_id, card = located
            card.position = index
            self._write_card(board_id, card)

    async def reorder_columns(self, board_id: str, ordered_column_ids: list[str]) -> None:
        layout = self._load_layout(board_id)
        positions = {column_id: index for index, column_id in enumerate(ordered_column_ids)}
        raw_columns = layout.get("columns", [])
        for raw in raw_columns:
            if raw["id"] in positions:
                raw["position"] = positions[raw["id"]]
        layout["columns"] = sorted(raw_columns, key=lambda raw: raw.get("position", 0))
        self._save_layout(board_id, layout)

    async def archive_card(self, card_id: str) -> None:
        await self._set_archived(card_id, True)

    async def restore_card(self, card_id: str) -> None:
        await self._set_archived(card_id, False)

    async def create_card(self, card: Card) -> None:
        board_id = self._board_of_column(card.column_id)
        if board_id is None:
            logger.warning("create_card: unknown column %s", card.column_id)
            return
        positions = [c.position for c in self._iter_cards(board_id) if c.column_id == card.column_id]
        stored = card.model_copy(update={"position": max(positions) + 1 if positions else 0})
        self._write_card(board_id, stored)

    async def update_card(self, card_id: str, fields: dict[str, Any]) -> None:
        located = self._locate_card(card_id)
        if located is None:
            return
        board_id, card = located
        allowed = {k: v for k, v in fields.items() if k not in STRUCTURAL_FIELDS and k in Card.model_fields}
        self._write_card(board_id, card.model_copy(update=allowed))

    async def create_column(self, board_id: str, column: Column) -> None:
        layout = self._load_layout(board_id)
        raw_columns = layout.setdefault("columns", [])
        positions = [raw.get("position", 0) for raw in raw_columns]
        raw_columns.append(
            {"id": column.id, "title": column.title, "position": max(positions) + 1 if positions else 0}
        )
        self._save_layout(board_id, layout)

    async def rename_column(self, column_id: str, title: str) -> None:
        board_id = self._board_of_column(column_id)
        if board_id is None:
            return
        layout = self._load_layout(board_id)
        for raw in layout["columns"]:
            if raw["id"] == column_id:
                raw["title"] = title
        self._save_layout(board_id, layout)

    async def delete_column(self, column_id: str) -> None:
        board_id = self._board_of_column(column_id)
        if board_id is None:
            return
        layout = self._load_layout(board_id)
        layout["columns"] = [raw for raw in layout["columns"] if raw["id"] != column_id]
        self._save_layout(board_id, layout)
        for card in list(self._iter_cards(board_id)):
            if card.column_id == column_id:
                self._card_path(board_id, card.id).unlink(missing_ok=True)

    # --- Private Methods ---

    async def _set_archived(self, card_id: str, archived: bool) -> None:
        located = self._locate_card(card_id)
        if located is None:
            return
        board_id, card = located
        card.archived = archived
        self._write_card(board_id, card)

    def _card_path(self, board_id: str, card_id: str) -> Path:
        return self.board_root / board_id / self.CARDS_DIR / f"{card_id}.md"

    def _load_layout(self, board_id: str) -> dict:
        """Load board.yaml for a board."""
        yaml_path = self.board_root / board_id / self.BOARD_YAML
        if not yaml_path.exists():
            raise BoardNotFoundError(board_id)
        with yaml_path.open() as f:
            return yaml.safe_load(f) or {}

    def _save_layout(self, board_id: str, layout: dict) -> None:
        """Write board.yaml to disk."""
        yaml_path = self.board_root / board_id / self.BOARD_YAML
        yaml_path.parent.mkdir(parents=True, exist_ok=True)
        with yaml_path.open("w") as f:
            yaml.safe_dump(layout, f, default_flow_style=False, sort_keys=False)

    def _layout_from_board(self, board: Board) -> dict:
        return {
            "name": board.name,
            "background": board.background,
            "columns": [
                {"id": column.id, "title": column.title, "position": column.position}
                for column in board.columns
            ],
        }

    def _iter_board_ids(self) -> Iterator[str]:
        if not self.board_root.exists():
            return
        for yaml_path in sorted(self.board_root.glob(f"*/{self.BOARD_YAML}")):
            yield yaml_path.parent.name

    def _board_of_column(self, column_id: str) -> str | None:
        for board_id in self._iter_board_ids():
            layout = self._load_layout(board_id)
            if any(raw["id"] == column_id for raw in layout.get("columns", [])):
                return board_id
        return None

    def _locate_card(self, card_id: str) -> tuple[str, Card] | None:
        for board_id in self._iter_board_ids():
            path = self._card_path(board_id, card_id)
            if path.exists():
                card = self._parse_card_file(path)
                if card is not None:
                    return board_id, card
        logger.debug("card not found on disk: %s", card_id)
        return None

    def _iter_cards(self, board_id: str) -> Iterator[Card]:
        cards_dir = self.board_root / board_id / self.CARDS_DIR
        if not cards_dir.exists():
            return
        for path in sorted(cards_dir.glob("*.md")):
            card = self._parse_card_file(path)
            if card is not None:
                yield card

    def _parse_card_file(self, path: Path) -> Card | None:
        """Parse a single card file, skipping it if it is malformed."""
        try:
            post = frontmatter.load(path)
            return Card.from_frontmatter(path.stem, post.metadata, post.content)
        except Exception as e:
            logger.warning("Skipping unreadable card file %s: %s", path, e)
            return None

    def _write_card(self, board_id: str, card: Card) -> None:
        path = self._card_path(board_id, card.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        post = frontmatter.Post(card.description or "")
        post.metadata = card.to_frontmatter()
        with path.open("w") as f:
            f.write(frontmatter.dumps(post, sort_keys=False))
