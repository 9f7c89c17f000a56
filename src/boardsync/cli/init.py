"""Init command for creating a default config and a sample board."""

import logging
from pathlib import Path

import yaml

from ..models import Board, BoardsyncConfig, Card, Column, Label
from ..repositories import FilesystemGateway
from .output import error, info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = "boardsync.yml"

# Header comments for generated file
CONFIG_HEADER = """\
# boardsync configuration
#
# board_root: Directory holding boards, relative to this file
# default_board: Board opened when none is given and none was used before
#
# engine (seconds):
#   undo_window_seconds: How long an archived card can be restored
#   highlight_seconds: How long a deep-linked card stays highlighted
#   deep_link_delay_seconds: Delay before resolving a deep link
#   deep_link_clear_seconds: Delay before the link is removed after opening
#
# columns: Columns created on new boards (id: lowercase with underscores)
# priorities: Display color and symbol per priority id

"""


def generate_config_yaml(board_root: str = BoardsyncConfig.DEFAULT_BOARD_ROOT) -> str:
    """Generate YAML config from the default BoardsyncConfig model.

    Args:
        board_root: The board directory to write into the config
    """
    config = BoardsyncConfig.default()
    config_dict = config.model_dump()
    config_dict["board_root"] = board_root
    yaml_content = yaml.dump(config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return CONFIG_HEADER + yaml_content


def sample_board(config: BoardsyncConfig, board_id: str | None = None) -> Board:
    """A small board built from the configured columns, used by --init and --demo."""
    columns = [
        Column(id=col.id, title=col.title, position=i) for i, col in enumerate(config.columns)
    ]
    board = Board(id=board_id or config.default_board, name="Getting started", columns=columns)
    if not columns:
        return board

    first, last = columns[0], columns[-1]
    middle = columns[1] if len(columns) > 2 else first
    bug = Label(id="bug", name="bug", color="#ef4444")
    docs = Label(id="docs", name="docs", color="#3b82f6")

    first.cards = [
        Card(id="welcome", title="Welcome to boardsync", description="Press space to pick up a card."),
        Card(id="try-filter", title="Try the filter bar", description="Press / and type label:bug", priority="p3"),
        Card(id="fix-typo", title="Fix typo in README", labels=[docs], priority="p4"),
    ]
    middle.cards.append(Card(id="crash-on-drop", title="Crash when dropping on empty column", labels=[bug], priority="p1"))
    if last is not middle:
        last.cards.append(Card(id="set-up-board", title="Set up the board", assignee="me"))

    for column in columns:
        for position, card in enumerate(column.cards):
            card.column_id = column.id
            card.position = position
    return board


def run_init(project_root: Path) -> int:
    """
    Generate default configuration and a sample board.

    Args:
        project_root: Path to project root where boardsync.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_created = False
    board_created = False

    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
        try:
            config = BoardsyncConfig(**data)
        except (ValueError, TypeError) as e:
            error(f"Invalid {CONFIG_FILE}: {e}")
            return 1
    else:
        project_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml())
        success(f"Generated config: {config_path}")
        config = BoardsyncConfig.default()
        config_created = True

    if not config.columns:
        config.columns = BoardsyncConfig.default().columns

    gateway = FilesystemGateway(project_root / config.board_root)
    gateway.ensure_directory()
    if gateway.board_exists(config.default_board):
        info(f"Board exists: {gateway.board_root / config.default_board}/")
    else:
        gateway.write_board(sample_board(config))
        success(f"Created board: {gateway.board_root / config.default_board}/")
        board_created = True

    if not config_created and not board_created:
        info("Nothing to generate.")
        return 1

    logger.info("Initialized project at %s", project_root)
    return 0
