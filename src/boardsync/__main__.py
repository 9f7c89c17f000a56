"""CLI entry point for boardsync."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="boardsync",
        description="Terminal kanban board with optimistic ordering and sync",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Path to project root containing boardsync.yml (default: current directory)",
    )
    parser.add_argument(
        "--board",
        default=None,
        metavar="BOARD_ID",
        help="Board to open (default: last used board)",
    )
    parser.add_argument(
        "--card",
        default=None,
        metavar="CARD_ID",
        help="Open this card's details once the board has loaded",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--init", action="store_true", help="Write boardsync.yml and a sample board, then exit")
    mode.add_argument("--demo", action="store_true", help="Use an in-memory sample board; nothing touches disk")
    logs = parser.add_argument_group("logging")
    logs.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    logs.add_argument("--log-file", type=Path, metavar="PATH", help="Also write logs to PATH")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge CLI arguments over environment settings."""
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.board:
        settings_kwargs["board_id"] = args.board
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    if args.init:
        from .cli.init import run_init

        raise SystemExit(run_init(settings.project_root))

    # Import here so --init and --version don't load Textual
    from .app import run

    run(settings, deep_link=args.card, demo=args.demo)


if __name__ == "__main__":
    main()
