"""Tests for the command line entry point and --init."""

from pathlib import Path

import pytest
import yaml

from boardsync.__main__ import build_settings, main, parse_args
from boardsync.cli.init import CONFIG_FILE, generate_config_yaml, run_init, sample_board
from boardsync.models import BoardsyncConfig, ColumnConfig
from boardsync.repositories import FilesystemGateway


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.project_root is None
        assert args.board is None
        assert args.card is None
        assert not args.init
        assert not args.demo
        assert args.verbose == 0

    def test_build_settings(self, tmp_path: Path):
        args = parse_args(["--project-root", str(tmp_path), "--board", "ops", "--card", "c1", "-vv"])
        settings = build_settings(args)

        assert settings.project_root == tmp_path
        assert settings.board_id == "ops"
        assert settings.verbose == 2
        assert args.card == "c1"

    def test_init_and_demo_are_exclusive(self, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--init", "--demo"])
        assert exc.value.code == 2
        assert "not allowed with" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--version"])
        assert exc.value.code == 0
        assert "boardsync" in capsys.readouterr().out


class TestGenerateConfigYaml:
    def test_matches_default_config(self):
        parsed = yaml.safe_load(generate_config_yaml())
        default = BoardsyncConfig.default()

        assert parsed["board_root"] == ".boards"
        assert [c["id"] for c in parsed["columns"]] == [c.id for c in default.columns]
        assert BoardsyncConfig(**parsed) == default

    def test_custom_board_root(self):
        assert yaml.safe_load(generate_config_yaml("boards"))["board_root"] == "boards"

    def test_includes_header_comments(self):
        content = generate_config_yaml()
        assert content.startswith("# boardsync configuration")
        assert "undo_window_seconds" in content


class TestSampleBoard:
    def test_cards_spread_over_columns(self):
        board = sample_board(BoardsyncConfig.default())

        assert board.id == "main"
        assert {c.id: c.card_ids for c in board.columns} == {
            "todo": ["welcome", "try-filter", "fix-typo"],
            "in_progress": ["crash-on-drop"],
            "done": ["set-up-board"],
        }
        for column in board.columns:
            assert [card.position for card in column.cards] == list(range(len(column.cards)))
            assert all(card.column_id == column.id for card in column.cards)

    def test_single_column(self):
        config = BoardsyncConfig(columns=[ColumnConfig(id="all", title="All")])
        board = sample_board(config, "solo")

        assert board.id == "solo"
        assert board.columns[0].card_ids == ["welcome", "try-filter", "fix-typo", "crash-on-drop"]

    def test_no_columns(self):
        assert sample_board(BoardsyncConfig()).columns == []


class TestRunInit:
    def test_creates_config_and_board(self, tmp_path: Path):
        assert run_init(tmp_path) == 0

        assert (tmp_path / CONFIG_FILE).exists()
        gateway = FilesystemGateway(tmp_path / ".boards")
        assert gateway.board_exists("main")

    def test_second_run_has_nothing_to_do(self, tmp_path: Path):
        run_init(tmp_path)
        assert run_init(tmp_path) == 1

    def test_existing_config_gets_board(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("board_root: work\ndefault_board: ops\n")

        assert run_init(tmp_path) == 0
        assert FilesystemGateway(tmp_path / "work").board_exists("ops")

    def test_invalid_config(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("board_root: /abs\n")
        assert run_init(tmp_path) == 1

    def test_main_init_exits(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc:
            main(["--init", "--project-root", str(tmp_path)])
        assert exc.value.code == 0
        assert (tmp_path / CONFIG_FILE).exists()
