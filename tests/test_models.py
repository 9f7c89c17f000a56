"""Tests for card and board models."""

from datetime import date

import pytest
from pydantic import ValidationError

from boardsync.models import Card, Label

from conftest import make_board


class TestCard:
    def test_frontmatter_round_trip(self):
        card = Card(
            id="x",
            title="Ship it",
            column_id="doing",
            position=3,
            description="Notes",
            due_date=date(2025, 1, 31),
            priority="p1",
            estimated_time=45,
            labels=[Label(id="l1", name="Bug", color="#f00")],
            assignee="sam",
        )

        loaded = Card.from_frontmatter("x", card.to_frontmatter(), "Notes")

        assert loaded == card

    def test_minimal_frontmatter(self):
        data = Card(id="x", title="T", column_id="todo").to_frontmatter()
        assert data == {"title": "T", "column": "todo", "position": 0}

    def test_from_frontmatter_defaults(self):
        card = Card.from_frontmatter("x", {}, "")
        assert card.title == "x"
        assert card.description is None
        assert not card.archived

    def test_archived_flag(self):
        card = Card(id="x", title="T", archived=True)
        assert card.to_frontmatter()["archived"] is True
        assert Card.from_frontmatter("x", card.to_frontmatter(), "").archived

    def test_negative_position_rejected(self):
        with pytest.raises(ValidationError):
            Card(id="x", title="T", position=-1)

    def test_label_names_lowercase(self):
        card = Card(id="x", title="T", labels=[Label(id="1", name="UI")])
        assert card.label_names == ["ui"]


class TestBoard:
    def test_lookups(self, board):
        assert board.column_ids == ["todo", "doing", "done"]
        assert board.column_of("e").id == "doing"
        assert board.get_card("c").title == "Card c"
        assert board.get_card("zzz") is None
        assert board.get_column("done").index_of("a") == -1
        assert [c.id for c in board.all_cards()] == ["a", "b", "c", "d", "e"]

    def test_make_board_titles(self):
        board = make_board({"in_review": ["x"]})
        assert board.columns[0].title == "In Review"
