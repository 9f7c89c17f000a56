"""Tests for the in-memory gateway."""

import asyncio

import pytest

from boardsync.errors import BoardNotFoundError, GatewayError
from boardsync.models import Card, Column
from boardsync.repositories import MemoryGateway

from conftest import layout_of


class TestMemoryGateway:
    def test_load_returns_copy(self, gateway: MemoryGateway):
        board = asyncio.run(gateway.load_board("b1"))
        board.columns[0].cards.clear()
        assert gateway.stored_board("b1").get_column("todo").card_ids == ["a", "b", "c", "d"]

    def test_unknown_board(self, gateway: MemoryGateway):
        with pytest.raises(BoardNotFoundError):
            asyncio.run(gateway.load_board("nope"))

    def test_move_and_reorder(self, gateway: MemoryGateway):
        async def scenario():
            await gateway.move_card("a", "doing", 0)
            await gateway.reorder_cards("todo", ["d", "b", "c"])
            await gateway.reorder_columns("b1", ["done", "doing", "todo"])

        asyncio.run(scenario())

        assert layout_of(gateway.stored_board("b1")) == {
            "done": [],
            "doing": ["a", "e"],
            "todo": ["d", "b", "c"],
        }

    def test_archive_and_restore(self, gateway: MemoryGateway):
        async def scenario():
            await gateway.archive_card("b")
            archived = gateway.is_archived("b")
            await gateway.restore_card("b")
            return archived

        assert asyncio.run(scenario())
        assert not gateway.is_archived("b")
        assert gateway.stored_board("b1").get_column("todo").card_ids == ["a", "b", "c", "d"]

    def test_card_and_column_crud(self, gateway: MemoryGateway):
        async def scenario():
            await gateway.create_column("b1", Column(id="later", title="Later"))
            await gateway.create_card(Card(id="n", title="New", column_id="later"))
            await gateway.update_card("n", {"title": "Renamed", "column_id": "todo"})
            await gateway.rename_column("later", "Someday")
            await gateway.delete_column("done")

        asyncio.run(scenario())

        board = gateway.stored_board("b1")
        assert board.column_ids == ["todo", "doing", "later"]
        assert board.get_column("later").title == "Someday"
        card = board.get_card("n")
        assert card.title == "Renamed"
        assert card.column_id == "later"

    def test_recorded_calls_and_failures(self, gateway: MemoryGateway):
        gateway.fail_on.add("rename_column")

        with pytest.raises(GatewayError):
            asyncio.run(gateway.rename_column("todo", "Nope"))

        assert gateway.calls == [("rename_column", ("todo", "Nope"))]
        assert gateway.stored_board("b1").get_column("todo").title == "To Do"
