"""Tests for deep-link resolution."""

import asyncio

import pytest

from boardsync.services import AsyncioScheduler, BoardStore, DeepLinkResolver

from conftest import ManualScheduler, RecordingView, make_board


@pytest.fixture
def resolver(store: BoardStore, view: RecordingView, scheduler: ManualScheduler) -> DeepLinkResolver:
    return DeepLinkResolver(store, view, scheduler)


class TestResolve:
    def test_waits_for_initial_delay(self, resolver, view, scheduler):
        resolver.set_link("c")
        scheduler.advance(0.04)
        assert view.opened == []

        scheduler.advance(0.02)
        assert view.opened == [("c", "To Do")]
        assert resolver.processed == "c"

    def test_highlight_scroll_and_clear(self, resolver, view, scheduler):
        resolver.set_link("e")
        scheduler.advance(0.05)

        assert view.highlighted == "e"
        assert view.scrolled == ["e"]
        assert resolver.link == "e"

        scheduler.advance(0.4)
        assert resolver.link is None
        assert view.cleared == 1
        assert view.highlighted == "e"

        scheduler.advance(1.0)
        assert view.highlighted is None

    def test_opens_only_once(self, resolver, view, scheduler):
        """Re-renders and repeated links don't reopen a processed card."""
        resolver.set_link("c")
        scheduler.advance(1.0)
        resolver.board_changed()
        resolver.set_link("c")
        scheduler.advance(1.0)
        resolver.resolve()

        assert view.opened == [("c", "To Do")]

    def test_closing_detail_allows_relink(self, resolver, view, scheduler):
        resolver.set_link("c")
        scheduler.advance(1.0)
        resolver.detail_closed()

        assert resolver.processed is None
        assert view.highlighted is None

        resolver.set_link("c")
        scheduler.advance(0.05)
        assert view.opened == [("c", "To Do"), ("c", "To Do")]

    def test_detail_closed_clears_pending_link(self, resolver, view, scheduler):
        resolver.set_link("c")
        scheduler.advance(0.05)
        resolver.detail_closed()
        assert resolver.link is None
        assert view.cleared == 1

    def test_missing_card_is_noop_until_board_loads(self, resolver, view, scheduler, store):
        resolver.set_link("zzz")
        scheduler.advance(1.0)
        assert view.opened == []
        assert resolver.link == "zzz"
        assert view.cleared == 0

        store.reset(make_board({"later": ["zzz"]}))
        resolver.board_changed()
        scheduler.advance(0.05)
        assert view.opened == [("zzz", "Later")]

    def test_column_title_follows_renames(self, resolver, view, scheduler, store):
        store.rename_column("doing", "Doing Now")
        resolver.set_link("e")
        scheduler.advance(0.05)
        assert view.opened == [("e", "Doing Now")]

    def test_scroll_skipped_when_not_mounted(self, resolver, view, scheduler):
        view.mounted = False
        resolver.set_link("a")
        scheduler.advance(1.0)
        assert view.opened == [("a", "To Do")]
        assert view.scrolled == []

    def test_changing_link_cancels_pending_resolve(self, resolver, view, scheduler):
        resolver.set_link("a")
        scheduler.advance(0.02)
        resolver.set_link("b")
        scheduler.advance(0.05)
        assert view.opened == [("b", "To Do")]

    def test_new_link_survives_previous_clear_after_close(self, resolver, view, scheduler):
        """The clear scheduled for a resolved link doesn't drop the next one."""
        resolver.set_link("a")
        scheduler.advance(0.2)
        resolver.detail_closed()
        assert view.cleared == 1

        resolver.set_link("zzz")
        scheduler.advance(1.0)

        assert resolver.link == "zzz"
        assert view.cleared == 1

    def test_new_link_survives_previous_clear(self, resolver, view, scheduler, store):
        resolver.set_link("a")
        scheduler.advance(0.1)
        resolver.set_link("zzz")
        scheduler.advance(1.0)
        assert resolver.link == "zzz"
        assert view.cleared == 0

        store.reset(make_board({"later": ["zzz"]}))
        resolver.board_changed()
        scheduler.advance(0.05)
        assert view.opened == [("a", "To Do"), ("zzz", "Later")]


class TestHighlight:
    def test_new_highlight_replaces_running_timer(self, resolver, view, scheduler):
        resolver.jump_to_card("a")
        scheduler.advance(1.0)
        resolver.jump_to_card("b")
        scheduler.advance(0.5)
        # The first timer would have fired at 1.2 and cleared b's highlight
        assert view.highlighted == "b"
        scheduler.advance(1.0)
        assert view.highlighted is None

    def test_jump_to_unmounted_card(self, resolver, view):
        view.mounted = False
        assert not resolver.jump_to_card("a")
        assert view.highlights == []


class TestDispose:
    def test_nothing_fires_after_dispose(self, resolver, view, scheduler):
        resolver.set_link("a")
        scheduler.advance(0.05)
        resolver.dispose()
        scheduler.advance(5.0)

        assert scheduler.pending == []
        assert view.cleared == 0
        assert view.highlighted == "a"

    def test_dispose_before_resolve(self, resolver, view, scheduler):
        resolver.set_link("a")
        resolver.dispose()
        scheduler.advance(1.0)
        assert view.opened == []


class TestAsyncioScheduler:
    def test_resolves_on_running_loop(self, store, view):
        async def scenario():
            resolver = DeepLinkResolver(
                store, view, AsyncioScheduler(), highlight_duration=0.02, initial_delay=0.0, clear_delay=0.01
            )
            resolver.set_link("c")
            await asyncio.sleep(0.1)
            resolver.dispose()

        asyncio.run(scenario())

        assert view.opened == [("c", "To Do")]
        assert view.scrolled == ["c"]
        assert view.highlights == ["c", None]
        assert view.cleared == 1
