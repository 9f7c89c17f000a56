"""Tests for the Textual-backed scheduler and widget ids."""

from unittest.mock import MagicMock

from boardsync.ui.scheduler import DeferredCall, TextualScheduler
from boardsync.ui.widgets.card import card_css_id
from boardsync.ui.widgets.column import column_css_id


class TestTextualScheduler:
    def test_call_later_uses_timer(self):
        owner = MagicMock()
        callback = MagicMock()

        handle = TextualScheduler(owner).call_later(1.2, callback)
        handle.cancel()

        owner.set_timer.assert_called_once_with(1.2, callback)
        owner.set_timer.return_value.stop.assert_called_once_with()

    def test_call_soon_runs_after_refresh(self):
        owner = MagicMock()
        callback = MagicMock()

        call = TextualScheduler(owner).call_soon(callback)
        queued = owner.call_after_refresh.call_args.args[0]
        queued()

        assert queued is call
        callback.assert_called_once_with()

    def test_cancelled_deferred_call_is_noop(self):
        callback = MagicMock()
        call = DeferredCall(callback)
        call.cancel()
        call()
        callback.assert_not_called()


class TestCssIds:
    def test_ids_are_safe(self):
        assert card_css_id("a1b2") == "card-a1b2"
        assert card_css_id("owner/repo#1") == "card-owner-repo-1"
        assert column_css_id("in_progress") == "column-in_progress"
