"""Tests for scroll target and duration computation."""

import pytest

from boardsync.utils import ease_out_cubic, scroll_duration_ms, scroll_target
from boardsync.utils.scroll import MAX_DURATION_MS, MIN_DURATION_MS


class TestEaseOutCubic:
    def test_endpoints(self):
        assert ease_out_cubic(0.0) == 0.0
        assert ease_out_cubic(1.0) == 1.0

    def test_front_loaded(self):
        """Most of the distance is covered early."""
        assert ease_out_cubic(0.5) == pytest.approx(0.875)


class TestScrollTarget:
    """Element 500 below the viewport top, 100 tall, in a 400 viewport."""

    def test_center(self):
        assert scroll_target(0, 500, 100, 400, 2000, "center") == 350

    def test_start(self):
        assert scroll_target(0, 500, 100, 400, 2000, "start") == 500

    def test_end(self):
        assert scroll_target(0, 500, 100, 400, 2000, "end") == 200

    def test_relative_to_current_scroll(self):
        assert scroll_target(300, 200, 100, 400, 2000, "start") == 500

    def test_clamped_to_content(self):
        assert scroll_target(0, 1950, 50, 400, 2000, "start") == 1600
        assert scroll_target(0, 10, 20, 400, 2000, "center") == 0

    def test_content_smaller_than_viewport(self):
        assert scroll_target(0, 100, 20, 400, 300, "center") == 0


class TestScrollDuration:
    def test_scales_with_distance(self):
        assert scroll_duration_ms(500) == pytest.approx(300)

    def test_bounds(self):
        assert scroll_duration_ms(10) == MIN_DURATION_MS
        assert scroll_duration_ms(5000) == MAX_DURATION_MS
        assert scroll_duration_ms(-5000) == MAX_DURATION_MS

    def test_explicit_duration_wins(self):
        assert scroll_duration_ms(5000, duration_ms=100) == 100
