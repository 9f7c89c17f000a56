"""Scroll target computation for bringing a card into view."""

from typing import Literal

ScrollBlock = Literal["start", "center", "end"]

MIN_DURATION_MS = 220
MAX_DURATION_MS = 600


def ease_out_cubic(t: float) -> float:
    """Ease-out cubic curve on 0..1."""
    return 1 - (1 - t) ** 3


def scroll_target(
    current: float,
    element_offset: float,
    element_size: float,
    viewport_size: float,
    content_size: float,
    block: ScrollBlock = "center",
) -> float:
    """
    Compute where a container should scroll to so an element lands at block.

    element_offset is relative to the top of the visible viewport.
    The result is clamped to 0..(content_size - viewport_size).
    """
    target = current + element_offset
    if block == "center":
        target = target - viewport_size / 2 + element_size / 2
    elif block == "end":
        target = target - viewport_size + element_size

    max_target = max(0.0, content_size - viewport_size)
    return max(0.0, min(target, max_target))


def scroll_duration_ms(distance: float, duration_ms: float | None = None) -> float:
    """Animation duration, longer for longer distances within fixed bounds."""
    if duration_ms is not None:
        return duration_ms
    return min(MAX_DURATION_MS, max(MIN_DURATION_MS, abs(distance) * 0.6))

