"""Utility functions."""

from .positions import array_move, clamp_index, is_dense, order_by_ids, renumber
from .scroll import ease_out_cubic, scroll_duration_ms, scroll_target

__all__ = [
    "array_move",
    "clamp_index",
    "ease_out_cubic",
    "is_dense",
    "order_by_ids",
    "renumber",
    "scroll_duration_ms",
    "scroll_target",
]
