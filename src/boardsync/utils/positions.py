"""Position model for ordered siblings (cards in a column, columns on a board).

Positions are integers meaningful only relative to siblings. ``renumber`` is
the single place that decides canonical values: position always equals index
after a structural change.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar


class Positioned(Protocol):
    position: int


T = TypeVar("T")
P = TypeVar("P", bound=Positioned)


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """
    Move the element at from_index to to_index, keeping everything else in order.

    This is a stable move, not a swap: moving A to index 2 in [A, B, C, D]
    gives [B, C, A, D].

    Returns a new list. An out-of-range from_index returns an unchanged copy;
    to_index is clamped, so one-past-the-end inserts at the tail.
    """
    result = list(items)
    if from_index < 0 or from_index >= len(result):
        return result
    if from_index == to_index:
        return result

    item = result.pop(from_index)
    to_index = max(0, min(to_index, len(result)))
    result.insert(to_index, item)
    return result


def renumber(items: Sequence[P]) -> list[P]:
    """Set position = index on every element. Mutates and returns them as a list."""
    result = list(items)
    for index, item in enumerate(result):
        if item.position != index:
            item.position = index
    return result


def is_dense(items: Sequence[Positioned]) -> bool:
    """True if positions are exactly 0..n-1 in list order."""
    return all(item.position == index for index, item in enumerate(items))


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index into 0..length."""
    return max(0, min(index, length))


def order_by_ids(items: Sequence[T], ordered_ids: Sequence[str], key) -> list[T]:
    """
    Reorder items to follow ordered_ids.

    Ids that match no item are ignored. Items not named in ordered_ids keep
    their relative order after the named ones, so nothing is ever dropped.
    """
    by_id = {key(item): item for item in items}
    seen: set[str] = set()
    result: list[T] = []
    for item_id in ordered_ids:
        if item_id in by_id and item_id not in seen:
            result.append(by_id[item_id])
            seen.add(item_id)
    result.extend(item for item in items if key(item) not in seen)
    return result
