"""UI components."""

from .scheduler import TextualScheduler
from .screens.board import BoardScreen
from .widgets.card import CardWidget
from .widgets.column import BoardColumn

__all__ = [
    "BoardColumn",
    "BoardScreen",
    "CardWidget",
    "TextualScheduler",
]
