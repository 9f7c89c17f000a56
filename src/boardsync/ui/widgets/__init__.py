"""Widget components."""

from .card import CardWidget
from .card_detail_modal import CardDetailModal
from .column import BoardColumn, EmptyColumnMessage
from .command_bar import CommandBar
from .delete_column_modal import DeleteColumnModal
from .prompt_modal import PromptModal

__all__ = [
    "BoardColumn",
    "CardDetailModal",
    "CardWidget",
    "CommandBar",
    "DeleteColumnModal",
    "EmptyColumnMessage",
    "PromptModal",
]
