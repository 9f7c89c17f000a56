"""Service layer for business logic."""

from .board_service import BoardService
from .config_service import ConfigService
from .deep_link import BoardView, DeepLinkResolver
from .dispatch import CommitResult, Dispatcher, Patch
from .drag import transition
from .filter_service import CardView, ColumnView, Filter, FilterService
from .scheduling import AsyncioScheduler, Scheduler
from .session_service import SessionService
from .store import BoardStore
from .undo import UndoManager

__all__ = [
    "AsyncioScheduler",
    "BoardService",
    "BoardStore",
    "BoardView",
    "CardView",
    "ColumnView",
    "CommitResult",
    "ConfigService",
    "DeepLinkResolver",
    "Dispatcher",
    "Filter",
    "FilterService",
    "Patch",
    "Scheduler",
    "SessionService",
    "UndoManager",
    "transition",
]
