"""Board ordering and optimistic synchronization engine for kanban boards."""

__version__ = "0.1.0"
