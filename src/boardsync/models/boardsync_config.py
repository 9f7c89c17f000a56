"""Configuration models for boardsync.yml."""

import re
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

IDENTIFIER_RE = re.compile(r"^[a-z][a-z0-9_]*$")
HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _check_identifier(value: str, what: str) -> str:
    if IDENTIFIER_RE.match(value) is None:
        raise ValueError(
            f"{what} {value!r} must start with a lowercase letter and contain only "
            "lowercase letters, digits and underscores"
        )
    return value


def _check_color(value: str) -> str:
    """Named colors pass through; anything starting with # must be #rgb or #rrggbb."""
    if value.startswith("#") and HEX_COLOR_RE.match(value) is None:
        raise ValueError(f"invalid hex color {value!r} (use #rgb or #rrggbb)")
    return value


def _check_unique(ids: list[str], what: str) -> None:
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"duplicate {what}: {', '.join(duplicates)}")


class ColumnConfig(BaseModel):
    """A column created on new boards."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return _check_identifier(v, "column id")


class PriorityConfig(BaseModel):
    """Display settings for one priority level (p1 = most urgent)."""

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    color: str = "white"
    symbol: str = "●"

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return _check_identifier(v, "priority id")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_color(v)


class EngineConfig(BaseModel):
    """Timings for the undo window and deep-link handling, in seconds."""

    undo_window_seconds: float = Field(default=5.0, gt=0)
    highlight_seconds: float = Field(default=1.2, gt=0)
    deep_link_delay_seconds: float = Field(default=0.05, ge=0)
    deep_link_clear_seconds: float = Field(default=0.4, ge=0)


class BoardsyncConfig(BaseModel):
    """Root configuration model for boardsync.yml."""

    DEFAULT_BOARD_ROOT: ClassVar[str] = ".boards"

    version: int = 1
    board_root: str = Field(
        default=DEFAULT_BOARD_ROOT,
        description="Directory holding boards, relative to the project root",
    )
    default_board: str = "main"
    engine: EngineConfig = Field(default_factory=EngineConfig)
    columns: list[ColumnConfig] = Field(default_factory=list)
    priorities: list[PriorityConfig] = Field(default_factory=list)

    @field_validator("board_root")
    @classmethod
    def validate_board_root(cls, v: str) -> str:
        """Board root must stay inside the project."""
        if v.startswith("/"):
            raise ValueError("board_root must be a relative path")
        if ".." in v.split("/"):
            raise ValueError("board_root cannot reference a parent directory")
        return v

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        _check_unique([c.id for c in v], "column ids")
        return v

    @field_validator("priorities")
    @classmethod
    def validate_priorities(cls, v: list[PriorityConfig]) -> list[PriorityConfig]:
        _check_unique([p.id for p in v], "priority ids")
        return v

    def get_priority(self, priority_id: str | None) -> PriorityConfig | None:
        """Get priority config by ID."""
        for p in self.priorities:
            if p.id == priority_id:
                return p
        return None

    @classmethod
    def default(cls) -> "BoardsyncConfig":
        """Return the default configuration."""
        return cls(
            columns=[
                ColumnConfig(id="todo", title="To Do"),
                ColumnConfig(id="in_progress", title="In Progress"),
                ColumnConfig(id="done", title="Done"),
            ],
            priorities=[
                PriorityConfig(id="p1", label="P1", color="red", symbol="▲"),
                PriorityConfig(id="p2", label="P2", color="orange1", symbol="▲"),
                PriorityConfig(id="p3", label="P3", color="yellow", symbol="●"),
                PriorityConfig(id="p4", label="P4", color="blue", symbol="▼"),
            ],
        )
