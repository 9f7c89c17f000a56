"""Card domain model."""

from datetime import date

from pydantic import BaseModel, Field

# Fields that describe where a card lives; only the store may change them
STRUCTURAL_FIELDS = frozenset({"id", "column_id", "position"})


class Label(BaseModel):
    """A colored label attached to cards."""

    id: str
    name: str
    color: str = "#94a3b8"


class Card(BaseModel):
    """A single card on a board."""

    id: str
    title: str
    column_id: str = ""
    position: int = Field(default=0, ge=0)

    description: str | None = None
    due_date: date | None = None
    priority: str | None = None  # "p1".."p4", None means unset
    estimated_time: int | None = None  # minutes
    labels: list[Label] = Field(default_factory=list)
    assignee: str | None = None

    # Archived cards are not part of any column list. column_id/position
    # keep their last values as a restore hint.
    archived: bool = False

    @property
    def label_names(self) -> list[str]:
        """Lowercased label names, for matching."""
        return [label.name.lower() for label in self.labels]

    def to_frontmatter(self) -> dict:
        """Convert to dict suitable for YAML front matter."""
        data: dict = {
            "title": self.title,
            "column": self.column_id,
            "position": self.position,
        }
        if self.archived:
            data["archived"] = True
        if self.due_date:
            data["due_date"] = self.due_date.isoformat()
        if self.priority:
            data["priority"] = self.priority
        if self.estimated_time is not None:
            data["estimated_time"] = self.estimated_time
        if self.labels:
            data["labels"] = [label.model_dump() for label in self.labels]
        if self.assignee:
            data["assignee"] = self.assignee
        return data

    @classmethod
    def from_frontmatter(cls, card_id: str, metadata: dict, body: str) -> "Card":
        """Create Card from parsed front matter."""
        return cls(
            id=card_id,
            title=metadata.get("title") or card_id,
            column_id=metadata.get("column", ""),
            position=metadata.get("position", 0),
            description=body or None,
            due_date=_parse_date(metadata.get("due_date")),
            priority=metadata.get("priority"),
            estimated_time=metadata.get("estimated_time"),
            labels=[Label(**raw) for raw in metadata.get("labels", [])],
            assignee=metadata.get("assignee"),
            archived=bool(metadata.get("archived", False)),
        )


def _parse_date(value: str | date | None) -> date | None:
    """Parse date from string or pass through."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)
