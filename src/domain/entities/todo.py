"""Todo domain entities."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(eq=False)
class TodoDraft:
    """A task that has not been persisted yet.

    Drafts carry no id and no timestamps; those are assigned by the store on
    first save. Equality is identity, so two drafts are never equal.
    """

    title: str
    description: str | None = None
    done: bool = False


@dataclass(eq=False)
class Todo:
    """A persisted task. Equal to another Todo when the ids match."""

    id: int
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    done: bool = False

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Todo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
