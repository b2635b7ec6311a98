"""Todo repository protocol."""

from typing import Protocol

from domain.entities.todo import Todo, TodoDraft


class ITodoRepository(Protocol):
    """Repository interface for Todo entities."""

    async def find_all(self) -> list[Todo]:
        """Get all todos ordered by ascending id."""
        ...

    async def find_by_id(self, id: int) -> Todo | None:
        """Get a todo by ID, or None when no row matches."""
        ...

    async def save(self, todo: TodoDraft | Todo) -> Todo:
        """Insert a draft or update a persisted todo.

        The repository assigns the id and both timestamps on insert and
        refreshes updated_at on update.
        """
        ...

    async def delete(self, todo: Todo) -> None:
        """Delete the row for a todo; a missing row is a no-op."""
        ...
