"""Todo service layer with business logic."""

from collections.abc import Callable

import structlog

from core.exceptions import TodoNotFoundError
from domain.entities.todo import Todo, TodoDraft
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TodoService:
    """Service layer for Todo business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list(self) -> list[Todo]:
        """Get all todos ordered by id."""
        async with self._uow_factory() as uow:
            return await uow.todos.find_all()

    async def get(self, todo_id: int) -> Todo:
        """Get a specific todo, raising TodoNotFoundError when absent."""
        async with self._uow_factory() as uow:
            return await self._get_or_raise(uow, todo_id)

    async def save(self, todo: TodoDraft | Todo) -> Todo:
        """Insert a draft or update an existing todo."""
        async with self._uow_factory() as uow:
            saved = await uow.todos.save(todo)
            await uow.commit()

        logger.info(
            "todo_created" if isinstance(todo, TodoDraft) else "todo_updated",
            todo_id=saved.id,
        )
        return saved

    async def delete(self, todo_id: int) -> None:
        """Delete a todo.

        The todo is fetched first so that an unknown id raises
        TodoNotFoundError instead of silently succeeding. The fetch and the
        delete are not atomic; a concurrent delete in between turns the
        second step into a no-op.
        """
        async with self._uow_factory() as uow:
            todo = await self._get_or_raise(uow, todo_id)
            await uow.todos.delete(todo)
            await uow.commit()

        logger.info("todo_deleted", todo_id=todo_id)

    async def _get_or_raise(self, uow: IUnitOfWork, todo_id: int) -> Todo:
        todo = await uow.todos.find_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo
