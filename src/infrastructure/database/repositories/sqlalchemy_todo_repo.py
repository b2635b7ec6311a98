"""SQLAlchemy implementation of Todo repository."""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import TodoNotFoundError
from domain.entities.todo import Todo, TodoDraft
from infrastructure.database.models import MAX_TODO_ID, TodoModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLAlchemyTodoRepository:
    """SQLAlchemy implementation of ITodoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self) -> list[Todo]:
        """Get all todos ordered by id."""
        stmt = select(TodoModel).order_by(TodoModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def find_by_id(self, id: int) -> Todo | None:
        """Get a todo by ID; ids beyond the column range cannot match a row."""
        if id > MAX_TODO_ID:
            return None
        stmt = select(TodoModel).where(TodoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, todo: TodoDraft | Todo) -> Todo:
        """Insert a draft or update the row of a persisted todo."""
        if isinstance(todo, TodoDraft):
            return await self._insert(todo)
        return await self._update(todo)

    async def delete(self, todo: Todo) -> None:
        """Delete the todo's row, if it still exists."""
        stmt = delete(TodoModel).where(TodoModel.id == todo.id)
        await self._session.execute(stmt)
        await self._session.flush()

    async def _insert(self, draft: TodoDraft) -> Todo:
        now = _utcnow()
        model = TodoModel(
            title=draft.title,
            description=draft.description,
            done=draft.done,
            created_at=now,
            updated_at=now,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def _update(self, todo: Todo) -> Todo:
        stmt = select(TodoModel).where(TodoModel.id == todo.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise TodoNotFoundError(todo.id)

        # created_at is never rewritten
        model.title = todo.title
        model.description = todo.description
        model.done = todo.done
        model.updated_at = max(_utcnow(), _as_utc(model.updated_at))

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: TodoModel) -> Todo:
        """Convert ORM model to domain entity."""
        return Todo(
            id=model.id,
            title=model.title,
            description=model.description,
            done=model.done,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
