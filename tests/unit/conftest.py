"""Shared fixtures for unit tests."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.todo import Todo


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked todo repository for unit testing."""

    def __init__(self) -> None:
        self.todos = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_todo(now: datetime) -> Todo:
    return Todo(
        id=1,
        title="Sample Task",
        description="Sample description",
        created_at=now,
        updated_at=now,
    )
