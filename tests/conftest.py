"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Mapping
from pathlib import Path
from typing import Any

# Disable rate limiting and point the app at SQLite before settings load
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from api.templating import TemplateRenderer
from domain.services.todo_service import TodoService
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingRenderer(TemplateRenderer):
    """Renders real templates and remembers every (name, model) pair."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, name: str, model: Mapping[str, Any]) -> str:
        self.calls.append((name, dict(model)))
        return super().render(name, model)

    @property
    def last(self) -> tuple[str, dict[str, Any]]:
        return self.calls[-1]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh test database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def todo_service(session_factory: async_sessionmaker[AsyncSession]) -> TodoService:
    """Todo service wired to the test database."""
    return TodoService(lambda: SQLAlchemyUnitOfWork(session_factory))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def app(todo_service: TodoService, renderer: RecordingRenderer) -> FastAPI:
    """Application wired to the in-memory database and a recording renderer."""
    from main import create_app

    return create_app(todo_service=todo_service, renderer=renderer)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client backed by the in-memory database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
