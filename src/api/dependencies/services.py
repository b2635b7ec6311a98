"""Dependency injection factories for the web layer.

Components are composed once in ``create_app`` and kept on ``app.state``;
route handlers reach them through these dependencies.
"""

from typing import Callable

from fastapi import Request

from api.templating import TemplateRenderer
from domain.services.todo_service import TodoService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


def build_todo_service() -> TodoService:
    """Create the production Todo service backed by the configured database."""
    return TodoService(get_uow_factory())


def get_todo_service(request: Request) -> TodoService:
    """Get the application's Todo service instance."""
    return request.app.state.todo_service  # type: ignore[no-any-return]


def get_renderer(request: Request) -> TemplateRenderer:
    """Get the application's HTML template renderer."""
    return request.app.state.renderer  # type: ignore[no-any-return]
