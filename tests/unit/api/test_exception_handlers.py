"""Unit tests for exception handlers."""

from collections.abc import Mapping
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from jinja2 import TemplateError
from sqlalchemy.exc import OperationalError

from api.exception_handlers import GENERIC_MESSAGE, setup_exception_handlers
from api.templating import TemplateRenderer
from core.exceptions import InvalidTodoIdError, StorageError, TodoNotFoundError


class BrokenRenderer(TemplateRenderer):
    def render(self, name: str, model: Mapping[str, Any]) -> str:
        raise TemplateError("template is broken")


def _create_test_app(renderer: TemplateRenderer | None = None) -> FastAPI:
    app = FastAPI()
    app.state.renderer = renderer or TemplateRenderer()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str) -> Any:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_not_found_renders_error_page(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise TodoNotFoundError(7)

        response = await _get(app, "/raise-app")

        assert response.status_code == 404
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert "Task not found: 7" in response.text

    @pytest.mark.asyncio
    async def test_invalid_id_is_bad_request(self) -> None:
        app = _create_test_app()

        @app.get("/raise-id")
        async def _() -> None:
            raise InvalidTodoIdError("abc")

        response = await _get(app, "/raise-id")

        assert response.status_code == 400
        assert "Invalid task id" in response.text

    @pytest.mark.asyncio
    async def test_storage_error_hides_details(self) -> None:
        app = _create_test_app()

        @app.get("/raise-storage")
        async def _() -> None:
            raise StorageError("connection refused on 10.0.0.5")

        response = await _get(app, "/raise-storage")

        assert response.status_code == 500
        assert GENERIC_MESSAGE in response.text
        assert "10.0.0.5" not in response.text

    @pytest.mark.asyncio
    async def test_raw_database_error_is_500(self) -> None:
        app = _create_test_app()

        @app.get("/raise-db")
        async def _() -> None:
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        response = await _get(app, "/raise-db")

        assert response.status_code == 500
        assert "database is locked" not in response.text

    @pytest.mark.asyncio
    async def test_template_error_is_500(self) -> None:
        app = _create_test_app()

        @app.get("/raise-template")
        async def _() -> None:
            raise TemplateError("missing template")

        response = await _get(app, "/raise-template")

        assert response.status_code == 500
        assert GENERIC_MESSAGE in response.text

    @pytest.mark.asyncio
    async def test_http_exception_renders_error_page(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _get(app, "/raise-http")

        assert response.status_code == 403
        assert "Forbidden" in response.text

    @pytest.mark.asyncio
    async def test_falls_back_when_error_template_fails(self) -> None:
        app = _create_test_app(BrokenRenderer())

        @app.get("/raise-app")
        async def _() -> None:
            raise TodoNotFoundError(7)

        response = await _get(app, "/raise-app")

        assert response.status_code == 404
        assert "<h1>404</h1>" in response.text
        assert "Task not found: 7" in response.text

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"
        mock_request.app.state.renderer = TemplateRenderer()

        exc = RuntimeError("secret internals")

        # Get the registered handler by looking up the app's handlers
        handler = None
        for exc_class, h in app.exception_handlers.items():
            if exc_class is Exception:
                handler = h
                break

        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, exc)  # type: ignore[misc]

        assert response.status_code == 500
        body = response.body.decode()
        assert "test-req-id" in body
        assert "secret internals" not in body
