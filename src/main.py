"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.middleware import SlowAPIMiddleware

from api.dependencies.services import build_todo_service
from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import APP_VERSION
from api.routes.health import router as health_router
from api.routes.todos import router as todos_router
from api.templating import TemplateRenderer
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter
from domain.services.todo_service import TodoService
from infrastructure.database.session import engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info("application_started", environment=settings.app_env)
    yield
    await engine.dispose()
    logger.info("application_stopped")


def create_app(
    todo_service: TodoService | None = None,
    renderer: TemplateRenderer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The service and renderer are built here once and shared by all
    requests; pass replacements to run against another database or
    template set.
    """
    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        description=(
            "## Task list\n\n"
            "Server-rendered pages to list, view, create and delete tasks.\n\n"
            "### Rate Limits\n"
            "- GET pages: 30 requests/minute\n"
            "- POST forms: 10 requests/minute"
        ),
        version=APP_VERSION,
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "todos",
                "description": "Task pages and forms",
            },
        ],
    )

    # Components (Store -> Service -> Handler)
    app.state.todo_service = todo_service or build_todo_service()
    app.state.renderer = renderer or TemplateRenderer()

    # Rate limiting
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(todos_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
