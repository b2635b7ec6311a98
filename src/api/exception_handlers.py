"""Exception handlers rendering HTML error pages."""

from html import escape

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from jinja2 import TemplateError
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.templating import TemplateRenderer
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()

GENERIC_MESSAGE = "Something went wrong. Please try again later."


def render_error_page(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
) -> HTMLResponse:
    """Render the ``error`` template, falling back to inline HTML if it fails."""
    request_id = getattr(request.state, "request_id", "unknown")
    model = {
        "status_code": status_code,
        "message": message,
        "error_code": error_code,
        "request_id": request_id,
    }
    renderer: TemplateRenderer | None = getattr(request.app.state, "renderer", None)
    body: str | None = None
    if renderer is not None:
        try:
            body = renderer.render("error", model)
        except TemplateError:
            logger.error("error_page_render_failed", request_id=request_id, exc_info=True)

    if body is None:
        body = (
            "<!doctype html><html><head><title>Error</title></head><body>"
            f"<h1>{status_code}</h1><p>{escape(message)}</p></body></html>"
        )
    return HTMLResponse(body, status_code=status_code)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> HTMLResponse:
        """Handle custom application exceptions."""
        if exc.status_code >= 500:
            # Storage failures: the user gets the generic page only
            logger.error(
                "app_exception",
                error_code=exc.error_code.value,
                message=exc.message,
                exc_info=exc,
            )
            return render_error_page(
                request, exc.status_code, GENERIC_MESSAGE, exc.error_code.value
            )

        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        return render_error_page(request, exc.status_code, exc.message, exc.error_code.value)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> HTMLResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return render_error_page(request, exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> HTMLResponse:
        """Handle request validation errors as bad input."""
        logger.info("validation_error", errors=exc.errors())
        return render_error_page(
            request, 400, "The request was malformed", ErrorCode.VALIDATION_ERROR.value
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(
        request: Request, exc: RateLimitExceeded
    ) -> HTMLResponse:
        """Handle rate limit exceeded errors."""
        return render_error_page(
            request,
            429,
            f"Rate limit exceeded: {exc.detail}",
            ErrorCode.RATE_LIMIT_EXCEEDED.value,
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> HTMLResponse:
        """Handle database errors that escaped the unit of work."""
        logger.error(
            "storage_error",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return render_error_page(request, 500, GENERIC_MESSAGE, ErrorCode.DATABASE_ERROR.value)

    @app.exception_handler(TemplateError)
    async def template_exception_handler(
        request: Request, exc: TemplateError
    ) -> HTMLResponse:
        """Handle template failures like storage failures."""
        logger.error(
            "template_error",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return render_error_page(request, 500, GENERIC_MESSAGE, ErrorCode.TEMPLATE_ERROR.value)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        return render_error_page(request, 500, GENERIC_MESSAGE, ErrorCode.INTERNAL_ERROR.value)
