"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the application."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TASK_ID = "INVALID_TASK_ID"

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class TodoNotFoundError(AppException):
    """Todo not found."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {todo_id}",
            status_code=404,
            details={"todo_id": todo_id},
        )


class InvalidTodoIdError(AppException):
    """Path parameter is not a positive integer."""

    def __init__(self, raw_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_TASK_ID,
            message=f"Invalid task id: {raw_id!r}",
            status_code=400,
            details={"todo_id": raw_id},
        )


class InvalidTodoFormError(AppException):
    """Submitted task form failed validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Please correct the highlighted fields",
            status_code=400,
            details=errors,
        )


class StorageError(AppException):
    """The database could not complete the operation."""

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=500,
        )
