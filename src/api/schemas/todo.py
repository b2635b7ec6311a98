"""Pydantic schemas for the Todo form."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import InvalidTodoFormError
from domain.entities.todo import Todo, TodoDraft


class TodoForm(BaseModel):
    """Fields bound from an ``application/x-www-form-urlencoded`` submission.

    A missing ``done`` means false and a missing or blank ``id`` means the
    form describes a new task.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    done: bool = False
    id: int | None = Field(None, gt=0)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", "id", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "TodoForm":
        """Bind submitted form data, raising InvalidTodoFormError on bad input."""
        fields = {
            name: data[name]
            for name in ("title", "description", "done", "id")
            if name in data
        }
        try:
            return cls.model_validate(fields)
        except ValidationError as exc:
            errors = {
                str(error["loc"][0]) if error["loc"] else "form": _message(error)
                for error in exc.errors()
            }
            raise InvalidTodoFormError(errors) from exc

    def to_draft(self) -> TodoDraft:
        """Build an unsaved task from the form."""
        return TodoDraft(title=self.title, description=self.description, done=self.done)

    def apply_to(self, todo: Todo) -> Todo:
        """Copy the user-editable fields onto a stored task."""
        todo.title = self.title
        todo.description = self.description
        todo.done = self.done
        return todo


def _message(error: Any) -> str:
    if error["type"] in ("missing", "string_too_short"):
        return "This field is required"
    return str(error["msg"])
