"""Todo HTML routes.

Every write answers with a 303 redirect to the list page (Post/Redirect/Get)
so that reloading the browser never resubmits a form.
"""

import re
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import FormData

from api.dependencies.services import get_renderer, get_todo_service
from api.schemas.todo import TodoForm
from api.templating import TemplateRenderer
from core.exceptions import InvalidTodoFormError, InvalidTodoIdError
from core.rate_limit import limiter
from domain.entities.todo import TodoDraft
from domain.services.todo_service import TodoService

LIST_PATH = "/todos"

router = APIRouter(prefix=LIST_PATH, tags=["todos"])

_ID_PATTERN = re.compile(r"[0-9]+")
_TRUTHY = {"true", "on", "1", "yes", "y", "t"}


def parse_todo_id(raw_id: str) -> int:
    """Parse a path id, raising InvalidTodoIdError unless it is a positive integer."""
    if not _ID_PATTERN.fullmatch(raw_id) or int(raw_id) < 1:
        raise InvalidTodoIdError(raw_id)
    return int(raw_id)


def _render(
    renderer: TemplateRenderer,
    name: str,
    model: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return HTMLResponse(renderer.render(name, model), status_code=status_code)


def _redirect_to_list() -> RedirectResponse:
    return RedirectResponse(url=LIST_PATH, status_code=status.HTTP_303_SEE_OTHER)


def _submitted(form: FormData) -> dict[str, Any]:
    """Echo submitted values back into the form after a validation failure."""
    return {
        "id": form.get("id") or None,
        "title": form.get("title", ""),
        "description": form.get("description", ""),
        "done": str(form.get("done", "")).strip().lower() in _TRUTHY,
    }


@router.get("", response_class=HTMLResponse, summary="List all tasks")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_todos(
    request: Request,
    service: TodoService = Depends(get_todo_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Render every task, ordered by id."""
    todos = await service.list()
    return _render(renderer, "index", {"todos": todos})


@router.get("/new", response_class=HTMLResponse, summary="New task form")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def new_todo_form(
    request: Request,
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    return _render(renderer, "form", {"todo": TodoDraft(title="")})


@router.post("", response_model=None, summary="Create or update a task")
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def save_todo(
    request: Request,
    service: TodoService = Depends(get_todo_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse | RedirectResponse:
    """
    Bind the submitted form to a task and save it.

    Without an `id` a new task is created. With an `id` the stored task is
    loaded and its fields are replaced. Invalid input re-renders the form
    with a 400 status.
    """
    form = await request.form()
    try:
        bound = TodoForm.from_form(form)
    except InvalidTodoFormError as exc:
        return _render(
            renderer,
            "form",
            {"todo": _submitted(form), "errors": exc.details},
            status_code=exc.status_code,
        )

    if bound.id is None:
        await service.save(bound.to_draft())
    else:
        existing = await service.get(bound.id)
        await service.save(bound.apply_to(existing))

    return _redirect_to_list()


@router.get("/{todo_id}", response_class=HTMLResponse, summary="Show a task")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def show_todo(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    todo = await service.get(parse_todo_id(todo_id))
    return _render(renderer, "detail", {"todo": todo})


@router.get("/{todo_id}/edit", response_class=HTMLResponse, summary="Edit task form")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def edit_todo_form(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Render the form pre-filled with a stored task; it posts back with its id."""
    todo = await service.get(parse_todo_id(todo_id))
    return _render(renderer, "form", {"todo": todo})


@router.post("/{todo_id}/delete", summary="Delete a task")
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_todo(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> RedirectResponse:
    await service.delete(parse_todo_id(todo_id))
    return _redirect_to_list()
