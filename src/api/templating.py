"""HTML template rendering."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Render a named template with a model mapping into an HTML string."""

    def __init__(self, directory: Path = TEMPLATES_DIR) -> None:
        self._templates = Jinja2Templates(directory=str(directory))

    def render(self, name: str, model: Mapping[str, Any]) -> str:
        """Render ``<name>.html``; jinja2.TemplateError propagates on failure."""
        template = self._templates.get_template(f"{name}.html")
        return template.render(**model)
