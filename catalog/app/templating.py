from pathlib import Path

from fastapi.templating import Jinja2Templates

from .config import get_settings
from .pagination import get_pagination_defaults
from .rendering import markdown_markup

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATES_DIR = BASE_DIR.parent / "templates"


def build_templates(directory: str | None = None) -> Jinja2Templates:
    """Jinja templates with the markdown filter and pagination defaults wired in."""
    settings = get_settings()
    templates = Jinja2Templates(directory=directory or settings.templates_dir or str(DEFAULT_TEMPLATES_DIR))
    env = templates.env
    env.filters["markdown"] = markdown_markup
    # Resolved per render so startup configuration is picked up.
    env.globals["pagination_defaults"] = get_pagination_defaults
    return templates
