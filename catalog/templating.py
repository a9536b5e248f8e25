"""
Page Rendering

Maps service outcomes onto HTTP responses:

- Redirect  -> 302 to the outcome's URL
- any page  -> the named Jinja2 template, with the outcome as `page`

Templates autoescape. Stored text is already HTML-escaped by the form
pipeline, so it is escaped a second time on output.
"""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from catalog.config import get_settings
from catalog.models import BookStatus
from catalog.services.outcomes import Redirect

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = get_settings().app_name
templates.env.globals["book_statuses"] = [s.value for s in BookStatus]


def render(request: Request, outcome: Any, template: str, status_code: int = 200) -> Response:
    """Turn a service outcome into a response."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(
        request,
        template,
        {"page": outcome, "title": outcome.title},
        status_code=status_code,
    )


def render_error(request: Request, message: str, status_code: int, detail: str | None = None) -> Response:
    """The error page, used by the application's exception handlers."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": message, "message": message, "status_code": status_code, "detail": detail},
        status_code=status_code,
    )
