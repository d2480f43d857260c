"""HTML routes: the search form and the rendered weather page."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .models import WeatherPage
from .weather_service import WeatherRequestHandler
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/routes")

router = APIRouter()


def get_templates(request: Request) -> Jinja2Templates:
    """Shared Jinja2 environment configured in main.py."""
    return request.app.state.templates


def get_handler(request: Request) -> WeatherRequestHandler:
    """Request handler wired up at startup."""
    return request.app.state.weather_handler


def _render(request: Request, templates: Jinja2Templates, page: WeatherPage) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", page.template_context())


@router.get("/", response_class=HTMLResponse)
def index(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    """Empty search form."""
    return _render(request, templates, WeatherPage.empty())


# Sync on purpose: FastAPI runs it in its threadpool while the provider calls block.
@router.post("/weather", response_class=HTMLResponse)
def weather(
    request: Request,
    city: str = Form(default=""),
    templates: Jinja2Templates = Depends(get_templates),
    handler: WeatherRequestHandler = Depends(get_handler),
):
    """Look up `city` and render the results, or the error banner."""
    logger.info(f"Weather lookup requested for {city!r}")
    page = handler.handle(city)
    return _render(request, templates, page)


@router.get("/healthz")
def healthz():
    """Liveness probe; does not touch the providers."""
    return {"status": "ok"}
