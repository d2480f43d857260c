"""FastAPI application setup, templates and static file serving for City Weather."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from . import config
from .data_sources import build_clients
from .routes import router as ui_router
from .weather_service import WeatherRequestHandler
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/main")

_ROOT_DIR = Path(__file__).resolve().parent.parent
_STATIC_DIR = _ROOT_DIR / "static"
_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


def check_required_settings(settings: config.Settings) -> None:
    """Refuse to start without provider API keys."""
    missing = settings.missing_api_keys()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


def create_app(settings: Optional[config.Settings] = None, handler: Optional[WeatherRequestHandler] = None) -> FastAPI:
    """Build the app. Tests pass their own settings/handler; production uses the environment."""
    settings = settings or config.settings

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        check_required_settings(settings)
        logger.info(f"Displaying forecast times in {settings.display_timezone}")
        yield

    application = FastAPI(title="City Weather", lifespan=lifespan)

    templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
    templates.env.globals["icon_url"] = lambda code: ICON_URL.format(icon=code)
    application.state.templates = templates

    if handler is None:
        geocoder, weather = build_clients(settings)
        handler = WeatherRequestHandler(geocoder, weather, settings)
    application.state.weather_handler = handler

    application.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
    application.include_router(ui_router)
    return application


app = create_app()
