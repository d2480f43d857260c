"""Factory helpers for building provider clients from settings at startup."""

from __future__ import annotations

from typing import Tuple

from app import config
from app.data_sources.base import Geocoder, WeatherSource
from app.data_sources.geocoding_client import GeocodingClient
from app.data_sources.openweather_client import WeatherClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


def build_clients(settings: config.Settings | None = None) -> Tuple[Geocoder, WeatherSource]:
    """Instantiate the geocoding and weather clients from configuration."""
    settings = settings or config.settings
    geocoder = GeocodingClient(
        settings.geocoding_api_key,
        url=settings.geocoding_url,
        timeout=settings.http_timeout_seconds,
    )
    weather = WeatherClient(
        settings.weather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.http_timeout_seconds,
    )
    logger.info(
        f"Using geocoder {settings.geocoding_url} and weather API {settings.openweather_base_url} "
        f"(timeout {settings.http_timeout_seconds}s)"
    )
    return geocoder, weather
