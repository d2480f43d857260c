"""Helpers for fetching weather, forecast and air-quality data from OpenWeatherMap."""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

import requests

from app.data_sources.http import DEFAULT_TIMEOUT_SECONDS, get_json
from app.errors import UpstreamError
from app.models import AirQuality, Coordinates, CurrentConditions, ForecastEntry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="openweather_client")

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
PROVIDER = "openweathermap"


class WeatherClient:
    """Current conditions, 3-hourly forecast and air pollution for a coordinate pair."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    def _get(self, endpoint: str, coords: Coordinates) -> Dict[str, Any]:
        params = {
            "lat": coords.latitude,
            "lon": coords.longitude,
            "appid": self.api_key,
            "units": "metric",
        }
        data = get_json(
            f"{self.base_url}/{endpoint}",
            params,
            provider=PROVIDER,
            timeout=self.timeout,
            http=self.session,
        )
        if not isinstance(data, dict):
            raise UpstreamError(PROVIDER, f"/{endpoint} returned {type(data).__name__}, expected an object")
        return data

    def get_current(self, coords: Coordinates) -> CurrentConditions:
        """Fetch the current observation."""
        data = self._get("weather", coords)
        try:
            main = data["main"]
            weather = data["weather"][0]
            return CurrentConditions(
                description=str(weather["description"]),
                temperature_celsius=float(main["temp"]),
                humidity_percent=int(main["humidity"]),
                icon_code=weather.get("icon"),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise UpstreamError(PROVIDER, f"malformed current weather: {exc!r}") from exc

    def get_forecast(self, coords: Coordinates) -> List[ForecastEntry]:
        """Fetch the forecast series in provider order (3-hour steps, ~5 days)."""
        data = self._get("forecast", coords)
        try:
            items = data["list"]
            out: List[ForecastEntry] = []
            for item in items:
                out.append(
                    ForecastEntry(
                        timestamp_utc=dt.datetime.fromtimestamp(int(item["dt"]), tz=dt.timezone.utc),
                        temperature_celsius=float(item["main"]["temp"]),
                        humidity_percent=int(item["main"]["humidity"]),
                        icon_code=str(item["weather"][0]["icon"]),
                    )
                )
        except (KeyError, IndexError, TypeError, ValueError, OverflowError, OSError) as exc:
            raise UpstreamError(PROVIDER, f"malformed forecast: {exc!r}") from exc

        logger.debug(f"Fetched {len(out)} forecast entries")
        return out

    def get_air_quality(self, coords: Coordinates) -> AirQuality:
        """Fetch the current air-pollution reading (first element of the provider list)."""
        data = self._get("air_pollution", coords)
        try:
            first = data["list"][0]
            components = {str(k): float(v) for k, v in (first.get("components") or {}).items()}
            return AirQuality(index=int(first["main"]["aqi"]), components=components)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise UpstreamError(PROVIDER, f"malformed air pollution reading: {exc!r}") from exc
