"""Orchestrate geocoding, weather lookups and reshaping into a renderable page."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from app.config import Settings
from app.data_sources.base import Geocoder, WeatherSource
from app.errors import CityNotFoundError, UpstreamError
from app.forecast_shaper import to_daily, to_hourly
from app.models import (
    CITY_NOT_FOUND_MESSAGE,
    UPSTREAM_ERROR_MESSAGE,
    RequestState,
    WeatherPage,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/weather_service")


def format_number(value: float) -> str:
    """Render 15.0 as "15" and 15.3 as "15.3"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class WeatherRequestHandler:
    """Turn a city name into a WeatherPage.

    Each call is independent: nothing is cached or shared between requests
    apart from the immutable settings and the provider clients.
    """

    def __init__(self, geocoder: Geocoder, weather: WeatherSource, settings: Settings) -> None:
        self.geocoder = geocoder
        self.weather = weather
        self.settings = settings

    def _transition(self, city: str, old: RequestState, new: RequestState) -> RequestState:
        logger.debug(f"[{city}] {old.value} -> {new.value}")
        return new

    def handle(self, city_name: Optional[str]) -> WeatherPage:
        """Resolve `city_name`, fetch its weather and build the page.

        Failures never raise: they come back as a WeatherPage carrying one of
        the two user-facing error messages.
        """
        city = (city_name or "").strip()
        state = RequestState.IDLE
        if not city:
            logger.info("Empty city submitted")
            return WeatherPage.failure(CITY_NOT_FOUND_MESSAGE, city=city)

        try:
            state = self._transition(city, state, RequestState.GEOCODING)
            coords = self.geocoder.resolve(city)

            state = self._transition(city, state, RequestState.FETCHING_WEATHER)
            # The three lookups are independent; run them side by side and join.
            with ThreadPoolExecutor(max_workers=3) as executor:
                current_future = executor.submit(self.weather.get_current, coords)
                forecast_future = executor.submit(self.weather.get_forecast, coords)
                air_future = executor.submit(self.weather.get_air_quality, coords)
                current = current_future.result()
                forecast = forecast_future.result()
                air_quality = air_future.result()
        except CityNotFoundError:
            self._transition(city, state, RequestState.ERROR)
            logger.info(f"City not found: {city!r}")
            return WeatherPage.failure(CITY_NOT_FOUND_MESSAGE, city=city)
        except UpstreamError as exc:
            self._transition(city, state, RequestState.ERROR)
            logger.error(f"Weather API error for {city!r}: {exc}")
            return WeatherPage.failure(UPSTREAM_ERROR_MESSAGE, city=city)
        except Exception:
            self._transition(city, state, RequestState.ERROR)
            logger.exception(f"Unexpected error while fetching weather for {city!r}")
            return WeatherPage.failure(UPSTREAM_ERROR_MESSAGE, city=city)

        tz = self.settings.tz
        page = WeatherPage(
            city=city,
            weather=f"Weather in {city}: {current.description}",
            current_temperature=f"{format_number(current.temperature_celsius)}°C",
            current_humidity=f"{current.humidity_percent}%",
            hourly_forecast=to_hourly(forecast, tz, limit=self.settings.hourly_points),
            weekly_forecast=to_daily(forecast, tz, limit=self.settings.daily_points),
            air_quality=air_quality,
            state=self._transition(city, state, RequestState.RENDERED),
        )
        logger.info(
            f"Rendered weather for {city!r}: {len(page.hourly_forecast)} hourly, "
            f"{len(page.weekly_forecast)} daily points"
        )
        return page
