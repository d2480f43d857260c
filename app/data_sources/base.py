"""Interfaces the request handler depends on, so providers can be swapped in tests."""

from __future__ import annotations

from typing import List, Protocol

from app.models import AirQuality, Coordinates, CurrentConditions, ForecastEntry


class Geocoder(Protocol):
    """Anything that can turn a city name into coordinates."""

    def resolve(self, city_name: str) -> Coordinates:
        """Return coordinates or raise CityNotFoundError / UpstreamError."""
        ...


class WeatherSource(Protocol):
    """Anything that can provide current, forecast and air-quality data."""

    def get_current(self, coords: Coordinates) -> CurrentConditions:
        """Return the current observation."""
        ...

    def get_forecast(self, coords: Coordinates) -> List[ForecastEntry]:
        """Return forecast entries in chronological order."""
        ...

    def get_air_quality(self, coords: Coordinates) -> AirQuality:
        """Return the current air-quality reading."""
        ...
