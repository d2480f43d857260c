"""Domain records and the page view model rendered by the UI."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

CITY_NOT_FOUND_MESSAGE = "City not found. Please enter a valid city."
UPSTREAM_ERROR_MESSAGE = "Error fetching weather data. Please try again later."

# OpenWeatherMap's 1-5 air-quality scale
AQI_LABELS = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair resolved by the geocoder."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CurrentConditions:
    """Current weather observation for a location."""
    description: str
    temperature_celsius: float
    humidity_percent: int
    icon_code: Optional[str] = None


@dataclass(frozen=True)
class AirQuality:
    """Air-quality index plus pollutant concentrations (µg/m³)."""
    index: int
    components: Mapping[str, float] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return AQI_LABELS.get(self.index, "Unknown")


@dataclass(frozen=True)
class ForecastEntry:
    """Single raw forecast point as returned by the provider."""
    timestamp_utc: dt.datetime  # timezone-aware, UTC
    temperature_celsius: float
    humidity_percent: int
    icon_code: str


@dataclass(frozen=True)
class HourlyPoint:
    local_time: str  # "HH:MM", 24-hour
    temperature_celsius: int
    humidity_percent: int
    icon_code: str


@dataclass(frozen=True)
class DailyPoint:
    local_date: str  # "DD/MM/YYYY"
    temperature_celsius: int
    humidity_percent: int
    icon_code: str


class RequestState(str, Enum):
    """Lifecycle of a single weather lookup."""
    IDLE = "idle"
    GEOCODING = "geocoding"
    FETCHING_WEATHER = "fetching_weather"
    RENDERED = "rendered"
    ERROR = "error"


class WeatherPage(BaseModel):
    """Everything the index template needs to render one page."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    city: Optional[str] = None
    weather: Optional[str] = None
    current_temperature: Optional[str] = None
    current_humidity: Optional[str] = None
    hourly_forecast: List[HourlyPoint] = []
    weekly_forecast: List[DailyPoint] = []
    air_quality: Optional[AirQuality] = None
    error: Optional[str] = None
    state: RequestState = RequestState.IDLE

    @classmethod
    def empty(cls) -> "WeatherPage":
        """Initial form with no data."""
        return cls()

    @classmethod
    def failure(cls, message: str, *, city: Optional[str] = None) -> "WeatherPage":
        """Page shell with an error banner and no weather fields."""
        return cls(city=city, error=message, state=RequestState.ERROR)

    def template_context(self) -> dict:
        """Flatten into a Jinja2 context without converting nested dataclasses."""
        return {name: getattr(self, name) for name in type(self).model_fields}
