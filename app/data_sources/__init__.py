"""Provider clients for geocoding and weather data."""

from .base import Geocoder, WeatherSource
from .factory import build_clients
from .geocoding_client import GeocodingClient
from .openweather_client import WeatherClient

__all__ = [
    "build_clients",
    "Geocoder",
    "WeatherSource",
    "GeocodingClient",
    "WeatherClient",
]
