"""Exceptions raised while resolving a city and fetching its weather."""

from __future__ import annotations

from typing import Optional


class WeatherAppError(Exception):
    """Base class for errors the request handler knows how to render."""


class CityNotFoundError(WeatherAppError):
    """The geocoding provider returned no results for the requested city."""

    def __init__(self, city: str) -> None:
        super().__init__(f"No geocoding results for {city!r}")
        self.city = city


class UpstreamError(WeatherAppError):
    """A provider call failed: transport error, non-2xx status or malformed payload."""

    def __init__(self, provider: str, detail: str, *, status_code: Optional[int] = None) -> None:
        message = f"{provider}: {detail}"
        if status_code is not None:
            message = f"{provider} (HTTP {status_code}): {detail}"
        super().__init__(message)
        self.provider = provider
        self.detail = detail
        self.status_code = status_code
