"""Resolve free-text city names to coordinates with the OpenCage geocoder."""
from __future__ import annotations

from typing import Optional

import requests

from app.data_sources.http import DEFAULT_TIMEOUT_SECONDS, get_json
from app.errors import CityNotFoundError, UpstreamError
from app.models import Coordinates
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocoding_client")

OPENCAGE_GEOCODE_URL = "https://api.opencagedata.com/geocode/v1/json"
PROVIDER = "opencage"


class GeocodingClient:
    """Thin client over the OpenCage forward-geocoding endpoint."""

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str = OPENCAGE_GEOCODE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session

    def resolve(self, city_name: str) -> Coordinates:
        """Return the coordinates of the first match for `city_name`.

        Raises CityNotFoundError when the provider has no results and
        UpstreamError for transport, status or payload problems.
        """
        data = get_json(
            self.url,
            {"q": city_name, "key": self.api_key},
            provider=PROVIDER,
            timeout=self.timeout,
            http=self.session,
        )

        try:
            results = data["results"]
        except (KeyError, TypeError) as exc:
            raise UpstreamError(PROVIDER, "response has no 'results' list") from exc
        if not isinstance(results, list):
            raise UpstreamError(PROVIDER, "'results' is not a list")
        if not results:
            logger.info(f"No geocoding results for {city_name!r}")
            raise CityNotFoundError(city_name)

        try:
            geometry = results[0]["geometry"]
            coords = Coordinates(latitude=float(geometry["lat"]), longitude=float(geometry["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(PROVIDER, f"malformed first result: {exc!r}") from exc

        logger.debug(f"Resolved {city_name!r} to {coords.latitude:.4f},{coords.longitude:.4f}")
        return coords
