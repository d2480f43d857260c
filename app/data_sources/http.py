"""Shared HTTP session and JSON fetch helper for provider clients."""
from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from app.errors import UpstreamError
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/http")

DEFAULT_TIMEOUT_SECONDS = 10.0

# Connection pooling only; responses are never cached and calls are never retried.
session = requests.Session()


def _provider_detail(resp: requests.Response) -> str:
    """Best-effort extraction of the provider's own error message."""
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or "").strip()[:200] or resp.reason or "no detail"
    if isinstance(body, dict):
        # OpenWeatherMap: {"cod": 401, "message": "..."}; OpenCage: {"status": {"message": "..."}}
        if body.get("message"):
            return str(body["message"])
        status = body.get("status")
        if isinstance(status, dict) and status.get("message"):
            return str(status["message"])
    return str(body)[:200]


def get_json(
    url: str,
    params: Mapping[str, Any],
    *,
    provider: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    http: Optional[requests.Session] = None,
) -> Any:
    """GET `url` and return the decoded JSON body, raising UpstreamError on any failure."""
    http = http or session
    try:
        resp = http.get(url, params=params, timeout=timeout)
    except requests.Timeout as exc:
        raise UpstreamError(provider, f"timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        # str(exc) can embed the full request URL, secrets included
        raise UpstreamError(provider, f"transport error: {type(exc).__name__}") from exc

    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status_code = getattr(resp, "status_code", None)
        detail = _provider_detail(resp)
        logger.warning(
            f"{provider} returned HTTP {status_code} for {mask_url(getattr(resp, 'url', '') or url)}: {detail}"
        )
        raise UpstreamError(provider, detail, status_code=status_code) from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise UpstreamError(provider, "response body is not valid JSON") from exc
