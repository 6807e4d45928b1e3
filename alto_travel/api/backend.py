"""Client for the remote itinerary-generation backend.

Itineraries (activities, costs, weather, hotels, routes) are produced by a
separate service; this module only ships the trip request there and hands the
parsed JSON back. One request, one response: no retries, and the only timeout
is the transport timeout from configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from alto_travel.api.config import get_itinerary_backend_config

logger = logging.getLogger(__name__)


class ItineraryBackendError(Exception):
    """The backend could not be reached or did not return an itinerary."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _error_detail(response: requests.Response) -> str:
    """Extract the backend's ``detail`` message, if it sent one."""
    try:
        payload = response.json()
    except ValueError:
        return ""
    if isinstance(payload, dict) and payload.get("detail"):
        return str(payload["detail"])
    return ""


def generate_itinerary(request_body: Dict[str, Any]) -> Dict[str, Any]:
    """POST a trip request to the backend and return the itinerary dict."""
    cfg = get_itinerary_backend_config()

    logger.debug(
        "Requesting itinerary: url=%s location=%s duration=%s",
        cfg["url"],
        request_body.get("location"),
        request_body.get("duration"),
    )

    try:
        response = requests.post(
            cfg["url"],
            json=request_body,
            headers={"Accept": "application/json"},
            timeout=cfg["timeout"],
        )
    except requests.RequestException as exc:
        logger.error("Itinerary backend unreachable: %s", exc)
        raise ItineraryBackendError(f"Itinerary service unavailable: {exc}") from exc

    if not response.ok:
        detail = _error_detail(response)
        message = detail or f"HTTP {response.status_code}: Failed to fetch itinerary"
        logger.error("Itinerary backend error: %s", message)
        raise ItineraryBackendError(message, status_code=response.status_code)

    try:
        itinerary = response.json()
    except ValueError as exc:
        logger.error("Failed to parse backend response: %s", exc)
        raise ItineraryBackendError("Itinerary service returned invalid JSON") from exc

    if not isinstance(itinerary, dict) or "days" not in itinerary:
        raise ItineraryBackendError("Itinerary service returned no days")

    return itinerary


__all__ = ["ItineraryBackendError", "generate_itinerary"]
