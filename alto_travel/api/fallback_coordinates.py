# alto_travel/api/fallback_coordinates.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

# Declared order matters: the partial-match scan returns the first hit.
FALLBACK_COORDINATES: Dict[str, Tuple[float, float]] = {
    "jaipur": (26.9124, 75.7873),
    "bangalore": (12.9716, 77.5946),
    "mumbai": (19.0760, 72.8777),
    "delhi": (28.7041, 77.1025),
    "goa": (15.2993, 74.1240),
    "kerala": (10.8505, 76.2711),
    "paris": (48.8566, 2.3522),
    "london": (51.5074, -0.1278),
    "tokyo": (35.6762, 139.6503),
    "new york": (40.7128, -74.0060),
    "chennai": (13.0827, 80.2707),
    "hyderabad": (17.3850, 78.4867),
    "pune": (18.5204, 73.8567),
    "kolkata": (22.5726, 88.3639),
    "ahmedabad": (23.0225, 72.5714),
    "surat": (21.1702, 72.8311),
    "rajasthan": (27.0238, 74.2179),
    "udaipur": (24.5854, 73.7125),
    "jodhpur": (26.2389, 73.0243),
    "agra": (27.1767, 78.0081),
    "varanasi": (25.3176, 82.9739),
    "amritsar": (31.6340, 74.8723),
    "cochin": (9.9312, 76.2673),
    "mysore": (12.2958, 76.6394),
    "ooty": (11.4064, 76.6932),
}

DEFAULT_CITY = "jaipur"

# Itinerary fields holding the trip's place name, most specific first.
LOCATION_FIELDS = ("destination", "to_location", "location")


def resolve_location_name(itinerary: Dict[str, Any]) -> str:
    """Return the first non-empty place name on the itinerary, or ""."""
    if not itinerary:
        return ""
    for key in LOCATION_FIELDS:
        value = itinerary.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


@lru_cache(maxsize=1000)
def get_coordinates_for_place(place: str) -> Tuple[float, float]:
    """Resolve a free-text place name against the static table.

    Tries an exact match, then the first key (in declared order) that is a
    substring of the name or contains it, then the default city. Never fails.
    """
    key = (place or "").strip().lower()

    if key in FALLBACK_COORDINATES:
        return FALLBACK_COORDINATES[key]

    if key:
        for name, coords in FALLBACK_COORDINATES.items():
            if name in key or key in name:
                logger.debug(f"Partial match '{key}' -> '{name}'")
                return coords

    logger.warning(f"No fallback coordinates for '{place}', using {DEFAULT_CITY}")
    return FALLBACK_COORDINATES[DEFAULT_CITY]


__all__ = [
    "FALLBACK_COORDINATES",
    "DEFAULT_CITY",
    "resolve_location_name",
    "get_coordinates_for_place",
]
