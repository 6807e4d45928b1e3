"""Shared data structures for map rendering.

Everything here is derived fresh from an itinerary on each request and is
never persisted, so the point and viewport types are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """A validated activity location with its position in the stop sequence."""

    latitude: float
    longitude: float
    day: int  # 1‑based day index within the trip
    stop_number: int  # running counter across all included days
    is_active_day: bool = True
    name: str = ""
    description: str = ""
    category: Optional[str] = None
    cost: float = 0.0
    duration_hours: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "day": self.day,
            "stop_number": self.stop_number,
            "is_active_day": self.is_active_day,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "cost": self.cost,
            "duration_hours": self.duration_hours,
        }


@dataclass(frozen=True)
class Viewport:
    """Map center and zoom level."""

    lat: float
    lng: float
    zoom: int

    def to_dict(self) -> dict:
        return {"center": {"lat": self.lat, "lng": self.lng}, "zoom": self.zoom}


@dataclass(frozen=True)
class CategoryStyle:
    color: str
    symbol: str


@dataclass
class MapView:
    """Everything the map widget needs for one render."""

    location: str
    viewport: Viewport
    points: list[GeoPoint] = field(default_factory=list)
    markers: list[dict] = field(default_factory=list)
    legend: list[dict] = field(default_factory=list)

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def active_point_count(self) -> int:
        return sum(1 for p in self.points if p.is_active_day)

    @property
    def has_coordinates(self) -> bool:
        return bool(self.points)

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "viewport": self.viewport.to_dict(),
            "markers": self.markers,
            "legend": self.legend,
            "point_count": self.point_count,
            "active_point_count": self.active_point_count,
            "has_coordinates": self.has_coordinates,
        }
