# alto_travel/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
import math
from typing import Dict, Any, Iterable, List, Optional, Tuple

from alto_travel.api.fallback_coordinates import (
    get_coordinates_for_place,
    resolve_location_name,
)
from alto_travel.api.models import CategoryStyle, GeoPoint, MapView, Viewport

logger = logging.getLogger(__name__)

SINGLE_POINT_ZOOM = 14
FALLBACK_ZOOM = 11

# (span upper bound, zoom), checked in order; anything wider gets WIDEST_ZOOM.
ZOOM_LADDER: Tuple[Tuple[float, int], ...] = (
    (0.01, 15),
    (0.05, 13),
    (0.1, 12),
    (0.5, 10),
    (1, 9),
)
WIDEST_ZOOM = 8

LEGEND_MAX_ENTRIES = 6

CATEGORY_STYLES: Dict[str, CategoryStyle] = {
    "sightseeing": CategoryStyle("#4f46e5", "🏛️"),
    "food": CategoryStyle("#f97316", "🍽️"),
    "adventure": CategoryStyle("#059669", "🏔️"),
    "cultural": CategoryStyle("#7c3aed", "🎭"),
    "shopping": CategoryStyle("#ec4899", "🛍️"),
    "nature": CategoryStyle("#16a34a", "🌿"),
    "nightlife": CategoryStyle("#f59e0b", "🌙"),
    "heritage": CategoryStyle("#9333ea", "🏰"),
    "relaxation": CategoryStyle("#0ea5e9", "🧘"),
}
DEFAULT_STYLE = CategoryStyle("#6b7280", "📍")

# Marker sizing for focal vs dimmed days
ACTIVE_MARKER = {"size": 32, "opacity": 1.0}
INACTIVE_MARKER = {"size": 24, "opacity": 0.6}


class MapService:
    """Derives map state (points, viewport, markers, legend) from itineraries."""

    @staticmethod
    def validate_coordinates(lat: Any, lng: Any) -> bool:
        """Validate that coordinates are real, finite and within valid ranges.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            True if valid, False otherwise
        """
        for value in (lat, lng):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
            if not math.isfinite(value):
                return False
        return -90 <= lat <= 90 and -180 <= lng <= 180

    @staticmethod
    def extract_coordinates(activity: Dict[str, Any]) -> Optional[Tuple[Any, Any]]:
        """Pull a raw (lat, lng) pair out of an activity.

        Flat ``latitude``/``longitude`` win; a nested ``location: {lat, lng}``
        is used only when the flat pair is absent. Values are not validated.
        """
        lat = activity.get("latitude")
        lng = activity.get("longitude")
        if lat is not None and lng is not None:
            return lat, lng

        location = activity.get("location")
        if isinstance(location, dict):
            lat = location.get("lat")
            lng = location.get("lng")
            if lat is not None and lng is not None:
                return lat, lng
        return None

    @staticmethod
    def normalize_cost(activity: Dict[str, Any]) -> float:
        """Return ``estimated_cost``, else ``cost``, else 0."""
        for key in ("estimated_cost", "cost"):
            value = activity.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
        return 0

    @staticmethod
    def select_days(days: Iterable[Dict[str, Any]],
                    active_day: Optional[int] = None,
                    show_all_days: bool = False) -> List[Dict[str, Any]]:
        """Pick the days to plot. An unknown day number selects nothing."""
        if not isinstance(days, (list, tuple)):
            return []
        records = [day for day in days if isinstance(day, dict)]
        if len(records) != len(days):
            logger.debug(f"Skipping {len(days) - len(records)} malformed day records")
        days = records
        if show_all_days or active_day is None:
            return days
        return [day for day in days if day.get("day") == active_day]

    @staticmethod
    def filter_points(days: Iterable[Dict[str, Any]],
                      active_day: Optional[int] = None,
                      show_all_days: bool = False,
                      focus_day: Optional[int] = None) -> List[GeoPoint]:
        """Turn raw day/activity records into numbered, validated points.

        Args:
            days: Itinerary days, each ``{"day": int, "activities": [...]}``
            active_day: Day to show; None shows every day
            show_all_days: Show every day regardless of ``active_day``
            focus_day: Day drawn at full strength; defaults to ``active_day``

        Returns:
            Points in traversal order with stop numbers 1..n
        """
        focus = focus_day if focus_day is not None else active_day
        points: List[GeoPoint] = []
        skipped = 0

        for day in MapService.select_days(days, active_day, show_all_days):
            day_number = day.get("day")
            activities = day.get("activities")
            for activity in activities if isinstance(activities, list) else []:
                if not isinstance(activity, dict):
                    skipped += 1
                    logger.debug(f"Skipping malformed activity on day {day_number}: {activity!r}")
                    continue
                coords = MapService.extract_coordinates(activity)
                if coords is None or not MapService.validate_coordinates(*coords):
                    skipped += 1
                    logger.debug(
                        f"Skipping '{activity.get('name', '')}' on day {day_number}: "
                        f"no usable coordinates ({coords})"
                    )
                    continue

                lat, lng = coords
                points.append(GeoPoint(
                    latitude=float(lat),
                    longitude=float(lng),
                    day=day_number,
                    stop_number=len(points) + 1,
                    is_active_day=focus is None or day_number == focus,
                    name=activity.get("name", ""),
                    description=activity.get("description", ""),
                    category=activity.get("category"),
                    cost=MapService.normalize_cost(activity),
                    duration_hours=activity.get("duration_hours"),
                ))

        if skipped:
            logger.info(f"Plotted {len(points)} stops, skipped {skipped} without coordinates")
        return points

    @staticmethod
    def calculate_bounds(points: List[GeoPoint]) -> Dict[str, float]:
        """Calculate bounding box for a set of points.

        Args:
            points: Validated points

        Returns:
            Dictionary with north, south, east, west bounds, or {} when empty
        """
        if not points:
            return {}

        lats = [p.latitude for p in points]
        lngs = [p.longitude for p in points]

        return {
            'north': max(lats),
            'south': min(lats),
            'east': max(lngs),
            'west': min(lngs)
        }

    @staticmethod
    def zoom_for_span(span: float) -> int:
        for threshold, zoom in ZOOM_LADDER:
            if span < threshold:
                return zoom
        return WIDEST_ZOOM

    @staticmethod
    def calculate_viewport(points: List[GeoPoint]) -> Optional[Viewport]:
        """Frame a set of points.

        A single point is centred at close zoom. Several points are centred on
        the midpoint of their bounding box (not the average) and the zoom is
        picked from the larger of the two spans. Longitudes are compared
        as-is, so a trip straddling the antimeridian gets a world-wide box.

        Returns:
            Viewport, or None for an empty point set
        """
        if not points:
            return None

        if len(points) == 1:
            point = points[0]
            return Viewport(point.latitude, point.longitude, SINGLE_POINT_ZOOM)

        bounds = MapService.calculate_bounds(points)
        center_lat = (bounds['north'] + bounds['south']) / 2
        center_lng = (bounds['east'] + bounds['west']) / 2
        span = max(bounds['north'] - bounds['south'], bounds['east'] - bounds['west'])

        return Viewport(center_lat, center_lng, MapService.zoom_for_span(span))

    @staticmethod
    def fallback_viewport(location_name: str) -> Viewport:
        """Viewport for a trip with no plottable stops, from its place name."""
        lat, lng = get_coordinates_for_place((location_name or "").strip().lower())
        return Viewport(lat, lng, FALLBACK_ZOOM)

    @staticmethod
    def resolve_viewport(points: List[GeoPoint], location_name: str = "") -> Viewport:
        viewport = MapService.calculate_viewport(points)
        if viewport is None:
            logger.info(f"No coordinates to frame, falling back to '{location_name}'")
            return MapService.fallback_viewport(location_name)
        return viewport

    @staticmethod
    def category_style(category: Optional[str]) -> CategoryStyle:
        """Colour and symbol for a category (case-insensitive)."""
        if not isinstance(category, str):
            return DEFAULT_STYLE
        return CATEGORY_STYLES.get(category.strip().lower(), DEFAULT_STYLE)

    @staticmethod
    def format_cost(amount: Optional[float]) -> str:
        """Format an activity cost for display, e.g. ``₹1,500`` or ``Free``."""
        if not amount:
            return "Free"
        if float(amount).is_integer():
            amount = int(amount)
        return f"₹{amount:,}"

    @staticmethod
    def build_markers(points: List[GeoPoint]) -> List[Dict[str, Any]]:
        """Attach presentation metadata to each point."""
        markers = []
        for point in points:
            style = MapService.category_style(point.category)
            sizing = ACTIVE_MARKER if point.is_active_day else INACTIVE_MARKER
            markers.append({
                "position": {"lat": point.latitude, "lng": point.longitude},
                "stop_number": point.stop_number,
                "day": point.day,
                "color": style.color,
                "symbol": style.symbol,
                "is_active": point.is_active_day,
                "size": sizing["size"],
                "opacity": sizing["opacity"],
                "name": point.name,
                "description": point.description,
                "category": point.category,
                "cost": point.cost,
                "cost_label": MapService.format_cost(point.cost),
                "duration_hours": point.duration_hours,
            })
        return markers

    @staticmethod
    def build_legend(points: List[GeoPoint]) -> List[Dict[str, str]]:
        """Distinct categories of the focal points, first-seen order, capped.

        Categories beyond the cap are left out of the legend only; their
        markers are unaffected.
        """
        legend = []
        seen = set()
        for point in points:
            if not point.is_active_day or not isinstance(point.category, str):
                continue
            category = point.category.strip().lower()
            if not category or category in seen:
                continue
            seen.add(category)
            legend.append({
                "category": category,
                "color": MapService.category_style(category).color,
            })
            if len(legend) == LEGEND_MAX_ENTRIES:
                break
        return legend

    @staticmethod
    def build_map_view(itinerary: Dict[str, Any],
                       active_day: Optional[int] = None,
                       show_all_days: bool = False,
                       focus_day: Optional[int] = None) -> MapView:
        """Derive the complete map state for one render of an itinerary.

        Args:
            itinerary: Itinerary as returned by the backend
            active_day: Day to show; None shows every day
            show_all_days: Show every day regardless of ``active_day``
            focus_day: Day drawn at full strength; defaults to ``active_day``

        Returns:
            MapView with viewport, markers and legend
        """
        itinerary = itinerary or {}
        location = resolve_location_name(itinerary)
        points = MapService.filter_points(
            itinerary.get('days', []), active_day, show_all_days, focus_day
        )

        return MapView(
            location=location,
            viewport=MapService.resolve_viewport(points, location),
            points=points,
            markers=MapService.build_markers(points),
            legend=MapService.build_legend(points),
        )


def resolve_map_view(itinerary: Dict[str, Any],
                     active_day: Optional[int] = None,
                     show_all_days: bool = False,
                     focus_day: Optional[int] = None) -> MapView:
    return MapService.build_map_view(itinerary, active_day, show_all_days, focus_day)


# Export for use in other modules
__all__ = ['MapService', 'resolve_map_view']
