# alto_travel/api/services/itinerary_service.py
"""Service layer for itinerary generation and management."""

import logging
import time
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from flask import session

from alto_travel.api.backend import generate_itinerary as request_itinerary

logger = logging.getLogger(__name__)

THEMES = (
    "cultural", "adventure", "heritage", "nightlife",
    "food", "nature", "shopping", "sightseeing",
)
MIN_BUDGET = 1000
DEFAULT_TRANSPORT = "driving"


def _to_number(value: Any, cast, field: str):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number")


class ItineraryService:
    """Handles trip requests, backend calls and session management."""

    @staticmethod
    def validate_request(data: Dict[str, Any]) -> Dict[str, Any]:
        """Check planner form input and build the backend request body.

        Args:
            data: Raw form fields from the client

        Returns:
            Request body for the itinerary backend

        Raises:
            ValueError: If a field is missing or out of range
        """
        data = data or {}

        from_location = str(data.get("from_location") or "").strip()
        to_location = str(data.get("to_location") or "").strip()
        start_date = str(data.get("start_date") or "").strip()

        if not from_location:
            raise ValueError("Please enter a start point")
        if not to_location:
            raise ValueError("Please enter a destination")
        if not start_date:
            raise ValueError("Please select a start date")

        duration = _to_number(data.get("duration"), int, "Duration")
        budget = _to_number(data.get("budget"), float, "Budget")
        traveler_count = _to_number(data.get("traveler_count", 1), int, "Traveler count")

        if duration < 1:
            raise ValueError("Duration must be at least 1 day")
        if budget < MIN_BUDGET:
            raise ValueError(f"Budget must be at least {MIN_BUDGET} INR")
        if traveler_count < 1:
            raise ValueError("There must be at least 1 traveler")

        themes = [t for t in (data.get("themes") or []) if t in THEMES]
        if not themes:
            raise ValueError("Please select at least one theme")

        body = {
            "location": to_location,
            "duration": duration,
            "budget": budget,
            "themes": themes,
            "start_date": start_date,
            "traveler_count": traveler_count,
            "preferred_transport": data.get("preferred_transport") or DEFAULT_TRANSPORT,
            "from_location": from_location,
            "to_location": to_location,
        }
        comments = str(data.get("user_comments") or "").strip()
        if comments:
            body["user_comments"] = comments
        return body

    @staticmethod
    def generate_itinerary(data: Dict[str, Any], share_base_url: str = "") -> Dict[str, Any]:
        """Generate a new itinerary through the backend and keep it in session.

        Args:
            data: Raw form fields from the client
            share_base_url: Origin used to build the shareable link

        Returns:
            Itinerary data with ``shareable_link`` and ``created_at`` set

        Raises:
            ValueError: If invalid parameters
            ItineraryBackendError: If the backend call fails
        """
        body = ItineraryService.validate_request(data)

        logger.info(f"Generating itinerary for {body['to_location']}, {body['duration']} days")
        itinerary = request_itinerary(body)

        shareable_id = f"trip_{int(time.time() * 1000)}"
        itinerary["shareable_link"] = f"{share_base_url}/shared/{shareable_id}"
        itinerary["created_at"] = datetime.now(timezone.utc).isoformat()

        ItineraryService.store_in_session(itinerary)
        return itinerary

    @staticmethod
    def store_in_session(itinerary: Dict[str, Any]) -> None:
        """Store itinerary data in Flask session."""
        session['current_itinerary'] = itinerary
        session['current_location'] = itinerary.get('to_location') or itinerary.get('location')
        session['current_days'] = itinerary.get('duration') or len(itinerary.get('days', []))
        session.modified = True
        logger.debug(f"Stored itinerary in session for {session['current_location']}")

    @staticmethod
    def get_from_session() -> Optional[Dict[str, Any]]:
        """Get current itinerary from session.

        Returns:
            Itinerary data or None if not found
        """
        return session.get('current_itinerary')

    @staticmethod
    def get_session_info() -> Dict[str, Any]:
        return {
            'has_itinerary': 'current_itinerary' in session,
            'current_location': session.get('current_location'),
            'current_days': session.get('current_days')
        }

    @staticmethod
    def clear_session() -> None:
        """Clear itinerary data from session."""
        keys_to_remove = ['current_itinerary', 'current_location', 'current_days']
        for key in keys_to_remove:
            session.pop(key, None)
        session.modified = True
        logger.debug("Cleared itinerary from session")


__all__ = ['ItineraryService', 'THEMES']
