# alto_travel/api/services/share_service.py
"""Share links and plain-text export for itineraries."""

import base64
import binascii
import json
import logging
from typing import Dict, Any
from urllib.parse import quote

logger = logging.getLogger(__name__)


def _amount(value: Any) -> str:
    """Thousands-separated amount, dropping a trailing ``.0``."""
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


class ShareService:
    """Builds share payloads/URLs and text exports."""

    @staticmethod
    def destination(itinerary: Dict[str, Any]) -> str:
        return itinerary.get('to_location') or itinerary.get('location') or ""

    @staticmethod
    def build_share_payload(itinerary: Dict[str, Any]) -> Dict[str, Any]:
        """Summary of a trip small enough to live in a URL."""
        return {
            "destination": ShareService.destination(itinerary),
            "from": itinerary.get('from_location'),
            "duration": itinerary.get('duration'),
            "startDate": itinerary.get('start_date'),
            "totalCost": itinerary.get('total_estimated_cost'),
        }

    @staticmethod
    def encode_share_data(payload: Dict[str, Any]) -> str:
        raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")

    @staticmethod
    def decode_share_data(encoded: str) -> Dict[str, Any]:
        """Inverse of :meth:`encode_share_data`.

        Raises:
            ValueError: If the data is not base64-encoded JSON object
        """
        try:
            raw = base64.b64decode(encoded or "", validate=True)
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid share data: {e}") from e
        if not isinstance(payload, dict):
            raise ValueError("Invalid share data: not an object")
        return payload

    @staticmethod
    def build_share_url(base_url: str, itinerary: Dict[str, Any]) -> str:
        encoded = ShareService.encode_share_data(ShareService.build_share_payload(itinerary))
        return f"{base_url}/share?data={quote(encoded, safe='')}"

    @staticmethod
    def build_social_links(share_url: str, itinerary: Dict[str, Any]) -> Dict[str, str]:
        """Twitter, Facebook and WhatsApp share intents for a share URL."""
        tweet = (f"Check out my {itinerary.get('duration')}-day trip to "
                 f"{ShareService.destination(itinerary)}!")
        return {
            "twitter": (f"https://twitter.com/intent/tweet?text={quote(tweet, safe='')}"
                        f"&url={quote(share_url, safe='')}"),
            "facebook": f"https://www.facebook.com/sharer/sharer.php?u={quote(share_url, safe='')}",
            "whatsapp": ("https://wa.me/?text="
                         + quote(f"Check out my trip plan: {share_url}", safe='')),
        }

    @staticmethod
    def export_text(itinerary: Dict[str, Any]) -> str:
        """Render an itinerary as a plain-text document.

        Args:
            itinerary: Itinerary as returned by the backend

        Returns:
            Text with a trip header followed by each day's weather and
            numbered activities
        """
        if not itinerary:
            return ""

        lines = [
            "TRAVEL ITINERARY",
            "================",
            "",
            f"Destination: {ShareService.destination(itinerary)}",
            f"From: {itinerary.get('from_location', '')}",
            f"Duration: {itinerary.get('duration', len(itinerary.get('days', [])))} days",
            f"Start Date: {itinerary.get('start_date', '')}",
            f"Travelers: {itinerary.get('traveler_count', 1)}",
            f"Budget: ₹{_amount(itinerary.get('budget'))}",
            f"Estimated Cost: ₹{_amount(itinerary.get('total_estimated_cost'))}",
            "",
        ]

        if itinerary.get('user_comments'):
            lines += [f"Preferences: {itinerary['user_comments']}", ""]

        for day in itinerary.get('days', []):
            lines += [f"DAY {day.get('day')}", "-------"]

            weather = day.get('weather')
            if weather:
                lines += [
                    f"Weather: {weather.get('condition')}, "
                    f"{weather.get('min_temp_c')}°C - {weather.get('max_temp_c')}°C",
                    "",
                ]

            for index, activity in enumerate(day.get('activities') or [], 1):
                cost = activity.get('estimated_cost')
                lines.append(f"{index}. {activity.get('name', '')}")
                lines.append(f"   {activity.get('description', '')}")
                if activity.get('duration_hours') is not None:
                    lines.append(f"   Duration: {activity['duration_hours']}h")
                lines.append(f"   Cost: {'Free' if cost is None else '₹' + _amount(cost)}")
                if activity.get('best_time'):
                    lines.append(f"   Best Time: {activity['best_time']}")
                lines.append("")
            lines.append("")

        logger.debug(f"Exported itinerary for {ShareService.destination(itinerary)}")
        return "\n".join(lines)


__all__ = ['ShareService']
