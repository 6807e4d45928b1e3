# alto_travel/api/services/booking_service.py
"""Service layer for booking selection and (simulated) payment."""

import logging
import time
import uuid
from typing import Dict, Any, List, Optional

from alto_travel.api.config import get_payment_config

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """A payment request was rejected before reaching the gateway."""


class PaymentGateway:
    """Interface for charging a traveller. Real gateways subclass this."""

    def charge(self, amount: float, card: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class SimulatedPaymentGateway(PaymentGateway):
    """Stand-in gateway: waits a fixed delay and always approves.

    No money moves and no card details are checked or stored.
    """

    def __init__(self, delay_seconds: Optional[float] = None, sleep=time.sleep):
        if delay_seconds is None:
            delay_seconds = get_payment_config()["delay_seconds"]
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def charge(self, amount: float, card: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Simulating payment of {amount} ({self.delay_seconds}s delay)")
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
        return {
            "status": "confirmed",
            "confirmation_id": f"sim_{uuid.uuid4().hex[:12]}",
            "amount": amount,
            "simulated": True,
        }


class BookingService:
    """Builds bookable items from an itinerary and totals selections."""

    @staticmethod
    def build_booking_items(itinerary: Dict[str, Any]) -> List[Dict[str, Any]]:
        """List paid activities and transport as selectable booking items.

        Args:
            itinerary: Itinerary as returned by the backend

        Returns:
            Booking items, all selected by default
        """
        items = []
        if not itinerary:
            return items

        for day in itinerary.get('days', []):
            for activity in day.get('activities') or []:
                cost = activity.get('estimated_cost')
                if cost and cost > 0:
                    items.append({
                        "type": "activity",
                        "name": activity.get('name', ''),
                        "cost": cost,
                        "day": day.get('day'),
                        "selected": True,
                        "bookable": activity.get('bookable') is not False,
                    })

        route = itinerary.get('route_details') or {}
        if route.get('estimated_cost'):
            items.append({
                "type": "transport",
                "name": f"{route.get('travel_mode', 'driving')} transportation",
                "cost": route['estimated_cost'],
                "selected": True,
                "bookable": True,
            })

        return items

    @staticmethod
    def apply_selection(items: List[Dict[str, Any]],
                        selected: Optional[List[int]]) -> List[Dict[str, Any]]:
        """Return items with ``selected`` set from a list of chosen indices.

        ``None`` keeps the default selection.

        Raises:
            PaymentError: If ``selected`` is not a list of integer indices
        """
        if selected is None:
            return items
        if not isinstance(selected, list) or any(
            isinstance(i, bool) or not isinstance(i, int) for i in selected
        ):
            raise PaymentError("Invalid selection")
        chosen = set(selected)
        return [dict(item, selected=i in chosen) for i, item in enumerate(items)]

    @staticmethod
    def total_cost(items: List[Dict[str, Any]]) -> float:
        return sum(item["cost"] for item in items if item["selected"] and item["bookable"])

    @staticmethod
    def checkout(items: List[Dict[str, Any]], card: Dict[str, Any],
                 gateway: PaymentGateway) -> Dict[str, Any]:
        """Charge the selected items through a gateway.

        Raises:
            PaymentError: If nothing is selected or no card number is given
        """
        total = BookingService.total_cost(items)
        if total <= 0:
            raise PaymentError("No bookable items selected")
        if not isinstance(card, dict) or not card.get("card_number"):
            raise PaymentError("Card number is required")

        result = gateway.charge(total, card)
        result["items"] = [i for i in items if i["selected"] and i["bookable"]]
        return result


__all__ = ['BookingService', 'PaymentGateway', 'SimulatedPaymentGateway', 'PaymentError']
