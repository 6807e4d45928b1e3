# alto_travel/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging

from flask import Blueprint, Response, jsonify, request
from werkzeug.utils import secure_filename

from alto_travel.api.backend import ItineraryBackendError
from alto_travel.api.config import get_map_widget_config, get_share_base_url
from alto_travel.api.services.booking_service import (
    BookingService,
    PaymentError,
    SimulatedPaymentGateway,
)
from alto_travel.api.services.itinerary_service import ItineraryService
from alto_travel.api.services.map_service import resolve_map_view
from alto_travel.api.services.share_service import ShareService

logger = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes", "on")


def _optional_int(value, name):
    if value is None or value == "":
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer")


def _flag(value):
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUE_VALUES


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _share_base_url():
    return get_share_base_url() or request.host_url.rstrip("/")


def _no_itinerary():
    return jsonify({"error": "No itinerary in session"}), 404


def create_travel_blueprint(payment_gateway=None):
    """Create and configure the travel blueprint.

    Args:
        payment_gateway: Gateway used by the booking endpoint; defaults to
            the simulated gateway

    Returns:
        Configured Flask Blueprint
    """
    gateway = payment_gateway or SimulatedPaymentGateway()

    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")

    @travel_bp.route("/api/config")
    def api_config():
        """Return map widget configuration for frontend."""
        return jsonify(get_map_widget_config())

    @travel_bp.route("/api/itinerary", methods=["GET", "POST", "DELETE"])
    def api_itinerary():
        """Generate, retrieve or clear the current itinerary."""
        if request.method == "POST":
            data = _json_body()
            try:
                itinerary = ItineraryService.generate_itinerary(data, _share_base_url())
                return jsonify(itinerary)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            except ItineraryBackendError as e:
                logger.warning(f"Itinerary request failed: {e}")
                return jsonify({"error": str(e)}), 502

        if request.method == "DELETE":
            ItineraryService.clear_session()
            return jsonify({"status": "cleared"})

        itinerary = ItineraryService.get_from_session()
        if not itinerary:
            return _no_itinerary()
        return jsonify(itinerary)

    @travel_bp.route("/api/map", methods=["GET", "POST"])
    def api_map():
        """Viewport, markers and legend for the session or posted itinerary."""
        if request.method == "POST":
            data = _json_body()
            itinerary = data.get("itinerary")
            options = data
            if not isinstance(itinerary, dict):
                return jsonify({"error": "Request body must contain an itinerary object"}), 400
        else:
            itinerary = ItineraryService.get_from_session()
            options = request.args
            if not itinerary:
                return _no_itinerary()

        try:
            active_day = _optional_int(options.get("day"), "day")
            focus_day = _optional_int(options.get("focus_day"), "focus_day")
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        view = resolve_map_view(
            itinerary,
            active_day=active_day,
            show_all_days=_flag(options.get("all_days")),
            focus_day=focus_day,
        )
        return jsonify(view.to_dict())

    @travel_bp.route("/api/booking/items")
    def api_booking_items():
        itinerary = ItineraryService.get_from_session()
        if not itinerary:
            return _no_itinerary()
        items = BookingService.build_booking_items(itinerary)
        return jsonify({"items": items, "total": BookingService.total_cost(items)})

    @travel_bp.route("/api/booking/pay", methods=["POST"])
    def api_booking_pay():
        """Charge the selected booking items through the payment gateway."""
        itinerary = ItineraryService.get_from_session()
        if not itinerary:
            return _no_itinerary()

        data = _json_body()
        try:
            items = BookingService.apply_selection(
                BookingService.build_booking_items(itinerary), data.get("selected")
            )
            result = BookingService.checkout(items, data.get("card") or {}, gateway)
        except PaymentError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(result)

    @travel_bp.route("/api/share")
    def api_share():
        itinerary = ItineraryService.get_from_session()
        if not itinerary:
            return _no_itinerary()
        url = ShareService.build_share_url(_share_base_url(), itinerary)
        return jsonify({
            "url": url,
            "social": ShareService.build_social_links(url, itinerary),
            "payload": ShareService.build_share_payload(itinerary),
        })

    @travel_bp.route("/api/share/decode")
    def api_share_decode():
        try:
            return jsonify(ShareService.decode_share_data(request.args.get("data", "")))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

    @travel_bp.route("/api/export")
    def api_export():
        """Download the current itinerary as plain text."""
        itinerary = ItineraryService.get_from_session()
        if not itinerary:
            return _no_itinerary()

        filename = secure_filename(f"itinerary-{ShareService.destination(itinerary)}.txt")
        return Response(
            ShareService.export_text(itinerary),
            mimetype="text/plain",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"'
            },
        )

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ['create_travel_blueprint']
