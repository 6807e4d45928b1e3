from unittest import mock

import pytest

from alto_travel.api.services import itinerary_service
from alto_travel.api.services.itinerary_service import ItineraryService


@pytest.fixture
def form():
    return {
        "from_location": "Delhi",
        "to_location": "Udaipur",
        "start_date": "2026-11-02",
        "duration": "3",
        "budget": "25000",
        "traveler_count": "2",
        "themes": ["heritage", "food"],
        "user_comments": "  vegetarian please ",
    }


def test_validate_request_builds_backend_body(form):
    body = ItineraryService.validate_request(form)

    assert body == {
        "location": "Udaipur",
        "duration": 3,
        "budget": 25000.0,
        "themes": ["heritage", "food"],
        "start_date": "2026-11-02",
        "traveler_count": 2,
        "preferred_transport": "driving",
        "from_location": "Delhi",
        "to_location": "Udaipur",
        "user_comments": "vegetarian please",
    }


def test_blank_comments_are_dropped(form):
    form["user_comments"] = "   "
    assert "user_comments" not in ItineraryService.validate_request(form)


@pytest.mark.parametrize("field,value,message", [
    ("from_location", " ", "start point"),
    ("to_location", "", "destination"),
    ("start_date", None, "start date"),
    ("duration", 0, "at least 1 day"),
    ("duration", "three", "Duration must be a number"),
    ("budget", 999, "at least 1000"),
    ("traveler_count", 0, "at least 1 traveler"),
    ("themes", [], "at least one theme"),
    ("themes", ["spa"], "at least one theme"),
])
def test_validate_request_rejects_bad_input(form, field, value, message):
    form[field] = value
    with pytest.raises(ValueError, match=message):
        ItineraryService.validate_request(form)


def test_generate_itinerary_stores_result_in_session(app, form):
    returned = {"location": "Udaipur", "to_location": "Udaipur", "duration": 3, "days": []}

    with app.test_request_context(), \
            mock.patch.object(itinerary_service, "request_itinerary",
                              return_value=returned) as request_itinerary:
        itinerary = ItineraryService.generate_itinerary(form, "http://planner.test")

        request_itinerary.assert_called_once()
        assert request_itinerary.call_args[0][0]["location"] == "Udaipur"
        assert itinerary["shareable_link"].startswith("http://planner.test/shared/trip_")
        assert itinerary["created_at"]
        assert ItineraryService.get_from_session() is itinerary
        assert ItineraryService.get_session_info() == {
            "has_itinerary": True,
            "current_location": "Udaipur",
            "current_days": 3,
        }


def test_invalid_request_never_reaches_backend(app, form):
    form["budget"] = 10
    with app.test_request_context(), \
            mock.patch.object(itinerary_service, "request_itinerary") as request_itinerary:
        with pytest.raises(ValueError):
            ItineraryService.generate_itinerary(form)
        request_itinerary.assert_not_called()
        assert ItineraryService.get_from_session() is None


def test_clear_session(app, itinerary):
    with app.test_request_context():
        ItineraryService.store_in_session(itinerary)
        ItineraryService.clear_session()
        assert ItineraryService.get_session_info()["has_itinerary"] is False
