import os

import pytest

os.environ.setdefault("FLASK_SECRET_KEY", "test-secret")


@pytest.fixture
def itinerary():
    """Three-day trip; day 2 has no coordinates, day 3 uses nested locations."""
    return {
        "location": "Jaipur",
        "to_location": "Udaipur",
        "from_location": "Delhi",
        "duration": 3,
        "budget": 25000,
        "start_date": "2026-11-02",
        "traveler_count": 2,
        "total_estimated_cost": 18250.5,
        "days": [
            {
                "day": 1,
                "activities": [
                    {"name": "City Palace", "description": "Royal palace",
                     "latitude": 24.5764, "longitude": 73.6835,
                     "estimated_cost": 300, "duration_hours": 2, "category": "heritage"},
                    {"name": "Lake Pichola", "description": "Boat ride",
                     "latitude": 24.5720, "longitude": 73.6790,
                     "cost": 700, "category": "Sightseeing"},
                    {"name": "Broken pin", "description": "",
                     "latitude": 124.0, "longitude": 73.0},
                ],
            },
            {
                "day": 2,
                "activities": [
                    {"name": "Street food walk", "description": "",
                     "category": "food", "estimated_cost": 0},
                ],
            },
            {
                "day": 3,
                "activities": [
                    {"name": "Sajjangarh", "description": "Monsoon palace",
                     "location": {"lat": 24.5922, "lng": 73.6400}, "category": "nature"},
                    {"name": "Bagore Ki Haveli", "description": "Dance show",
                     "location": {"lat": 24.5799, "lng": 73.6819}, "category": "cultural",
                     "estimated_cost": 150},
                ],
            },
        ],
        "route_details": {"travel_mode": "driving", "estimated_cost": 4000},
    }


@pytest.fixture
def app():
    from alto_travel.api.services.booking_service import SimulatedPaymentGateway
    from main import create_app

    app = create_app(payment_gateway=SimulatedPaymentGateway(delay_seconds=0))
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
