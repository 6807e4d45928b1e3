# alto_travel/routes/__init__.py
from alto_travel.routes.travel import create_travel_blueprint

__all__ = ["create_travel_blueprint"]
