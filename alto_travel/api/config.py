# api/config.py
"""Configuration management for the travel planner API."""
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ITINERARY_API_URL = "http://localhost:8000/trip/generate-itinerary"
LEAFLET_IMAGES_URL = "https://cdnjs.cloudflare.com/ajax/libs/leaflet/1.7.1/images"


def get_itinerary_backend_config():
    """Get configuration for the remote itinerary-generation backend."""
    return {
        "url": os.getenv("ITINERARY_API_URL", DEFAULT_ITINERARY_API_URL),
        "timeout": float(os.getenv("ITINERARY_API_TIMEOUT", "60")),
    }


def get_map_widget_config():
    """Get configuration handed to the browser map widget at construction.

    The icon URLs replace the widget's own default-icon lookup, which fails
    once the page is bundled.
    """
    return {
        "tile_url": os.getenv(
            "MAP_TILE_URL", "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
        ),
        "attribution": os.getenv(
            "MAP_TILE_ATTRIBUTION", "&copy; OpenStreetMap contributors"
        ),
        "tile_opacity": float(os.getenv("MAP_TILE_OPACITY", "0.8")),
        "scroll_wheel_zoom": os.getenv("MAP_SCROLL_WHEEL_ZOOM", "true").lower() == "true",
        "default_icon": {
            "icon_retina_url": f"{LEAFLET_IMAGES_URL}/marker-icon-2x.png",
            "icon_url": f"{LEAFLET_IMAGES_URL}/marker-icon.png",
            "shadow_url": f"{LEAFLET_IMAGES_URL}/marker-shadow.png",
        },
    }


def get_payment_config():
    """Get simulated payment configuration."""
    return {
        "delay_seconds": float(os.getenv("PAYMENT_DELAY_SECONDS", "2.0")),
    }


def get_share_base_url():
    """Get the public base URL used in share links (empty means request host)."""
    return os.getenv("SHARE_BASE_URL", "").rstrip("/")


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 3000))
