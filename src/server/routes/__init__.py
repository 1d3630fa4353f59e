"""Route registration helpers."""

from .coach import register_coach_routes
from .health import register_health_routes
from .tracker import register_tracker_routes
from .user import register_user_routes

__all__ = [
    "register_coach_routes",
    "register_health_routes",
    "register_tracker_routes",
    "register_user_routes",
]
