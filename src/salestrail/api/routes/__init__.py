"""Route group exports."""

from . import favorites, health, preferences, routing, saved_routes, working_route

__all__ = ["routing", "health", "preferences", "favorites", "saved_routes", "working_route"]
