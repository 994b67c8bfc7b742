"""The stop list a profile is curating before it is saved or optimized."""

from __future__ import annotations

import logging
from urllib.parse import quote

from pydantic import ValidationError as SchemaValidationError

from ..persistence.store import KeyValueStore
from ..schemas.library import RouteStop, WorkingRoute

logger = logging.getLogger(__name__)


def _key(profile_id: str) -> str:
    return f"working-route:{quote(profile_id, safe='')}"


def _in_bounds(route: WorkingRoute) -> WorkingRoute:
    if route.selectedIndex is not None and route.selectedIndex >= len(route.stops):
        return route.model_copy(update={"selectedIndex": None})
    return route


def get_working_route(store: KeyValueStore, profile_id: str) -> WorkingRoute:
    stored = store.get(_key(profile_id))
    if stored is None:
        return WorkingRoute()
    try:
        return _in_bounds(WorkingRoute.model_validate(stored))
    except SchemaValidationError as exc:
        logger.warning(f"Stored working route for '{profile_id}' is invalid, starting empty: {exc}")
        return WorkingRoute()


def set_working_route(store: KeyValueStore, profile_id: str, route: WorkingRoute) -> WorkingRoute:
    route = _in_bounds(route)
    store.set(_key(profile_id), route.model_dump(mode="json"))
    return route


def clear_working_route(store: KeyValueStore, profile_id: str) -> WorkingRoute:
    store.delete(_key(profile_id))
    return WorkingRoute()


def add_stop(store: KeyValueStore, profile_id: str, stop: RouteStop) -> WorkingRoute:
    current = get_working_route(store, profile_id)
    return set_working_route(store, profile_id, current.model_copy(update={"stops": [*current.stops, stop]}))


def remove_stop(store: KeyValueStore, profile_id: str, index: int) -> WorkingRoute:
    """Drop the stop at ``index``; an index outside the list changes nothing."""

    current = get_working_route(store, profile_id)
    if not 0 <= index < len(current.stops):
        return current
    stops = current.stops[:index] + current.stops[index + 1 :]
    return set_working_route(store, profile_id, current.model_copy(update={"stops": stops}))


def move_stop(store: KeyValueStore, profile_id: str, index: int, direction: int) -> WorkingRoute:
    """Swap a stop with its neighbour one step up (-1) or down (+1)."""

    current = get_working_route(store, profile_id)
    target = index + direction
    if not 0 <= index < len(current.stops) or not 0 <= target < len(current.stops):
        return current
    stops = list(current.stops)
    stops[index], stops[target] = stops[target], stops[index]
    return set_working_route(store, profile_id, current.model_copy(update={"stops": stops}))


def select_stop(store: KeyValueStore, profile_id: str, index: int | None) -> WorkingRoute:
    current = get_working_route(store, profile_id)
    return set_working_route(store, profile_id, current.model_copy(update={"selectedIndex": index}))
