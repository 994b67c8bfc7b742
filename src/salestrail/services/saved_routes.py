"""Saved routes, one store entry per route."""

from __future__ import annotations

import json
import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError as SchemaValidationError

from ..errors import NotFoundError
from ..persistence.store import KeyValueStore
from ..schemas.library import SavedRoute

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _prefix(profile_id: str) -> str:
    # Encoded so "alice" never prefixes the routes of "alice:work".
    return f"routes:{quote(profile_id, safe='')}:"


def _key(profile_id: str, route_id: str) -> str:
    return f"{_prefix(profile_id)}{quote(route_id, safe='')}"


def _base36(value: int) -> str:
    digits = ""
    while True:
        value, remainder = divmod(value, 36)
        digits = _BASE36[remainder] + digits
        if value == 0:
            return digits


def new_route_id() -> str:
    return f"rt_{secrets.token_hex(5)}_{_base36(int(time.time() * 1000))}"


def list_routes(store: KeyValueStore, profile_id: str) -> list[SavedRoute]:
    """Return every saved route, most recently updated first."""

    routes = []
    for key in store.list(_prefix(profile_id)):
        stored = store.get(key)
        if isinstance(stored, dict):
            routes.append(SavedRoute.model_validate(stored))
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(routes, key=lambda route: route.updatedAt or epoch, reverse=True)


def get_route(store: KeyValueStore, profile_id: str, route_id: str) -> SavedRoute:
    stored = store.get(_key(profile_id, route_id))
    if not isinstance(stored, dict):
        raise NotFoundError(f"Route '{route_id}' not found")
    return SavedRoute.model_validate(stored)


def save_route(store: KeyValueStore, profile_id: str, route: SavedRoute) -> SavedRoute:
    now = datetime.now(timezone.utc)
    route_id = route.id or new_route_id()
    created_at = route.createdAt
    if created_at is None:
        existing = store.get(_key(profile_id, route_id))
        if isinstance(existing, dict) and existing.get("createdAt"):
            created_at = SavedRoute.model_validate(existing).createdAt
    saved = route.model_copy(
        update={
            "id": route_id,
            "updatedAt": now,
            "createdAt": created_at or now,
        }
    )
    store.set(_key(profile_id, saved.id), saved.model_dump(mode="json"))
    return saved


def delete_route(store: KeyValueStore, profile_id: str, route_id: str) -> None:
    if not store.delete(_key(profile_id, route_id)):
        raise NotFoundError(f"Route '{route_id}' not found")


def export_routes(store: KeyValueStore, profile_id: str) -> str:
    """Serialize all routes as a JSON object keyed by route id."""

    routes = {route.id: route.model_dump(mode="json") for route in list_routes(store, profile_id)}
    return json.dumps(routes)


def import_routes(store: KeyValueStore, profile_id: str, payload: str | dict[str, Any]) -> list[str]:
    """Merge an exported routes object over the profile's routes.

    Incoming routes replace stored ones with the same id and keep their own
    timestamps. Text that is not a JSON object imports nothing. Returns the
    ids that were written.
    """

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring route import for '{profile_id}': payload is not valid JSON")
            return []
    if not isinstance(payload, dict):
        logger.warning(f"Ignoring route import for '{profile_id}': expected a JSON object")
        return []

    now = datetime.now(timezone.utc)
    imported = []
    for route_id, entry in payload.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping imported route '{route_id}': not an object")
            continue
        try:
            route = SavedRoute.model_validate({**entry, "id": str(route_id)})
        except SchemaValidationError as exc:
            logger.warning(f"Skipping imported route '{route_id}': {exc.error_count()} invalid field(s)")
            continue
        route = route.model_copy(
            update={
                "createdAt": route.createdAt or now,
                "updatedAt": route.updatedAt or route.createdAt or now,
            }
        )
        store.set(_key(profile_id, route.id), route.model_dump(mode="json"))
        imported.append(route.id)

    logger.info(f"Imported {len(imported)} route(s) for profile '{profile_id}'")
    return imported
