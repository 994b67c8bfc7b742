"""Per-profile shopper preferences backed by the key-value store."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from ..persistence.store import KeyValueStore
from ..schemas.preferences import Preferences

logger = logging.getLogger(__name__)

NESTED_SECTIONS = ("weights", "constraints", "travel", "display", "social", "alerts")


def _key(profile_id: str) -> str:
    return f"preferences:{profile_id}"


def merge_with_defaults(stored: dict) -> Preferences:
    """Overlay stored values on the defaults, one level deep for nested sections."""

    merged = Preferences().model_dump()
    for name, value in stored.items():
        if name in NESTED_SECTIONS and isinstance(value, dict):
            merged[name] = {**merged[name], **value}
        elif name in merged:
            merged[name] = value
    return Preferences.model_validate(merged)


def load_preferences(store: KeyValueStore, profile_id: str) -> Preferences:
    stored = store.get(_key(profile_id))
    if not isinstance(stored, dict):
        return Preferences()
    try:
        return merge_with_defaults(stored)
    except PydanticValidationError as exc:
        logger.warning(f"Stored preferences for '{profile_id}' are invalid, using defaults: {exc}")
        return Preferences()


def save_preferences(store: KeyValueStore, profile_id: str, preferences: Preferences) -> Preferences:
    store.set(_key(profile_id), preferences.model_dump(mode="json"))
    return preferences


def reset_preferences(store: KeyValueStore, profile_id: str) -> Preferences:
    store.delete(_key(profile_id))
    return Preferences()
