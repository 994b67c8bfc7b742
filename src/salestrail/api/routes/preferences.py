"""Preference endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...persistence.store import get_store
from ...schemas.preferences import CATEGORY_OPTIONS, Preferences
from ...services.preferences import load_preferences, reset_preferences, save_preferences

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/categories", status_code=status.HTTP_200_OK)
def categories() -> list[str]:
    return list(CATEGORY_OPTIONS)


@router.get("/{profile_id}", response_model=Preferences, status_code=status.HTTP_200_OK)
def read_preferences(profile_id: str) -> Preferences:
    return load_preferences(get_store(), profile_id)


@router.put("/{profile_id}", response_model=Preferences, status_code=status.HTTP_200_OK)
def write_preferences(profile_id: str, payload: Preferences) -> Preferences:
    return save_preferences(get_store(), profile_id, payload)


@router.delete("/{profile_id}", response_model=Preferences, status_code=status.HTTP_200_OK)
def clear_preferences(profile_id: str) -> Preferences:
    """Drop stored preferences and return the defaults."""
    return reset_preferences(get_store(), profile_id)
