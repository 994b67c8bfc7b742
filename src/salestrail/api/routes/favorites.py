"""Favorite sale endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, HTTPException, status

from ...errors import NotFoundError
from ...persistence.store import get_store
from ...schemas.library import (
    FavoriteCountResponse,
    FavoriteItem,
    FavoriteMeta,
    FavoriteToggleResponse,
)
from ...services import favorites as favorites_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/{profile_id}", response_model=List[FavoriteItem], status_code=status.HTTP_200_OK)
def list_favorites(profile_id: str) -> List[FavoriteItem]:
    return favorites_service.list_favorite_details(get_store(), profile_id)


@router.get("/{profile_id}/count", response_model=FavoriteCountResponse, status_code=status.HTTP_200_OK)
def count_favorites(profile_id: str) -> FavoriteCountResponse:
    return FavoriteCountResponse(count=favorites_service.count_favorites(get_store(), profile_id))


@router.post(
    "/{profile_id}/{sale_id:path}/toggle",
    response_model=FavoriteToggleResponse,
    status_code=status.HTTP_200_OK,
)
def toggle_favorite(
    profile_id: str,
    sale_id: str,
    meta: Optional[FavoriteMeta] = Body(default=None),
) -> FavoriteToggleResponse:
    state = favorites_service.toggle_favorite(get_store(), profile_id, sale_id, meta)
    return FavoriteToggleResponse(id=sale_id, favorite=state)


@router.delete("/{profile_id}/{sale_id:path}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(profile_id: str, sale_id: str) -> None:
    try:
        favorites_service.remove_favorite(get_store(), profile_id, sale_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_favorites(profile_id: str) -> None:
    favorites_service.clear_favorites(get_store(), profile_id)
