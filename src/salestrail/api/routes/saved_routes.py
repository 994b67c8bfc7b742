"""Saved route endpoints."""

from __future__ import annotations

import json
from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from ...errors import NotFoundError
from ...persistence.store import get_store
from ...schemas.library import RouteImportResponse, SavedRoute
from ...services import saved_routes as saved_routes_service

router = APIRouter(prefix="/saved-routes", tags=["saved-routes"])


@router.get("/{profile_id}", response_model=List[SavedRoute], status_code=status.HTTP_200_OK)
def list_routes(profile_id: str) -> List[SavedRoute]:
    return saved_routes_service.list_routes(get_store(), profile_id)


@router.get("/{profile_id}/export", status_code=status.HTTP_200_OK)
def export_routes(profile_id: str) -> dict:
    return json.loads(saved_routes_service.export_routes(get_store(), profile_id))


@router.get("/{profile_id}/{route_id}", response_model=SavedRoute, status_code=status.HTTP_200_OK)
def get_route(profile_id: str, route_id: str) -> SavedRoute:
    try:
        return saved_routes_service.get_route(get_store(), profile_id, route_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/{profile_id}", response_model=SavedRoute, status_code=status.HTTP_201_CREATED)
def save_route(profile_id: str, payload: SavedRoute) -> SavedRoute:
    return saved_routes_service.save_route(get_store(), profile_id, payload)


@router.delete("/{profile_id}/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(profile_id: str, route_id: str) -> None:
    try:
        saved_routes_service.delete_route(get_store(), profile_id, route_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/{profile_id}/import", response_model=RouteImportResponse, status_code=status.HTTP_200_OK)
async def import_routes(profile_id: str, request: Request) -> RouteImportResponse:
    """Merge a previously exported routes object; unreadable bodies import nothing."""
    body = (await request.body()).decode("utf-8", errors="replace")
    imported = saved_routes_service.import_routes(get_store(), profile_id, body)
    return RouteImportResponse(imported=imported)
