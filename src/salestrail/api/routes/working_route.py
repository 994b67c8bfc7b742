"""Working route endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...persistence.store import get_store
from ...schemas.library import MoveStopRequest, RouteStop, SelectStopRequest, WorkingRoute
from ...services import working_route as working_route_service

router = APIRouter(prefix="/working-route", tags=["working-route"])


@router.get("/{profile_id}", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def read_working_route(profile_id: str) -> WorkingRoute:
    return working_route_service.get_working_route(get_store(), profile_id)


@router.put("/{profile_id}", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def replace_working_route(profile_id: str, payload: WorkingRoute) -> WorkingRoute:
    return working_route_service.set_working_route(get_store(), profile_id, payload)


@router.delete("/{profile_id}", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def clear_working_route(profile_id: str) -> WorkingRoute:
    return working_route_service.clear_working_route(get_store(), profile_id)


@router.post("/{profile_id}/stops", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def add_stop(profile_id: str, payload: RouteStop) -> WorkingRoute:
    return working_route_service.add_stop(get_store(), profile_id, payload)


@router.delete("/{profile_id}/stops/{index}", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def remove_stop(profile_id: str, index: int) -> WorkingRoute:
    return working_route_service.remove_stop(get_store(), profile_id, index)


@router.post("/{profile_id}/stops/{index}/move", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def move_stop(profile_id: str, index: int, payload: MoveStopRequest) -> WorkingRoute:
    return working_route_service.move_stop(get_store(), profile_id, index, payload.direction)


@router.put("/{profile_id}/selected", response_model=WorkingRoute, status_code=status.HTTP_200_OK)
def select_stop(profile_id: str, payload: SelectStopRequest) -> WorkingRoute:
    return working_route_service.select_stop(get_store(), profile_id, payload.index)
