"""Route optimization and geocoding endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, status

from ...errors import (
    GeocodeNotFoundError,
    GeocoderNotConfiguredError,
    GeocodingError,
    InternalError,
    ValidationError,
)
from ...schemas.routing import GeocodeResponse, OptimizeRouteRequest, OptimizeRouteResponse
from ...services.geocoding import get_geocoder
from ...services.routing.service import optimize_route

router = APIRouter(tags=["routing"])


@router.post("/optimize-route", response_model=OptimizeRouteResponse, status_code=status.HTTP_200_OK)
async def optimize(
    payload: OptimizeRouteRequest,
    accept_language: Optional[str] = Header(default=None),
) -> OptimizeRouteResponse:
    try:
        return await optimize_route(payload, geocoder=get_geocoder(), locale=accept_language)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except GeocodingError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except InternalError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/geocode", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
async def geocode(
    zip: str = Query(default="", description="Postal code to resolve."),
    q: str = Query(default="", description="Free-form address to resolve."),
) -> GeocodeResponse:
    address = zip.strip() or q.strip()
    if not address:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing zip or q")

    try:
        match = await get_geocoder().lookup(address)
    except GeocoderNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail=str(exc)) from exc
    except GeocodeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No geocode result") from exc
    except GeocodingError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return GeocodeResponse(lat=match.point.lat, lon=match.point.lon, raw={"label": match.label})
