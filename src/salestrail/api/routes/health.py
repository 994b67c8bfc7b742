"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/geocoder", status_code=status.HTTP_200_OK)
def health_geocoder() -> dict:
    """Report whether a geocoding provider key is configured (no network call)."""
    return {"service": "geocoder", "configured": bool(settings.google_maps_api_key)}
