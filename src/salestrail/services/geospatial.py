"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, box

from ..models.domain import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_km(a.lat, a.lon, b.lat, b.lon)


def km_to_miles(km: float) -> float:
    return km * KM_TO_MILES


def point_in_bounds(
    lat: float,
    lon: float,
    *,
    min_lat: float,
    max_lat: float,
    min_lon: float,
    max_lon: float,
) -> bool:
    """Return True if the point lies inside or on the edge of the lat/lon box."""

    bounds = box(min_lon, min_lat, max_lon, max_lat)
    return bounds.covers(Point(lon, lat))
