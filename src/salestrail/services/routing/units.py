"""Display unit selection and route summary formatting."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal, Optional, Sequence

from ...models.domain import GeoPoint
from ..geospatial import km_to_miles, point_in_bounds
from .two_opt import route_length

UnitPreference = Literal["auto", "km", "mi"]
DisplayUnit = Literal["km", "mi"]

# Continental US only; Alaska and Hawaii fall outside.
US_BOUNDS = {"min_lat": 24.0, "max_lat": 49.0, "min_lon": -125.0, "max_lon": -66.0}
US_LOCALE_TAG = "en-US"


class UnitSelector(ABC):
    """Decides whether a summary is shown in kilometres or miles."""

    @abstractmethod
    def choose(
        self,
        preference: UnitPreference,
        *,
        origin: Optional[GeoPoint] = None,
        locale: Optional[str] = None,
    ) -> DisplayUnit:
        raise NotImplementedError


class BoundingBoxUnitSelector(UnitSelector):
    """Explicit preferences win; ``auto`` sniffs the origin and the locale."""

    def choose(
        self,
        preference: UnitPreference,
        *,
        origin: Optional[GeoPoint] = None,
        locale: Optional[str] = None,
    ) -> DisplayUnit:
        if preference == "mi":
            return "mi"
        if preference == "km":
            return "km"
        if origin is not None and point_in_bounds(origin.lat, origin.lon, **US_BOUNDS):
            return "mi"
        if locale and US_LOCALE_TAG in locale:
            return "mi"
        return "km"


def summarize(order: Sequence[int], points: Sequence[GeoPoint]) -> tuple[float, int]:
    """Return ``(distance_km, stop_count)`` for a tour."""

    return route_length(order, points), len(order)


def format_distance(distance_km: float, unit: DisplayUnit) -> str:
    value = km_to_miles(distance_km) if unit == "mi" else distance_km
    return f"{value:.1f} {unit}"


def format_summary(distance_km: float, stop_count: int, unit: DisplayUnit, strategy: str) -> str:
    return f"{stop_count} stops (strategy: {strategy}), ~{format_distance(distance_km, unit)}"
