"""Domain models for route planning requests."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Resolved latitude/longitude pair in degrees."""

    lat: float
    lon: float


@dataclass(slots=True)
class StopMeta:
    """Desirability signals attached to a single stop."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    quality_score: Optional[float] = None
    favorite: bool = False
    weather_goodness: Optional[float] = None


@dataclass(slots=True)
class WeightVector:
    distance: float = 0.4
    time: float = 0.2
    quality: float = 0.3
    weather: float = 0.05
    favorites: float = 0.05


@dataclass(slots=True)
class Constraints:
    max_stops: Optional[int] = None


@dataclass(slots=True)
class RouteResult:
    """Visiting order expressed in original input indices plus its summary."""

    order: list[int]
    summary: str
    distance_km: float
    stop_count: int
    unit: str
    strategy: str
    refined: bool
    metadata: dict = field(default_factory=dict)
