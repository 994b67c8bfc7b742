"""Route optimization request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Strategy = Literal["distance", "balanced", "quality"]
UnitPref = Literal["auto", "km", "mi"]


class OriginModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class WeightsModel(BaseModel):
    distance: Optional[float] = Field(default=None, ge=0)
    time: Optional[float] = Field(default=None, ge=0)
    quality: Optional[float] = Field(default=None, ge=0)
    weather: Optional[float] = Field(default=None, ge=0)
    favorites: Optional[float] = Field(default=None, ge=0)


class ConstraintsModel(BaseModel):
    maxStops: Optional[int] = Field(
        default=None,
        description="Keep only this many top-scoring stops. Zero or negative disables the cap.",
    )


class StopMetaModel(BaseModel):
    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None
    qualityScore: Optional[float] = None
    favorite: Optional[bool] = None
    weatherGoodness: Optional[float] = None


class OptimizeRouteRequest(BaseModel):
    stops: List[str] = Field(default_factory=list, description="Addresses to visit; at least two are required.")
    origin: Optional[OriginModel] = None
    strategy: Strategy = "distance"
    unit: UnitPref = "auto"
    weights: Optional[WeightsModel] = None
    constraints: Optional[ConstraintsModel] = None
    stopMeta: Optional[List[Optional[StopMetaModel]]] = None


class OptimizeRouteResponse(BaseModel):
    order: List[int]
    summary: str
    metadata: dict = Field(default_factory=dict)


class GeocodeResponse(BaseModel):
    lat: float
    lon: float
    raw: dict


class ErrorResponse(BaseModel):
    error: str
