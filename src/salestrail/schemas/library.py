"""Favorites, saved-route and working-route schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class FavoriteMeta(BaseModel):
    title: str
    url: str
    description: Optional[str] = None
    pubDate: Optional[str] = None


class FavoriteItem(FavoriteMeta):
    id: str
    savedAt: Optional[datetime] = None


class FavoriteToggleResponse(BaseModel):
    id: str
    favorite: bool


class FavoriteCountResponse(BaseModel):
    count: int


class RouteStop(BaseModel):
    label: str
    query: str
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    color: Optional[str] = None


class SavedRoute(BaseModel):
    id: Optional[str] = Field(default=None, description="Generated when omitted.")
    name: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    stops: List[RouteStop] = Field(default_factory=list)
    notes: Optional[str] = None
    color: Optional[str] = None
    tags: Optional[List[str]] = None


class RouteImportResponse(BaseModel):
    imported: List[str] = Field(default_factory=list, description="Route ids written by the import.")


class WorkingRoute(BaseModel):
    stops: List[RouteStop] = Field(default_factory=list)
    selectedIndex: Optional[int] = Field(default=None, ge=0)


class MoveStopRequest(BaseModel):
    direction: Literal[-1, 1]


class SelectStopRequest(BaseModel):
    index: Optional[int] = Field(default=None, ge=0)
