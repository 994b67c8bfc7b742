"""Shopper preference schemas."""

from __future__ import annotations

from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, Field

Category = Literal[
    "Antiques & Collectibles",
    "Tools & Hardware",
    "Electronics",
    "Furniture",
    "Vinyl/Media",
    "Clothing & Apparel",
    "Toys/Kids",
]

CATEGORY_OPTIONS: tuple[str, ...] = get_args(Category)


class PreferenceWeights(BaseModel):
    distance: float = Field(default=0.4, ge=0, le=1)
    time: float = Field(default=0.2, ge=0, le=1)
    quality: float = Field(default=0.3, ge=0, le=1)
    weather: float = Field(default=0.05, ge=0, le=1)
    favorites: float = Field(default=0.05, ge=0, le=1)


class PreferenceConstraints(BaseModel):
    maxStops: Optional[int] = Field(default=None, ge=1)


class TravelPrefs(BaseModel):
    style: Literal["local", "city", "road"] = "local"
    radiusMi: float = Field(default=10, gt=0)


class DisplayPrefs(BaseModel):
    defaultTab: Literal["feed", "map", "route"] = "feed"
    view: Literal["compact", "grid"] = "grid"
    theme: Literal["auto", "light", "dark"] = "auto"


class SocialPrefs(BaseModel):
    showRatings: bool = True
    showFinds: bool = True
    privateMode: bool = False


class AlertPrefs(BaseModel):
    autoFavoriteKeywords: str = Field(default="", description="Comma-separated keywords.")
    push: bool = False
    email: bool = False
    smartThreshold: float = Field(default=0.6, ge=0, le=1)


class Preferences(BaseModel):
    unit: Literal["auto", "km", "mi"] = "auto"
    weights: PreferenceWeights = Field(default_factory=PreferenceWeights)
    constraints: PreferenceConstraints = Field(default_factory=PreferenceConstraints)
    mode: Literal["treasure", "reseller", "bargain", "casual"] = "casual"
    categories: List[Category] = Field(default_factory=list)
    travel: TravelPrefs = Field(default_factory=TravelPrefs)
    timeOfDay: Literal["early", "midday", "flex"] = "flex"
    weatherSensitivity: Literal["fair", "all"] = "all"
    display: DisplayPrefs = Field(default_factory=DisplayPrefs)
    social: SocialPrefs = Field(default_factory=SocialPrefs)
    alerts: AlertPrefs = Field(default_factory=AlertPrefs)
