"""Route optimization orchestration service."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from ...config import settings
from ...errors import GeocodingError, InternalError, SalesTrailError, ValidationError
from ...models.domain import Constraints, GeoPoint, RouteResult, StopMeta, WeightVector
from ...schemas.routing import (
    OptimizeRouteRequest,
    OptimizeRouteResponse,
    StopMetaModel,
)
from ..geocoding import Geocoder, get_geocoder
from .construction import greedy_order, preselect_stops
from .scoring import ScoringStrategy, compute_sale_scores
from .two_opt import two_opt_improve
from .units import BoundingBoxUnitSelector, UnitSelector, format_summary, summarize

logger = logging.getLogger(__name__)

MIN_STOPS = 2


def _build_weights(payload: OptimizeRouteRequest) -> WeightVector:
    overrides = payload.weights
    return WeightVector(
        distance=overrides.distance
        if overrides and overrides.distance is not None
        else settings.weight_distance,
        time=overrides.time
        if overrides and overrides.time is not None
        else settings.weight_time,
        quality=overrides.quality
        if overrides and overrides.quality is not None
        else settings.weight_quality,
        weather=overrides.weather
        if overrides and overrides.weather is not None
        else settings.weight_weather,
        favorites=overrides.favorites
        if overrides and overrides.favorites is not None
        else settings.weight_favorites,
    )


def _build_constraints(payload: OptimizeRouteRequest) -> Constraints:
    return Constraints(max_stops=payload.constraints.maxStops if payload.constraints else None)


def _to_stop_meta(model: StopMetaModel | None) -> StopMeta | None:
    if model is None:
        return None
    return StopMeta(
        start_time=model.startTime,
        end_time=model.endTime,
        quality_score=model.qualityScore,
        favorite=bool(model.favorite),
        weather_goodness=model.weatherGoodness,
    )


def _validate_stops(stops: Sequence[str]) -> list[str]:
    cleaned = [str(stop).strip() for stop in stops]
    if len(cleaned) < MIN_STOPS:
        raise ValidationError("Need at least two stops")
    if any(not stop for stop in cleaned):
        raise ValidationError("Stop addresses must not be blank")
    return cleaned


async def geocode_stops(
    stops: Sequence[str],
    geocoder: Geocoder,
    *,
    max_concurrency: int | None = None,
) -> list[GeoPoint]:
    """Resolve every stop concurrently, keeping input order.

    The first failure cancels the remaining lookups and is re-raised once
    every task has settled.
    """

    semaphore = asyncio.Semaphore(max_concurrency or settings.geocode_max_concurrency)

    async def _resolve(address: str) -> GeoPoint:
        async with semaphore:
            return await geocoder.geocode(address)

    tasks = [asyncio.ensure_future(_resolve(address)) for address in stops]
    try:
        return list(await asyncio.gather(*tasks))
    except GeocodingError as exc:
        logger.warning(f"Geocoding failed for '{exc.address}': {exc}")
        raise
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


def build_route(
    points: Sequence[GeoPoint],
    *,
    origin: Optional[GeoPoint] = None,
    strategy: str = "distance",
    unit: str = "auto",
    weights: WeightVector | None = None,
    constraints: Constraints | None = None,
    stop_meta: Sequence[Optional[StopMeta]] | None = None,
    locale: Optional[str] = None,
    now: datetime | None = None,
    scorer: ScoringStrategy | None = None,
    unit_selector: UnitSelector | None = None,
    max_passes: int | None = None,
) -> RouteResult:
    """Order already geocoded stops and describe the resulting tour."""

    weights = weights or WeightVector()
    constraints = constraints or Constraints()
    unit_selector = unit_selector or BoundingBoxUnitSelector()
    max_passes = settings.two_opt_max_passes if max_passes is None else max_passes

    scores = compute_sale_scores(len(points), weights, stop_meta, now=now, scorer=scorer)
    kept = preselect_stops(scores, constraints.max_stops)
    selected_points = [points[index] for index in kept]
    selected_scores = [scores[index] for index in kept]

    order = greedy_order(selected_points, origin, selected_scores, weights.distance)
    refined = strategy != "quality"
    if refined:
        order = two_opt_improve(order, selected_points, max_passes=max_passes)

    distance_km, stop_count = summarize(order, selected_points)
    display_unit = unit_selector.choose(unit, origin=origin, locale=locale)
    summary = format_summary(distance_km, stop_count, display_unit, strategy)

    return RouteResult(
        order=[kept[index] for index in order],
        summary=summary,
        distance_km=distance_km,
        stop_count=stop_count,
        unit=display_unit,
        strategy=strategy,
        refined=refined,
        metadata={"considered": len(points), "dropped": len(points) - len(kept)},
    )


async def optimize_route(
    payload: OptimizeRouteRequest,
    *,
    geocoder: Geocoder | None = None,
    locale: Optional[str] = None,
    now: datetime | None = None,
    scorer: ScoringStrategy | None = None,
    unit_selector: UnitSelector | None = None,
) -> OptimizeRouteResponse:
    """Geocode, order and summarize the requested stops.

    Raises ``ValidationError`` before any lookup, ``GeocodingError`` when a
    stop cannot be resolved and ``InternalError`` for anything else.
    """

    stops = _validate_stops(payload.stops)
    geocoder = geocoder or get_geocoder()

    try:
        points = await geocode_stops(stops, geocoder)

        origin = GeoPoint(lat=payload.origin.lat, lon=payload.origin.lon) if payload.origin else None
        stop_meta = [_to_stop_meta(entry) for entry in payload.stopMeta] if payload.stopMeta else None

        result = build_route(
            points,
            origin=origin,
            strategy=payload.strategy,
            unit=payload.unit,
            weights=_build_weights(payload),
            constraints=_build_constraints(payload),
            stop_meta=stop_meta,
            locale=locale,
            now=now,
            scorer=scorer,
            unit_selector=unit_selector,
        )
    except SalesTrailError:
        raise
    except Exception as exc:
        logger.exception(f"Error optimizing route with {len(stops)} stops: {exc}")
        raise InternalError("Internal error") from exc
    logger.info(
        f"Optimized route: {result.stop_count}/{len(stops)} stops, "
        f"{result.distance_km:.1f} km, strategy={result.strategy}, refined={result.refined}"
    )

    return OptimizeRouteResponse(
        order=result.order,
        summary=result.summary,
        metadata={
            **result.metadata,
            "distance_km": result.distance_km,
            "stop_count": result.stop_count,
            "unit": result.unit,
            "strategy": result.strategy,
            "refined": result.refined,
        },
    )
