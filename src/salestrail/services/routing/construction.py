"""Stop pre-selection and greedy tour construction."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ...models.domain import GeoPoint
from ..geospatial import distance_km

# Travel penalty is expressed per this many kilometres.
PENALTY_DISTANCE_KM = 10.0


def preselect_stops(scores: Sequence[float], max_stops: Optional[int]) -> list[int]:
    """Return original indices of the stops kept under ``max_stops``.

    Ranking is by descending score with ties kept in input order. Without an
    effective cap the identity mapping is returned.
    """

    indices = list(range(len(scores)))
    if not max_stops or max_stops <= 0 or max_stops >= len(indices):
        return indices
    ranked = sorted(indices, key=lambda index: -scores[index])
    return ranked[:max_stops]


def _pick_start(points: Sequence[GeoPoint], origin: Optional[GeoPoint], sale_scores: Sequence[float]) -> int:
    best = 0
    if origin is not None:
        best_distance = math.inf
        for index, point in enumerate(points):
            d = distance_km(origin, point)
            if d < best_distance:
                best_distance = d
                best = index
        return best

    best_score = -math.inf
    for index, score in enumerate(sale_scores):
        if score > best_score:
            best_score = score
            best = index
    return best


def greedy_order(
    points: Sequence[GeoPoint],
    origin: Optional[GeoPoint],
    sale_scores: Sequence[float],
    distance_weight: float,
) -> list[int]:
    """Build a tour by repeatedly taking the best-value unvisited stop.

    value = score - distance_weight * (km / 10)
    """

    if not points:
        return []

    current = _pick_start(points, origin, sale_scores)
    order = [current]
    remaining = [index for index in range(len(points)) if index != current]

    while remaining:
        best = remaining[0]
        best_value = -math.inf
        for candidate in remaining:
            value = sale_scores[candidate] - distance_weight * (
                distance_km(points[current], points[candidate]) / PENALTY_DISTANCE_KM
            )
            if value > best_value:
                best_value = value
                best = candidate
        current = best
        order.append(current)
        remaining.remove(current)

    return order
