"""Bounded 2-opt refinement of a visiting order."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import GeoPoint
from ..geospatial import distance_km

DEFAULT_MAX_PASSES = 50


def route_length(order: Sequence[int], points: Sequence[GeoPoint]) -> float:
    """Sum of consecutive great-circle legs in km, without a return leg."""

    return sum(distance_km(points[order[k]], points[order[k + 1]]) for k in range(len(order) - 1))


def two_opt_improve(
    order: Sequence[int],
    points: Sequence[GeoPoint],
    max_passes: int = DEFAULT_MAX_PASSES,
) -> list[int]:
    """Reverse inner segments while that strictly shortens the route.

    Position 0 never moves and the last position is never part of a reversed
    segment. The best tour is updated as soon as an improvement is found, and
    sweeping stops after a pass with no improvement or after ``max_passes``.
    """

    best = list(order)
    best_length = route_length(best, points)
    size = len(best)

    for _ in range(max_passes):
        improved = False
        for i in range(1, size - 2):
            for j in range(i + 1, size - 1):
                candidate = best[:i] + best[i : j + 1][::-1] + best[j + 1 :]
                candidate_length = route_length(candidate, points)
                if candidate_length < best_length:
                    best = candidate
                    best_length = candidate_length
                    improved = True
        if not improved:
            break

    return best
