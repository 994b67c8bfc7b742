"""Per-stop desirability scoring."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Sequence

from ...models.domain import StopMeta, WeightVector

NEUTRAL_SCORE = 0.5
# Sales starting further out than this get no time credit.
TIME_DECAY_HOURS = 4.0


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _unit_or_default(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        return NEUTRAL_SCORE
    return _clamp(value)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def time_score(meta: StopMeta, now: datetime) -> float:
    """Score how well the sale window fits ``now``."""

    if meta.start_time is None and meta.end_time is None:
        return NEUTRAL_SCORE
    now = _as_utc(now)
    if meta.end_time is not None and now > _as_utc(meta.end_time):
        return 0.0
    if meta.start_time is not None and now < _as_utc(meta.start_time):
        hours_ahead = (_as_utc(meta.start_time) - now).total_seconds() / 3600.0
        return _clamp(1.0 - hours_ahead / TIME_DECAY_HOURS)
    return 1.0


class ScoringStrategy(ABC):
    """Contract for per-stop desirability scoring."""

    @abstractmethod
    def score(self, meta: StopMeta, weights: WeightVector, *, now: datetime) -> float:
        raise NotImplementedError


class WeightedSumScorer(ScoringStrategy):
    """Linear blend of time, quality, weather and favorite signals.

    ``weights.distance`` is deliberately absent here: it is applied as a travel
    penalty while the tour is built.
    """

    def score(self, meta: StopMeta, weights: WeightVector, *, now: datetime) -> float:
        favorite = 1.0 if meta.favorite else 0.0
        return (
            time_score(meta, now) * weights.time
            + _unit_or_default(meta.quality_score) * weights.quality
            + _unit_or_default(meta.weather_goodness) * weights.weather
            + favorite * weights.favorites
        )


def compute_sale_scores(
    count: int,
    weights: WeightVector,
    meta: Sequence[Optional[StopMeta]] | None = None,
    *,
    now: datetime | None = None,
    scorer: ScoringStrategy | None = None,
) -> list[float]:
    """Return one score per stop; missing metadata entries score as neutral."""

    scorer = scorer or WeightedSumScorer()
    now = now or datetime.now(timezone.utc)
    meta = meta or ()
    scores: list[float] = []
    for index in range(count):
        entry = meta[index] if index < len(meta) else None
        scores.append(scorer.score(entry or StopMeta(), weights, now=now))
    return scores
