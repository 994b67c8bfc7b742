"""Route scoring, construction and refinement."""

from .construction import greedy_order, preselect_stops
from .scoring import ScoringStrategy, WeightedSumScorer, compute_sale_scores
from .service import build_route, geocode_stops, optimize_route
from .two_opt import route_length, two_opt_improve
from .units import BoundingBoxUnitSelector, UnitSelector

__all__ = [
    "BoundingBoxUnitSelector",
    "ScoringStrategy",
    "UnitSelector",
    "WeightedSumScorer",
    "build_route",
    "compute_sale_scores",
    "geocode_stops",
    "greedy_order",
    "optimize_route",
    "preselect_stops",
    "route_length",
    "two_opt_improve",
]
