"""
Pure scoring pipeline: combination, ranking, seasonality and engagement math.

Nothing in this package performs I/O.
"""

from .combiner import WeightedScoreCombiner, inputs_from_mapping, weighted_score_combiner
from .engagement import EngagementScorer, build_window, engagement_scorer
from .percentile import PercentileRanker, percentile_ranker
from .rounding import round_half_up
from .seasonal import SeasonalAdjuster, seasonal_adjuster

__all__ = [
    "EngagementScorer",
    "PercentileRanker",
    "SeasonalAdjuster",
    "WeightedScoreCombiner",
    "build_window",
    "engagement_scorer",
    "inputs_from_mapping",
    "percentile_ranker",
    "round_half_up",
    "seasonal_adjuster",
    "weighted_score_combiner",
]
