"""
Percentile ranking of a score against a population of past scores.
"""

from collections.abc import Sequence

from ..domain.models import PercentileRank
from .rounding import round_half_up


class PercentileRanker:
    """
    ``percentile = round(count(s < value) / len(population) * 100)``.

    Ties do not count in the candidate's favour. An empty population yields
    all-None fields instead of raising, since the rank is an enrichment.
    """

    def rank(self, population: Sequence[float], value: float) -> PercentileRank:
        if not population:
            return PercentileRank(percentile=None, mean=None, max=None)

        below = sum(1 for score in population if score < value)
        return PercentileRank(
            percentile=round_half_up(below / len(population) * 100),
            mean=sum(population) / len(population),
            max=max(population),
        )


percentile_ranker = PercentileRanker()
