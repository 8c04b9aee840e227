"""
Weighted score combiner - folds labeled sub-scores into one 0-100 composite.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from ..domain.errors import InsufficientData, InvalidInput
from ..domain.models import CompositeScore, ScoreInput
from .rounding import round_half_up


class WeightedScoreCombiner:
    """
    Combine sub-scores as ``round(sum(value * weight) / sum(weight))``.

    Absent values (``None``) drop out of both numerator and denominator so the
    remaining weights are renormalised. An explicit 0 is a real signal and is
    kept. Out-of-range values are rejected rather than clamped.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))

    def combine(self, inputs: Iterable[ScoreInput]) -> CompositeScore:
        components = tuple(inputs)
        for component in components:
            self._validate(component)

        present = [c for c in components if c.is_present]
        total_weight = sum(c.weight for c in present)
        if total_weight <= 0:
            raise InsufficientData(
                "No present sub-score carries a positive weight",
                components=[c.name for c in components],
            )

        weighted = sum(c.value * c.weight for c in present)
        overall = round_half_up(weighted / total_weight)
        return CompositeScore(
            overall=min(max(overall, 0), 100),
            components=components,
            computed_at=self._clock(),
        )

    @staticmethod
    def _validate(component: ScoreInput) -> None:
        if not component.name:
            raise InvalidInput("Sub-score name must be non-empty")
        if not math.isfinite(component.weight) or component.weight < 0:
            raise InvalidInput(
                f"Sub-score '{component.name}' has invalid weight {component.weight}",
                component=component.name,
            )
        if component.value is None:
            return
        if not math.isfinite(component.value) or not 0 <= component.value <= 100:
            raise InvalidInput(
                f"Sub-score '{component.name}' value {component.value} is outside [0, 100]",
                component=component.name,
            )


def inputs_from_mapping(
    values: dict[str, float | None], weights: dict[str, float]
) -> list[ScoreInput]:
    """Pair analyzer sub-scores with configured weights; missing keys become absent."""
    return [ScoreInput(name=name, value=values.get(name), weight=weight) for name, weight in weights.items()]


weighted_score_combiner = WeightedScoreCombiner()
