"""
Named tunables for the scoring engine.

Components receive a ScoringConstants instance instead of reading module
globals so call sites and tests can swap values independently.
"""

from __future__ import annotations

from dataclasses import dataclass

from career_tracker.config import Settings, settings

TERMINAL_STATUSES = frozenset({"offer", "rejected", "withdrawn", "accepted"})


@dataclass(frozen=True, slots=True)
class ScoringConstants:
    # Application quality
    quality_threshold: int = 70

    # Response-time prediction
    follow_up_grace_days: int = 3
    default_benchmark_avg_days: float = 10.0
    benchmark_confidence: int = 80
    default_confidence: int = 60

    # Seasonality
    holiday_months: frozenset[int] = frozenset({6, 7, 10, 11})
    holiday_factor: float = 1.30
    fiscal_boundary_months: frozenset[int] = frozenset({2, 8})
    fiscal_boundary_factor: float = 1.15
    weekend_factor: float = 1.10

    # Engagement
    engagement_window_days: int = 30
    frequency_weight: float = 0.40
    job_points: float = 5.0
    minutes_per_point: float = 60.0
    material_points: float = 10.0
    bonus_cap: float = 20.0
    high_trend_above: int = 60
    low_trend_at_or_below: int = 30

    @classmethod
    def from_settings(cls, settings: Settings) -> ScoringConstants:
        return cls(
            quality_threshold=settings.QUALITY_THRESHOLD,
            follow_up_grace_days=settings.FOLLOW_UP_GRACE_DAYS,
            default_benchmark_avg_days=settings.DEFAULT_BENCHMARK_AVG_DAYS,
            benchmark_confidence=settings.BENCHMARK_CONFIDENCE,
            default_confidence=settings.DEFAULT_CONFIDENCE,
            engagement_window_days=settings.ENGAGEMENT_WINDOW_DAYS,
        )


# Service singletons pick up environment overrides through this instance.
DEFAULT_CONSTANTS = ScoringConstants.from_settings(settings)
