"""
Engagement scoring over a trailing activity window.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from ..domain.constants import DEFAULT_CONSTANTS, ScoringConstants
from ..domain.models import ActivityEvent, ActivityWindow, EngagementScore, Trend
from .rounding import round_half_up


def build_window(
    events: Iterable[ActivityEvent],
    end: datetime,
    window_days: int,
    goal_progress: Iterable[float] = (),
) -> ActivityWindow:
    """Keep only events inside ``[end - window_days, end]``."""
    start = end - timedelta(days=window_days)
    inside = [event for event in events if start <= event.occurred_at <= end]
    return ActivityWindow(
        start=start,
        end=end,
        window_days=window_days,
        events=inside,
        goal_progress=list(goal_progress),
    )


class EngagementScorer:
    """
    Engagement = 40% activity frequency + three volume bonuses capped at 20
    points each (jobs added, minutes tracked, materials updated). The caps keep
    any single signal from saturating the score on its own.
    """

    def __init__(self, constants: ScoringConstants = DEFAULT_CONSTANTS):
        self.constants = constants

    def activity_frequency(self, window: ActivityWindow) -> int:
        frequency = round_half_up(len(window.active_days) / window.window_days * 100)
        return min(frequency, 100)

    def score(self, window: ActivityWindow) -> EngagementScore:
        c = self.constants
        frequency = self.activity_frequency(window)
        raw = (
            frequency * c.frequency_weight
            + min(window.jobs_added * c.job_points, c.bonus_cap)
            + min(window.minutes_tracked / c.minutes_per_point, c.bonus_cap)
            + min(window.materials_updated * c.material_points, c.bonus_cap)
        )
        engagement = min(round_half_up(raw), 100)
        return EngagementScore(
            engagement=engagement,
            activity_frequency=frequency,
            trend=self.trend(engagement),
        )

    def trend(self, engagement: int) -> Trend:
        if engagement > self.constants.high_trend_above:
            return "high"
        if engagement <= self.constants.low_trend_at_or_below:
            return "low"
        return "medium"


engagement_scorer = EngagementScorer()
