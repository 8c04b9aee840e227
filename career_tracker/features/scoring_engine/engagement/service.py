"""
Mentee engagement monitor - trailing-window activity summary for mentors.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from career_tracker.infrastructure.observability.logging import get_logger

from ..domain.constants import DEFAULT_CONSTANTS, ScoringConstants
from ..domain.models import ActivityWindow, EngagementReport
from ..pipeline.engagement import EngagementScorer, build_window
from ..pipeline.rounding import round_half_up
from .repository import ActivityRepository

logger = get_logger(__name__)


class MenteeEngagementService:
    def __init__(
        self,
        constants: ScoringConstants = DEFAULT_CONSTANTS,
        clock: Callable[[], datetime] | None = None,
    ):
        self.constants = constants
        self.scorer = EngagementScorer(constants)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def load_window(self, mentee_id: str) -> ActivityWindow:
        end = self._clock()
        window_days = self.constants.engagement_window_days
        since = end - timedelta(days=window_days)

        events = await ActivityRepository.fetch_events(mentee_id, since)
        goal_progress = await ActivityRepository.fetch_goal_progress(mentee_id)
        return build_window(events, end, window_days, goal_progress)

    def report(self, window: ActivityWindow) -> EngagementReport:
        active_goals = [p for p in window.goal_progress if p < 100]
        avg_goal_progress = (
            round_half_up(sum(active_goals) / len(active_goals)) if active_goals else 0
        )

        last_activity = window.last_activity_at
        if last_activity is None:
            days_since_last = window.window_days
        else:
            days_since_last = max((window.end - last_activity).days, 0)

        return EngagementReport(
            score=self.scorer.score(window),
            jobs_added=window.jobs_added,
            interviews_scheduled=window.interviews_scheduled,
            minutes_tracked=window.minutes_tracked,
            materials_updated=window.materials_updated,
            active_goals=len(active_goals),
            avg_goal_progress=avg_goal_progress,
            days_since_last_activity=days_since_last,
        )

    async def can_view(self, viewer_id: str, mentee_id: str) -> bool:
        if viewer_id == mentee_id:
            return True
        return await ActivityRepository.is_active_mentor(viewer_id, mentee_id)

    async def engagement_for(self, mentee_id: str) -> EngagementReport:
        window = await self.load_window(mentee_id)
        report = self.report(window)
        logger.info(
            "Mentee engagement computed",
            mentee_id=mentee_id,
            engagement=report.score.engagement,
            activity_frequency=report.score.activity_frequency,
            trend=report.score.trend,
        )
        return report


mentee_engagement_service = MenteeEngagementService()
