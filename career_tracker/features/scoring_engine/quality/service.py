"""
Application quality scoring - combines analyzer sub-scores for one
application, ranks the result against the user's history and records it.
"""

from __future__ import annotations

from career_tracker.db.helpers import DatabaseError
from career_tracker.infrastructure.observability.logging import get_logger

from ..domain.constants import DEFAULT_CONSTANTS, ScoringConstants
from ..domain.errors import PersistenceFailed
from ..domain.models import QualityAssessment
from ..pipeline.combiner import (
    WeightedScoreCombiner,
    inputs_from_mapping,
    weighted_score_combiner,
)
from ..pipeline.percentile import PercentileRanker, percentile_ranker
from .repository import QualityScoreRepository

logger = get_logger(__name__)

DEFAULT_QUALITY_WEIGHTS = {
    "resume": 30.0,
    "cover_letter": 20.0,
    "keyword_match": 25.0,
    "formatting": 15.0,
    "linkedin": 10.0,
}


class ApplicationQualityService:
    def __init__(
        self,
        weights: dict[str, float] | None = None,
        combiner: WeightedScoreCombiner = weighted_score_combiner,
        ranker: PercentileRanker = percentile_ranker,
        constants: ScoringConstants = DEFAULT_CONSTANTS,
    ):
        self.weights = dict(weights or DEFAULT_QUALITY_WEIGHTS)
        self.combiner = combiner
        self.ranker = ranker
        self.constants = constants

    def assess(
        self,
        sub_scores: dict[str, float | None],
        history: list[float],
        previous_overall: int | None = None,
    ) -> QualityAssessment:
        """Pure part of scoring: combine, rank and compare against the threshold."""
        composite = self.combiner.combine(inputs_from_mapping(sub_scores, self.weights))
        threshold = self.constants.quality_threshold

        if previous_overall is None:
            change_note = "Initial analysis"
        elif previous_overall == composite.overall:
            change_note = f"Score unchanged at {composite.overall}"
        else:
            change_note = f"Score changed from {previous_overall} to {composite.overall}"

        return QualityAssessment(
            composite=composite,
            rank=self.ranker.rank(history, composite.overall),
            meets_threshold=composite.overall >= threshold,
            threshold=threshold,
            change_note=change_note,
        )

    async def score_application(
        self, user_id: str, subject_id: str, sub_scores: dict[str, float | None]
    ) -> QualityAssessment:
        """
        Score an application and append it to the user's history.

        Args:
            user_id: Owner of the application
            subject_id: Tracked job the application belongs to
            sub_scores: Analyzer output keyed by component name; None marks an
                absent component

        Raises:
            InvalidInput / InsufficientData: from the combiner
            PersistenceFailed: the history insert failed
        """
        history = await QualityScoreRepository.fetch_user_scores(user_id)
        previous = await QualityScoreRepository.fetch_latest(user_id, subject_id)
        previous_overall = previous["overall_score"] if previous else None

        assessment = self.assess(sub_scores, history, previous_overall)

        try:
            await QualityScoreRepository.insert(user_id, subject_id, assessment)
        except DatabaseError as e:
            logger.error(
                "Failed to record quality score",
                user_id=user_id,
                subject_id=subject_id,
                error=str(e),
            )
            raise PersistenceFailed(
                f"Could not save quality score: {e}", subject_id=subject_id
            ) from e

        logger.info(
            "Application quality scored",
            user_id=user_id,
            subject_id=subject_id,
            overall=assessment.composite.overall,
            percentile=assessment.rank.percentile,
            meets_threshold=assessment.meets_threshold,
        )
        return assessment

    async def history(self, user_id: str, subject_id: str) -> list[dict]:
        """Every recorded analysis for one application, oldest first."""
        return await QualityScoreRepository.fetch_subject_history(user_id, subject_id)


application_quality_service = ApplicationQualityService()
