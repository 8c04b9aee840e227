"""
Job competitiveness scoring - how strong a candidate is for one job relative
to the user's other opportunities.
"""

from __future__ import annotations

from career_tracker.db.helpers import DatabaseError
from career_tracker.infrastructure.observability.logging import get_logger

from ..domain.errors import PersistenceFailed
from ..domain.models import CompetitivenessAssessment, Trend
from ..pipeline.combiner import (
    WeightedScoreCombiner,
    inputs_from_mapping,
    weighted_score_combiner,
)
from ..pipeline.percentile import PercentileRanker, percentile_ranker
from .repository import CompetitivenessRepository

logger = get_logger(__name__)

DEFAULT_COMPETITIVENESS_WEIGHTS = {
    "skills": 40.0,
    "experience": 35.0,
    "education": 25.0,
}

HIGH_LIKELIHOOD_AT = 70
MEDIUM_LIKELIHOOD_AT = 40


def interview_likelihood(score: int) -> Trend:
    if score >= HIGH_LIKELIHOOD_AT:
        return "high"
    if score >= MEDIUM_LIKELIHOOD_AT:
        return "medium"
    return "low"


class JobCompetitivenessService:
    def __init__(
        self,
        weights: dict[str, float] | None = None,
        combiner: WeightedScoreCombiner = weighted_score_combiner,
        ranker: PercentileRanker = percentile_ranker,
    ):
        self.weights = dict(weights or DEFAULT_COMPETITIVENESS_WEIGHTS)
        self.combiner = combiner
        self.ranker = ranker

    def assess(
        self, sub_scores: dict[str, float | None], peer_scores: list[float]
    ) -> CompetitivenessAssessment:
        composite = self.combiner.combine(inputs_from_mapping(sub_scores, self.weights))
        return CompetitivenessAssessment(
            composite=composite,
            rank=self.ranker.rank(peer_scores, composite.overall),
            interview_likelihood=interview_likelihood(composite.overall),
        )

    async def score_job(
        self, user_id: str, subject_id: str, sub_scores: dict[str, float | None]
    ) -> CompetitivenessAssessment:
        peer_scores = await CompetitivenessRepository.fetch_other_scores(user_id, subject_id)
        assessment = self.assess(sub_scores, peer_scores)

        try:
            await CompetitivenessRepository.insert(user_id, subject_id, assessment)
        except DatabaseError as e:
            raise PersistenceFailed(
                f"Could not save competitive score: {e}", subject_id=subject_id
            ) from e

        logger.info(
            "Job competitiveness scored",
            user_id=user_id,
            subject_id=subject_id,
            competitive_score=assessment.composite.overall,
            likelihood=assessment.interview_likelihood,
        )
        return assessment


job_competitiveness_service = JobCompetitivenessService()
