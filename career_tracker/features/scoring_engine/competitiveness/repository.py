"""
Competitive scores per analysed job.
"""

from typing import TYPE_CHECKING

from psycopg.types.json import Jsonb

from career_tracker.db.helpers import execute_returning, fetch_all

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..domain.models import CompetitivenessAssessment


class CompetitivenessRepository:
    @staticmethod
    async def fetch_other_scores(user_id: str, subject_id: str) -> list[int]:
        """Latest competitive score of every other job the user had analysed."""
        rows = await fetch_all(
            """
            SELECT DISTINCT ON (subject_id) competitive_score
            FROM job_competitiveness_scores
            WHERE user_id = %s
              AND subject_id <> %s
            ORDER BY subject_id, computed_at DESC
            """,
            (user_id, subject_id),
        )
        return [row["competitive_score"] for row in rows]

    @staticmethod
    async def insert(
        user_id: str, subject_id: str, assessment: "CompetitivenessAssessment"
    ) -> dict | None:
        composite = assessment.composite
        return await execute_returning(
            """
            INSERT INTO job_competitiveness_scores (
                user_id, subject_id, competitive_score, component_scores,
                score_percentile, interview_likelihood, computed_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                user_id,
                subject_id,
                composite.overall,
                Jsonb({c.name: c.value for c in composite.components}),
                assessment.rank.percentile,
                assessment.interview_likelihood,
                composite.computed_at,
            ),
        )
