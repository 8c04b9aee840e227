"""
Append-only history of application quality composites.
"""

from typing import TYPE_CHECKING

from psycopg.types.json import Jsonb

from career_tracker.db.helpers import execute_returning, fetch_all, fetch_one
from career_tracker.infrastructure.observability.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..domain.models import QualityAssessment


logger = get_logger(__name__)


class QualityScoreRepository:
    """Rows are inserted once per analysis and never updated."""

    @staticmethod
    async def fetch_user_scores(user_id: str) -> list[int]:
        rows = await fetch_all(
            """
            SELECT overall_score
            FROM application_quality_scores
            WHERE user_id = %s
            ORDER BY computed_at ASC
            """,
            (user_id,),
        )
        return [row["overall_score"] for row in rows]

    @staticmethod
    async def fetch_latest(user_id: str, subject_id: str) -> dict | None:
        return await fetch_one(
            """
            SELECT *
            FROM application_quality_scores
            WHERE user_id = %s
              AND subject_id = %s
            ORDER BY computed_at DESC
            LIMIT 1
            """,
            (user_id, subject_id),
        )

    @staticmethod
    async def fetch_subject_history(user_id: str, subject_id: str) -> list[dict]:
        return await fetch_all(
            """
            SELECT overall_score, score_percentile, meets_threshold, change_note, computed_at
            FROM application_quality_scores
            WHERE user_id = %s
              AND subject_id = %s
            ORDER BY computed_at ASC
            """,
            (user_id, subject_id),
        )

    @staticmethod
    async def insert(
        user_id: str, subject_id: str, assessment: "QualityAssessment"
    ) -> dict | None:
        composite = assessment.composite
        components = {
            component.name: {"value": component.value, "weight": component.weight}
            for component in composite.components
        }
        row = await execute_returning(
            """
            INSERT INTO application_quality_scores (
                user_id, subject_id, overall_score, component_scores,
                user_average_score, top_score, score_percentile,
                meets_threshold, threshold_value, change_note, computed_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                user_id,
                subject_id,
                composite.overall,
                Jsonb(components),
                assessment.rank.mean,
                assessment.rank.max,
                assessment.rank.percentile,
                assessment.meets_threshold,
                assessment.threshold,
                assessment.change_note,
                composite.computed_at,
            ),
        )
        logger.debug("Quality score recorded", user_id=user_id, subject_id=subject_id)
        return row
