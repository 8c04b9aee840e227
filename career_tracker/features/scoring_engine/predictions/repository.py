"""
Persistence for response-time predictions.

One row per subject (unique ``subject_id``). Writes are conditional on
``resolved_at IS NULL`` so a resolved prediction can never be overwritten,
even by concurrent callers.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from psycopg.types.json import Jsonb

from career_tracker.db.helpers import execute_returning, fetch_all, fetch_one
from career_tracker.infrastructure.observability.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..domain.models import Prediction


logger = get_logger(__name__)


class PredictionRepository:
    """Thin wrappers around response_time_predictions."""

    @staticmethod
    async def fetch_by_subject(user_id: str, subject_id: str) -> dict | None:
        return await fetch_one(
            """
            SELECT *
            FROM response_time_predictions
            WHERE user_id = %s
              AND subject_id = %s
            """,
            (user_id, subject_id),
        )

    @staticmethod
    async def upsert_open(prediction: "Prediction") -> dict | None:
        """
        Insert or replace the open prediction for a subject.

        An overdue flag already set is kept, as is a stored application date
        when the new estimate has none. Returns None when the existing row is
        resolved or belongs to another user.
        """
        row = await execute_returning(
            """
            INSERT INTO response_time_predictions (
                user_id, subject_id, predicted_min_days, predicted_avg_days,
                predicted_max_days, confidence_level, factors_used,
                suggested_follow_up_date, is_overdue, applied_on, created_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, NOW())
            ON CONFLICT (subject_id) DO UPDATE SET
                predicted_min_days = EXCLUDED.predicted_min_days,
                predicted_avg_days = EXCLUDED.predicted_avg_days,
                predicted_max_days = EXCLUDED.predicted_max_days,
                confidence_level = EXCLUDED.confidence_level,
                factors_used = EXCLUDED.factors_used,
                suggested_follow_up_date = EXCLUDED.suggested_follow_up_date,
                is_overdue = response_time_predictions.is_overdue OR EXCLUDED.is_overdue,
                applied_on = COALESCE(EXCLUDED.applied_on, response_time_predictions.applied_on),
                updated_at = NOW()
            WHERE response_time_predictions.resolved_at IS NULL
              AND response_time_predictions.user_id = EXCLUDED.user_id
            RETURNING *
            """,
            (
                prediction.user_id,
                prediction.subject_id,
                prediction.min_days,
                prediction.avg_days,
                prediction.max_days,
                prediction.confidence,
                Jsonb(prediction.factors),
                prediction.suggested_follow_up_date,
                prediction.is_overdue,
                prediction.applied_on,
            ),
        )
        logger.debug(
            "Prediction upserted",
            subject_id=prediction.subject_id,
            written=row is not None,
        )
        return row

    @staticmethod
    async def mark_overdue(user_id: str, subject_id: str) -> dict | None:
        return await execute_returning(
            """
            UPDATE response_time_predictions
            SET is_overdue = TRUE,
                updated_at = NOW()
            WHERE user_id = %s
              AND subject_id = %s
              AND resolved_at IS NULL
            RETURNING *
            """,
            (user_id, subject_id),
        )

    @staticmethod
    async def resolve(
        user_id: str,
        subject_id: str, actual_days: int, accuracy: float, resolved_at: datetime
    ) -> dict | None:
        """Record the outcome once. Returns None if another caller resolved it first."""
        return await execute_returning(
            """
            UPDATE response_time_predictions
            SET actual_response_days = %s,
                prediction_accuracy = %s,
                resolved_at = %s,
                updated_at = NOW()
            WHERE user_id = %s
              AND subject_id = %s
              AND resolved_at IS NULL
            RETURNING *
            """,
            (actual_days, accuracy, resolved_at, user_id, subject_id),
        )

    @staticmethod
    async def fetch_resolved_for_user(user_id: str) -> list[dict]:
        return await fetch_all(
            """
            SELECT *
            FROM response_time_predictions
            WHERE user_id = %s
              AND resolved_at IS NOT NULL
            ORDER BY resolved_at ASC
            """,
            (user_id,),
        )
