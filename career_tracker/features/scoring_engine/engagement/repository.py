"""
Read-side access to the activity tables that feed engagement scoring.

Rows are owned by other features (jobs, interviews, time tracking,
materials, goals); this repository only reads them.
"""

from datetime import datetime

from career_tracker.db.helpers import fetch_all, fetch_one

from ..domain.models import (
    INTERVIEW_SCHEDULED,
    JOB_ADDED,
    MATERIAL_UPDATED,
    TIME_TRACKED,
    ActivityEvent,
)


class ActivityRepository:
    @staticmethod
    async def fetch_events(user_id: str, since: datetime) -> list[ActivityEvent]:
        rows = await fetch_all(
            """
            SELECT %s::text AS kind, created_at AS occurred_at, 1 AS quantity
            FROM jobs
            WHERE user_id = %s AND created_at >= %s
            UNION ALL
            SELECT %s, created_at, 1
            FROM interviews
            WHERE user_id = %s AND created_at >= %s
            UNION ALL
            SELECT %s, created_at, COALESCE(duration_minutes, 0)
            FROM time_tracking_entries
            WHERE user_id = %s AND created_at >= %s
            UNION ALL
            SELECT %s, created_at, 1
            FROM application_materials
            WHERE user_id = %s AND created_at >= %s
            ORDER BY occurred_at
            """,
            (
                JOB_ADDED, user_id, since,
                INTERVIEW_SCHEDULED, user_id, since,
                TIME_TRACKED, user_id, since,
                MATERIAL_UPDATED, user_id, since,
            ),
        )
        return [
            ActivityEvent(
                kind=row["kind"],
                occurred_at=row["occurred_at"],
                quantity=float(row["quantity"] or 0),
            )
            for row in rows
        ]

    @staticmethod
    async def fetch_goal_progress(user_id: str) -> list[float]:
        rows = await fetch_all(
            """
            SELECT progress_percentage
            FROM career_goals
            WHERE user_id = %s
              AND progress_percentage IS NOT NULL
            """,
            (user_id,),
        )
        return [float(row["progress_percentage"]) for row in rows]

    @staticmethod
    async def is_active_mentor(mentor_id: str, mentee_id: str) -> bool:
        row = await fetch_one(
            """
            SELECT id
            FROM mentor_relationships
            WHERE mentor_id = %s
              AND mentee_id = %s
              AND status = 'active'
            LIMIT 1
            """,
            (mentor_id, mentee_id),
        )
        return row is not None
