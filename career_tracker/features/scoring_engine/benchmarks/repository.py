"""
Read-only access to the industry response-time benchmark table.
"""

from career_tracker.db.helpers import fetch_one
from career_tracker.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    industry, company_size, job_level, sample_size,
    min_response_days, avg_response_days, max_response_days
"""


class BenchmarkRepository:
    """Partial-key lookups against industry_response_benchmarks."""

    @staticmethod
    async def fetch_exact(industry: str, company_size: str, level: str) -> dict | None:
        return await fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM industry_response_benchmarks
            WHERE industry = %s
              AND company_size = %s
              AND job_level = %s
            LIMIT 1
            """,
            (industry, company_size, level),
        )

    @staticmethod
    async def fetch_by_company_size(industry: str, company_size: str) -> dict | None:
        return await fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM industry_response_benchmarks
            WHERE industry = %s
              AND company_size = %s
            ORDER BY sample_size DESC NULLS LAST
            LIMIT 1
            """,
            (industry, company_size),
        )

    @staticmethod
    async def fetch_by_industry(industry: str) -> dict | None:
        return await fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM industry_response_benchmarks
            WHERE industry = %s
            ORDER BY sample_size DESC NULLS LAST
            LIMIT 1
            """,
            (industry,),
        )
