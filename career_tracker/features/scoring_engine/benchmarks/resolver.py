"""
Benchmark resolver - finds the most specific stored benchmark for a context.
"""

from __future__ import annotations

from career_tracker.infrastructure.observability.logging import get_logger

from ..domain.constants import DEFAULT_CONSTANTS, ScoringConstants
from ..domain.models import Benchmark, BenchmarkContext
from .repository import BenchmarkRepository

logger = get_logger(__name__)


class BenchmarkResolver:
    """
    Resolve a benchmark by progressively coarser keys:

        (industry, company_size, level) -> (industry, company_size)
        -> (industry) -> built-in default

    Lookups whose key parts are missing from the context are skipped. The
    resolver never fails for "not found"; storage errors on read propagate.
    """

    def __init__(self, constants: ScoringConstants = DEFAULT_CONSTANTS):
        self.constants = constants

    async def resolve(self, context: BenchmarkContext) -> Benchmark:
        row, matched_on = await self._lookup(context)
        if row is None:
            logger.debug(
                "No stored benchmark, using default estimate",
                industry=context.industry,
                company_size=context.company_size,
                level=context.level,
            )
            return self.default_benchmark(context)

        logger.debug(
            "Benchmark resolved",
            industry=context.industry,
            matched_on=matched_on,
            sample_size=row.get("sample_size"),
        )
        return self._row_to_benchmark(context, row)

    async def _lookup(self, context: BenchmarkContext) -> tuple[dict | None, str | None]:
        industry = context.industry
        if not industry:
            return None, None

        if context.company_size and context.level:
            row = await BenchmarkRepository.fetch_exact(
                industry, context.company_size, context.level
            )
            if row:
                return row, "exact"

        if context.company_size:
            row = await BenchmarkRepository.fetch_by_company_size(industry, context.company_size)
            if row:
                return row, "industry_company_size"

        row = await BenchmarkRepository.fetch_by_industry(industry)
        if row:
            return row, "industry"

        return None, None

    def default_benchmark(self, context: BenchmarkContext) -> Benchmark:
        avg = self.constants.default_benchmark_avg_days
        return Benchmark(
            context=context,
            sample_size=0,
            min_days=self._default_min(avg),
            avg_days=avg,
            max_days=self._default_max(avg),
            is_default=True,
        )

    def confidence_for(self, benchmark: Benchmark) -> int:
        if benchmark.is_default:
            return self.constants.default_confidence
        return self.constants.benchmark_confidence

    def _row_to_benchmark(self, context: BenchmarkContext, row: dict) -> Benchmark:
        avg = row.get("avg_response_days") or self.constants.default_benchmark_avg_days
        min_days = row.get("min_response_days") or self._default_min(avg)
        max_days = row.get("max_response_days") or self._default_max(avg)
        return Benchmark(
            context=BenchmarkContext(
                industry=row.get("industry") or context.industry,
                company_size=row.get("company_size"),
                level=row.get("job_level"),
            ),
            sample_size=max(int(row.get("sample_size") or 0), 0),
            min_days=float(min_days),
            avg_days=float(avg),
            max_days=float(max_days),
        )

    @staticmethod
    def _default_min(avg: float) -> float:
        return max(2.0, avg - 5)

    @staticmethod
    def _default_max(avg: float) -> float:
        return avg + 14


benchmark_resolver = BenchmarkResolver()
