"""
Benchmark lookup package.
"""

from .repository import BenchmarkRepository
from .resolver import BenchmarkResolver, benchmark_resolver

__all__ = ["BenchmarkRepository", "BenchmarkResolver", "benchmark_resolver"]
