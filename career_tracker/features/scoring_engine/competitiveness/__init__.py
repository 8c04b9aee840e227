"""
Job competitiveness scoring package.
"""

from .service import (
    DEFAULT_COMPETITIVENESS_WEIGHTS,
    JobCompetitivenessService,
    interview_likelihood,
    job_competitiveness_service,
)

__all__ = [
    "DEFAULT_COMPETITIVENESS_WEIGHTS",
    "JobCompetitivenessService",
    "interview_likelihood",
    "job_competitiveness_service",
]
