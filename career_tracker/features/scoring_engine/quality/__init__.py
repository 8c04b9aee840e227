"""
Application quality scoring package.
"""

from .service import (
    DEFAULT_QUALITY_WEIGHTS,
    ApplicationQualityService,
    application_quality_service,
)

__all__ = ["DEFAULT_QUALITY_WEIGHTS", "ApplicationQualityService", "application_quality_service"]
