"""
Mentee engagement package.
"""

from .service import MenteeEngagementService, mentee_engagement_service

__all__ = ["MenteeEngagementService", "mentee_engagement_service"]
