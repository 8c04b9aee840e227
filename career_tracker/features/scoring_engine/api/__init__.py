"""
HTTP surface for the scoring engine.
"""

from .router import router

__all__ = ["router"]
