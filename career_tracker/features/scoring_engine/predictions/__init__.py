"""
Response-time prediction package.

Provides the tracker that generates per-job response-time predictions,
flags them overdue, and reconciles them against observed outcomes.
"""

from .service import PredictionTracker, compute_accuracy, is_terminal_status, prediction_tracker

__all__ = ["PredictionTracker", "compute_accuracy", "is_terminal_status", "prediction_tracker"]
