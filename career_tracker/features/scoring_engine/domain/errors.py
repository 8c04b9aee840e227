"""
Error taxonomy for the scoring engine.

Each failure is a distinct, inspectable exception type. None of them is ever
collapsed into a score of 0: a computed 0 always means a measured zero.
"""


class ScoringEngineError(Exception):
    """Base class for all scoring engine failures."""

    code = "scoring_error"

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.context = context


class InvalidInput(ScoringEngineError):
    """Out-of-range or malformed input, usually an upstream bug."""

    code = "invalid_input"


class InsufficientData(ScoringEngineError):
    """No usable weighted inputs (or no population where one is required)."""

    code = "insufficient_data"


class AlreadyResolved(ScoringEngineError):
    """A prediction was resolved (or regenerated) after its outcome was recorded."""

    code = "already_resolved"


class PersistenceFailed(ScoringEngineError):
    """The storage collaborator rejected a write after a successful compute."""

    code = "persistence_failed"


class SubjectNotFound(ScoringEngineError):
    """No stored record exists for the requested subject."""

    code = "not_found"
