"""
Rounding shared by every score and day-count in the engine.
"""

import math

# Products like 10 * 1.15 land a hair under .5 in binary floating point.
_ARTIFACT_DIGITS = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (75.5 -> 76, 6.5 -> 7)."""
    return int(math.floor(round(value, _ARTIFACT_DIGITS) + 0.5))
