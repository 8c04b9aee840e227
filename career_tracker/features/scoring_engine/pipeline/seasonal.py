"""
Calendar-driven adjustments for response-time day-count estimates.
"""

from datetime import date

from ..domain.constants import DEFAULT_CONSTANTS, ScoringConstants
from ..domain.models import DayRange, SeasonalFactors
from .rounding import round_half_up


class SeasonalAdjuster:
    """
    Scale a baseline day range by month and day-of-week factors.

    Holiday-adjacent months (Jul, Aug, Nov, Dec) and fiscal-boundary months
    (Mar, Sep) each carry one month factor. A weekend date adds a further
    factor to ``avg`` and ``max`` only; ``min`` only moves with the month.
    """

    def __init__(self, constants: ScoringConstants = DEFAULT_CONSTANTS):
        self.constants = constants

    def factors(self, when: date) -> SeasonalFactors:
        month_index = when.month - 1
        if month_index in self.constants.holiday_months:
            month_factor = self.constants.holiday_factor
        elif month_index in self.constants.fiscal_boundary_months:
            month_factor = self.constants.fiscal_boundary_factor
        else:
            month_factor = 1.0

        # Saturday=5, Sunday=6
        day_factor = self.constants.weekend_factor if when.weekday() >= 5 else 1.0
        return SeasonalFactors(month_factor=month_factor, day_of_week_factor=day_factor)

    def adjust(self, baseline: DayRange, when: date) -> DayRange:
        factors = self.factors(when)
        month = factors.month_factor
        day = factors.day_of_week_factor
        return DayRange(
            min_days=round_half_up(baseline.min_days * month),
            avg_days=round_half_up(baseline.avg_days * month * day),
            max_days=round_half_up(baseline.max_days * month * day),
        )


seasonal_adjuster = SeasonalAdjuster()
