"""
Standard Laying Curve

Generic egg-laying breed reference: fraction of the flock expected to lay per
day at a given age. Continuous at every breakpoint.

Enterprise rules:
- Pure functions only
- No I/O
- No side effects
"""

from datetime import date

from poultry_reports.forecasting.production_models import Flock


ONSET_WEEKS = 19.0
RAMP_END_WEEKS = 21.0
PEAK_START_WEEKS = 25.0
PEAK_END_WEEKS = 40.0
DECLINE_END_WEEKS = 70.0

PEAK_RATE = 0.95
LATE_LAY_FLOOR = 0.60


def expected_rate(age_in_weeks: float) -> float:
    """
    Expected laying rate in [0, 1] for a bird of the given age.

    - < 19 weeks:   0 (not yet in lay)
    - 19 -> 21:     0.05 -> 0.75
    - 21 -> 25:     0.75 -> 0.95
    - 25 -> 40:     0.95 plateau
    - 40 -> 70:     0.95 -> 0.77
    - > 70:         continues at 0.008/week, floored at 0.60
    """
    age = age_in_weeks
    if age < ONSET_WEEKS:
        return 0.0
    if age <= RAMP_END_WEEKS:
        return 0.05 + (age - ONSET_WEEKS) * 0.35
    if age <= PEAK_START_WEEKS:
        return 0.75 + (age - RAMP_END_WEEKS) * 0.05
    if age <= PEAK_END_WEEKS:
        return PEAK_RATE
    if age <= DECLINE_END_WEEKS:
        return PEAK_RATE - (age - PEAK_END_WEEKS) * 0.006
    return max(LATE_LAY_FLOOR, 0.77 - (age - DECLINE_END_WEEKS) * 0.008)


def expected_rate_for_days(age_in_days: float) -> float:
    return expected_rate(age_in_days / 7)


def age_in_days(flock: Flock, on_date: date) -> int:
    """Flock age on a given day: days since placement (floored at 0) + age at placement."""
    elapsed = (on_date - flock.start_date).days
    return max(0, elapsed) + flock.initial_age_days
