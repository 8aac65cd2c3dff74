"""
Performance Calibration

Learns a per-flock efficiency factor: how the flock's recent laying compares to
the standard curve at the ages it actually had on each collection day.

Enterprise rules:
- Pure functions only
- No I/O
- No side effects
- "today" is always passed in, never read from the clock
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from poultry_reports.forecasting.production_models import (
    EggCollectionRecord,
    Flock,
    FlockCalibration,
    ForecastParameters,
)
from poultry_reports.forecasting.standard_curve import age_in_days, expected_rate

NEUTRAL_FACTOR = 1.0


def daily_good_totals(
    flock_id: str,
    logs: Iterable[EggCollectionRecord],
) -> List[Tuple[date, int]]:
    """
    Collapse a flock's collections into one total per day, most recent first.

    Several collections on the same day (morning / afternoon / evening) are summed.
    """
    totals: Dict[date, int] = defaultdict(int)
    for log in logs:
        if log.flock_id == flock_id:
            totals[log.date] += log.total_good_count
    return sorted(totals.items(), key=lambda kv: kv[0], reverse=True)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _efficiencies(
    flock: Flock,
    samples: List[Tuple[date, int]],
    today: date,
    params: ForecastParameters,
) -> List[float]:
    current_age = age_in_days(flock, today)
    population = flock.current_population

    out: List[float] = []
    for log_date, good in samples:
        days_ago = (today - log_date).days
        age_at_log = max(0, current_age - days_ago)
        standard = expected_rate(age_at_log / 7)

        # Curve is not meaningful before lay is established
        if standard <= params.min_standard_rate or population == 0:
            continue

        actual = good / population
        out.append(
            clamp(actual / standard, params.efficiency_floor, params.efficiency_ceiling)
        )
    return out


def calibrate(
    flock: Flock,
    recent_logs: Iterable[EggCollectionRecord],
    today: date,
    params: Optional[ForecastParameters] = None,
) -> float:
    """
    Efficiency factor of one flock relative to the standard curve.

    Uses up to `calibration_window` most recent daily totals. Fewer than
    `min_calibration_samples` days, or no day surviving the filters, gives 1.0.
    """
    factor, _ = _calibrate_with_count(flock, recent_logs, today, params or ForecastParameters())
    return factor


def _calibrate_with_count(
    flock: Flock,
    recent_logs: Iterable[EggCollectionRecord],
    today: date,
    params: ForecastParameters,
) -> Tuple[float, int]:
    samples = daily_good_totals(flock.flock_id, recent_logs)[: params.calibration_window]

    if len(samples) < params.min_calibration_samples:
        return NEUTRAL_FACTOR, 0

    efficiencies = _efficiencies(flock, samples, today, params)
    if not efficiencies:
        return NEUTRAL_FACTOR, 0

    return sum(efficiencies) / len(efficiencies), len(efficiencies)


def survival_rate(flock: Flock) -> Optional[float]:
    """Share of placed birds still alive; None when placement count is unknown."""
    if not flock.initial_population:
        return None
    return flock.current_population / flock.initial_population


def calibrate_flocks(
    flocks: Iterable[Flock],
    logs: Iterable[EggCollectionRecord],
    today: date,
    params: Optional[ForecastParameters] = None,
) -> Dict[str, FlockCalibration]:
    params = params or ForecastParameters()
    logs = list(logs)

    results: Dict[str, FlockCalibration] = {}
    for flock in flocks:
        factor, used = _calibrate_with_count(flock, logs, today, params)
        results[flock.flock_id] = FlockCalibration(
            flock_id=flock.flock_id,
            name=flock.name or flock.flock_id,
            current_age_days=age_in_days(flock, today),
            current_population=flock.current_population,
            factor=factor,
            samples_used=used,
            survival_rate=survival_rate(flock),
        )
    return results
