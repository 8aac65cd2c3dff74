"""
Egg Production Forecast Engine

Simulates each active laying flock forward day by day:
- ages the flock along the standard curve
- applies its calibrated performance factor (capped at 100% lay)
- decays the population by a daily survival rate

and sums the flocks into one projected and one standard total per future day.

Enterprise rules:
- Pure functions only
- No I/O
- No side effects
- Deterministic for a given snapshot and "today"
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional

from poultry_reports.forecasting.production_models import Flock, ForecastPoint
from poultry_reports.forecasting.standard_curve import expected_rate

MAX_LAYING_RATE = 1.0


def forecast(
    active_layer_flocks: Iterable[Flock],
    performance_factors: Optional[Mapping[str, float]],
    today: date,
    horizon_days: int = 30,
    survival_rate: float = 0.999,
) -> List[ForecastPoint]:
    """
    Project daily egg output for days today+1 .. today+horizon_days.

    Flocks missing from `performance_factors` use a neutral factor of 1.0.
    Flocks that are not active layers are ignored.
    """
    factors = performance_factors or {}
    flocks = [f for f in active_layer_flocks if f.is_active_layer]

    points: List[ForecastPoint] = []
    for i in range(1, horizon_days + 1):
        survival = survival_rate ** i
        projected_total = 0.0
        standard_total = 0.0

        for flock in flocks:
            days_since_start = (today - flock.start_date).days
            age_days = max(0, days_since_start + i) + flock.initial_age_days

            standard = expected_rate(age_days / 7)
            adjusted = min(MAX_LAYING_RATE, standard * factors.get(flock.flock_id, 1.0))

            population = flock.current_population * survival
            projected_total += population * adjusted
            standard_total += population * standard

        points.append(
            ForecastPoint(
                date=today + timedelta(days=i),
                projected_total=projected_total,
                standard_total=standard_total,
            )
        )

    return points


def total_forecasted_yield(points: Iterable[ForecastPoint]) -> float:
    return sum(p.projected_total for p in points)


def total_standard_yield(points: Iterable[ForecastPoint]) -> float:
    return sum(p.standard_total for p in points)
