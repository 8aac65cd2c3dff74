"""
Rolling Efficiency Metrics

Trailing-window KPIs over the active laying flocks:
- FCR: kg feed per kg of egg mass
- Hen-day production: eggs per bird-day
- Today's laying rate and a short daily production trend

Undefined values are None (rendered "N/A"), never NaN or infinity.

Enterprise rules:
- Pure functions only
- No I/O
- No caching between calls
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from poultry_reports.forecasting.production_models import (
    DailyProductionPoint,
    EfficiencyKPIs,
    EggCollectionRecord,
    FeedConsumptionRecord,
    Flock,
)
from poultry_reports.forecasting.standard_curve import age_in_days, expected_rate


def _safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    return numerator / denominator if denominator > 0 else None


def total_population(flocks: Iterable[Flock]) -> int:
    return sum(f.current_population for f in flocks)


# ----------------------------
# Weekly KPIs
# ----------------------------

def compute_weekly_kpis(
    active_layer_flocks: Sequence[Flock],
    egg_logs: Iterable[EggCollectionRecord],
    feed_logs: Iterable[FeedConsumptionRecord],
    today: date,
    window_days: int = 7,
    egg_mass_kg: float = 0.06,
) -> EfficiencyKPIs:
    """
    FCR and hen-day production over the trailing window.

    Logs are kept when dated on or after today - window_days (inclusive) and
    belonging to one of the given flocks.
    """
    flock_ids = {f.flock_id for f in active_layer_flocks}
    cutoff = today - timedelta(days=window_days)

    eggs_sum = sum(
        l.total_good_count
        for l in egg_logs
        if l.date >= cutoff and l.flock_id in flock_ids
    )
    feed_sum_kg = sum(
        l.quantity_kg
        for l in feed_logs
        if l.date >= cutoff and l.flock_id in flock_ids
    )

    egg_mass = eggs_sum * egg_mass_kg
    bird_days = total_population(active_layer_flocks) * window_days

    return EfficiencyKPIs(
        window_days=window_days,
        eggs_sum=eggs_sum,
        feed_sum_kg=float(feed_sum_kg),
        bird_days=bird_days,
        fcr=_safe_ratio(feed_sum_kg, egg_mass),
        hen_day_production=_safe_ratio(eggs_sum, bird_days),
    )


# ----------------------------
# Daily views
# ----------------------------

def laying_rate_today(
    active_layer_flocks: Sequence[Flock],
    egg_logs: Iterable[EggCollectionRecord],
    today: date,
) -> Optional[float]:
    flock_ids = {f.flock_id for f in active_layer_flocks}
    eggs_today = sum(
        l.total_good_count
        for l in egg_logs
        if l.date == today and l.flock_id in flock_ids
    )
    return _safe_ratio(eggs_today, total_population(active_layer_flocks))


def _weighted_standard_rate(flocks: Sequence[Flock], on_date: date) -> Optional[float]:
    population = total_population(flocks)
    if population <= 0:
        return None
    expected = sum(
        f.current_population * expected_rate(age_in_days(f, on_date) / 7)
        for f in flocks
    )
    return expected / population


def daily_production_trend(
    active_layer_flocks: Sequence[Flock],
    egg_logs: Iterable[EggCollectionRecord],
    today: date,
    days: int = 7,
) -> List[DailyProductionPoint]:
    """
    One point per day for the last `days` days (oldest first, today last).

    Production rate uses the current population, the same approximation the
    hen-day KPI makes.
    """
    flock_ids = {f.flock_id for f in active_layer_flocks}
    start = today - timedelta(days=days - 1)

    good: Dict[date, int] = defaultdict(int)
    damaged: Dict[date, int] = defaultdict(int)
    for l in egg_logs:
        if l.flock_id in flock_ids and start <= l.date <= today:
            good[l.date] += l.total_good_count
            damaged[l.date] += l.damaged_count

    population = total_population(active_layer_flocks)

    trend: List[DailyProductionPoint] = []
    for offset in range(days):
        d = start + timedelta(days=offset)
        trend.append(
            DailyProductionPoint(
                date=d,
                total_good=good[d],
                damaged=damaged[d],
                production_rate=_safe_ratio(good[d], population),
                standard_rate=_weighted_standard_rate(active_layer_flocks, d),
            )
        )
    return trend
