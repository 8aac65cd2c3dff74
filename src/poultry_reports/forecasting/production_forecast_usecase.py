"""
Egg Production Forecast Use Case

Purpose:
- Calibrate every active laying flock against the standard curve
- Project daily egg output over the horizon
- Compute rolling efficiency KPIs for the same snapshot

Important:
- Inputs are snapshots; nothing is mutated or cached
- Every run recomputes from scratch
- "today" is supplied by the caller (CLI defaults it)
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from poultry_reports.forecasting.calibration import calibrate_flocks
from poultry_reports.forecasting.efficiency_metrics import (
    compute_weekly_kpis,
    daily_production_trend,
    laying_rate_today,
)
from poultry_reports.forecasting.forecast_engine import (
    forecast,
    total_forecasted_yield,
    total_standard_yield,
)
from poultry_reports.forecasting.production_models import (
    EggCollectionRecord,
    FeedConsumptionRecord,
    Flock,
    ForecastParameters,
    ProductionForecastResult,
)
from poultry_reports.utils.logger import get_logger

logger = get_logger(__name__)


def select_active_layers(flocks: Sequence[Flock]) -> List[Flock]:
    return [f for f in flocks if f.is_active_layer]


def run_production_forecast(
    flocks: Sequence[Flock],
    egg_logs: Sequence[EggCollectionRecord],
    feed_logs: Sequence[FeedConsumptionRecord],
    today: date,
    params: Optional[ForecastParameters] = None,
) -> ProductionForecastResult:
    """
    Run the egg production forecast and efficiency KPIs for one reference day.
    """
    params = params or ForecastParameters()
    layers = select_active_layers(flocks)

    logger.info(
        "Running Egg Production Forecast | today=%s | horizon=%s | active_layers=%s/%s",
        today,
        params.horizon_days,
        len(layers),
        len(flocks),
    )

    if not layers:
        logger.warning("No active layer flocks for today=%s", today)

    # ------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------
    calibrations = calibrate_flocks(layers, egg_logs, today, params)

    for c in calibrations.values():
        if c.samples_used == 0:
            logger.info("Flock %s: insufficient history, neutral factor", c.flock_id)
        else:
            logger.debug(
                "Flock %s: factor=%.3f from %s samples",
                c.flock_id,
                c.factor,
                c.samples_used,
            )

    factors = {flock_id: c.factor for flock_id, c in calibrations.items()}

    # ------------------------------------------------------------
    # Forecast
    # ------------------------------------------------------------
    points = forecast(
        layers,
        factors,
        today,
        horizon_days=params.horizon_days,
        survival_rate=params.survival_rate,
    )

    # ------------------------------------------------------------
    # KPIs
    # ------------------------------------------------------------
    kpis = compute_weekly_kpis(
        layers,
        egg_logs,
        feed_logs,
        today,
        window_days=params.kpi_window_days,
        egg_mass_kg=params.egg_mass_kg,
    )

    if kpis.fcr is None:
        logger.warning("FCR undefined: no eggs in the last %s days", params.kpi_window_days)

    result = ProductionForecastResult(
        report_date=today,
        parameters=params,
        flocks=sorted(calibrations.values(), key=lambda c: c.flock_id),
        points=points,
        total_forecasted_yield=total_forecasted_yield(points),
        total_standard_yield=total_standard_yield(points),
        kpis=kpis,
        laying_rate_today=laying_rate_today(layers, egg_logs, today),
        trend=daily_production_trend(layers, egg_logs, today, days=params.trend_days),
    )

    logger.info(
        "Forecast complete | projected=%.0f | standard=%.0f",
        result.total_forecasted_yield,
        result.total_standard_yield,
    )
    return result
