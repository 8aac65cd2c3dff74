from __future__ import annotations

import io
from typing import List, Optional, Sequence

from poultry_reports.forecasting.production_models import ProductionForecastResult


def _format_table(rows: Sequence[Sequence[object]], headers: List[str], max_rows: int | None = None) -> str:
    output = io.StringIO()
    rows = list(rows)

    if max_rows is not None and len(rows) > max_rows:
        shown = rows[:max_rows]
        omitted = len(rows) - max_rows
    else:
        shown = rows
        omitted = 0

    widths = [len(h) for h in headers]
    for row in shown:
        for i, v in enumerate(row):
            widths[i] = max(widths[i], len(str(v)))

    def fmt(r):
        return " ".join(str(r[i]).ljust(widths[i]) for i in range(len(headers)))

    print(fmt(headers), file=output)
    print(" ".join("-" * w for w in widths), file=output)
    for row in shown:
        print(fmt(row), file=output)

    if omitted:
        print(f"... ({omitted} more rows omitted) ...", file=output)

    return output.getvalue()


def _num(value: Optional[float], spec: str = ".2f") -> str:
    return format(value, spec) if value is not None else "N/A"


def _pct(value: Optional[float]) -> str:
    return f"{value:.1%}" if value is not None else "N/A"


def render_production_forecast(result: ProductionForecastResult) -> str:
    k = result.kpis
    p = result.parameters

    out = io.StringIO()

    print("\n" + "=" * 80, file=out)
    print("EGG PRODUCTION FORECAST & EFFICIENCY REPORT", file=out)
    print("=" * 80, file=out)
    print(f"Report Date: {result.report_date.isoformat()}", file=out)
    if result.points:
        print(
            f"Forecast Window: {result.points[0].date.isoformat()} to {result.points[-1].date.isoformat()}",
            file=out,
        )
    print(f"Active Layer Flocks: {len(result.flocks)}", file=out)
    print(file=out)

    print(f"Projected Yield ({p.horizon_days}d):  {result.total_forecasted_yield:,.0f} eggs", file=out)
    print(f"Standard Yield ({p.horizon_days}d):   {result.total_standard_yield:,.0f} eggs", file=out)
    print(f"Laying Rate (Today):     {_pct(result.laying_rate_today)}", file=out)
    print(f"FCR ({k.window_days}-Day):             {_num(k.fcr)}", file=out)
    print(f"Hen-Day Production:      {_num(k.hen_day_production)}", file=out)
    print(file=out)

    print("== Flock Calibration ==\n", file=out)
    flock_rows = [
        (
            c.flock_id,
            c.name,
            c.current_age_days,
            f"{c.current_age_days / 7:.1f}",
            c.current_population,
            _pct(c.survival_rate),
            c.samples_used,
            f"{c.factor:.3f}",
        )
        for c in result.flocks
    ]
    print(
        _format_table(
            flock_rows,
            ["flock", "name", "age_days", "age_weeks", "population", "survival", "samples", "factor"],
        ),
        file=out,
    )

    print(f"\n== Production Trend (last {len(result.trend)} days) ==\n", file=out)
    trend_rows = [
        (
            t.date.isoformat(),
            t.total_good,
            t.damaged,
            _pct(t.production_rate),
            _pct(t.standard_rate),
        )
        for t in result.trend
    ]
    print(_format_table(trend_rows, ["date", "good", "damaged", "laying_rate", "standard"]), file=out)

    print("\n== Daily Forecast ==\n", file=out)
    cumulative = 0.0
    forecast_rows = []
    for pt in result.points:
        cumulative += pt.projected_total
        forecast_rows.append(
            (
                pt.date.isoformat(),
                f"{pt.projected_total:.0f}",
                f"{pt.standard_total:.0f}",
                f"{cumulative:.0f}",
            )
        )
    print(
        _format_table(
            forecast_rows,
            ["date", "projected", "standard", "cumulative"],
            max_rows=120,
        ),
        file=out,
    )

    print("=" * 80, file=out)
    return out.getvalue()
