import argparse
from dataclasses import replace
from datetime import date, datetime

from poultry_reports.data.records import forecast_to_frame, load_snapshot
from poultry_reports.forecasting.production_forecast_usecase import (
    run_production_forecast,
)
from poultry_reports.presentation.console import (
    render_production_forecast,
)
from poultry_reports.utils.config import config
from poultry_reports.utils.logger import get_logger

logger = get_logger(__name__)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Egg Production Forecast & Efficiency KPIs"
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=config.DATA_DIR,
        help="Directory with flocks.csv, egg_collections.csv, feed_consumption.csv "
             "(default: DATA_DIR env var)",
    )

    parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Reference date (YYYY-MM-DD). Defaults to today.",
    )

    parser.add_argument(
        "--horizon",
        type=int,
        default=None,
        help=f"Days to forecast (default: {config.FORECAST_HORIZON_DAYS})",
    )

    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help=f"KPI trailing window in days (default: {config.KPI_WINDOW_DAYS})",
    )

    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Optional path to write the daily forecast as CSV",
    )

    args = parser.parse_args(argv)

    today = (
        datetime.strptime(args.today, "%Y-%m-%d").date()
        if args.today
        else date.today()
    )

    params = config.forecast_parameters()
    if args.horizon is not None:
        params = replace(params, horizon_days=args.horizon)
    if args.window is not None:
        params = replace(params, kpi_window_days=args.window)

    flocks, egg_logs, feed_logs = load_snapshot(args.data_dir, today=today)

    result = run_production_forecast(flocks, egg_logs, feed_logs, today, params)

    print(render_production_forecast(result), end="")

    if args.csv:
        forecast_to_frame(result.points).to_csv(args.csv, index=False)
        logger.info("Forecast written to %s", args.csv)


if __name__ == "__main__":
    main()
