"""
Record data access layer.

Reads the snapshots exported by the farm record-keeping system:
- flocks.csv            (flock_id, type, status, start_date, initial_age_days, current_population)
- egg_collections.csv   (date, flock_id, total_good_count[, damaged_count])
- feed_consumption.csv  (date, flock_id, quantity_kg)

This is the validation boundary. Bad rows raise ValueError here so the
forecasting domain only ever sees well-formed, non-negative snapshots.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

import numpy as np
import pandas as pd

from poultry_reports.forecasting.production_models import (
    FLOCK_TYPES,
    EggCollectionRecord,
    FeedConsumptionRecord,
    Flock,
    ForecastPoint,
)
from poultry_reports.utils.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

FLOCKS_FILE = "flocks.csv"
EGG_FILE = "egg_collections.csv"
FEED_FILE = "feed_consumption.csv"

FLOCK_COLUMNS = {"flock_id", "type", "status", "start_date", "initial_age_days", "current_population"}
EGG_COLUMNS = {"date", "flock_id", "total_good_count"}
FEED_COLUMNS = {"date", "flock_id", "quantity_kg"}


# ===================================================================
# Helpers
# ===================================================================

def _read_csv(path: PathLike, required: Set[str], label: str) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{label} CSV file '{path}' not found.")

    df = pd.read_csv(path, dtype={"flock_id": str})
    if not required.issubset(df.columns):
        missing = required - set(df.columns)
        raise ValueError(f"{label} CSV missing required columns: {missing}")

    logger.debug("Loaded %s rows from %s", len(df), path)
    return df


def _to_dates(series: pd.Series, label: str) -> List[date]:
    parsed = pd.to_datetime(series, errors="coerce")
    if parsed.isna().any():
        raise ValueError(f"{label}: unparseable dates in rows {list(parsed[parsed.isna()].index)}")
    return [ts.date() for ts in parsed]


def _numeric(df: pd.DataFrame, column: str, label: str, default: Optional[float] = None) -> np.ndarray:
    """
    Parse a numeric column. Blank cells take `default` when one is given
    (optional columns); anything else that does not parse is rejected.
    """
    raw = df[column]
    values = pd.to_numeric(raw, errors="coerce")

    bad = values.isna() if default is None else values.isna() & raw.notna()
    if bad.any():
        raise ValueError(f"{label}: non-numeric values in '{column}' (rows {list(raw[bad].index)})")

    if default is not None:
        values = values.fillna(default)

    out = values.to_numpy(dtype=np.float64)
    if (out < 0).any():
        raise ValueError(f"{label}: negative values in '{column}'")
    return out


def _non_negative_ints(df: pd.DataFrame, column: str, label: str, default: Optional[int] = None) -> np.ndarray:
    values = _numeric(df, column, label, default)
    if (np.mod(values, 1) != 0).any():
        raise ValueError(f"{label}: non-integral values in '{column}'")
    return values.astype(np.int64)


def _non_negative_floats(df: pd.DataFrame, column: str, label: str) -> np.ndarray:
    return _numeric(df, column, label)


def _optional_ints(df: pd.DataFrame, column: str, label: str) -> List[Optional[int]]:
    if column not in df.columns:
        return [None] * len(df)
    blank = df[column].isna().to_numpy()
    values = _non_negative_ints(df, column, label, default=0)
    return [None if blank[i] else int(values[i]) for i in range(len(df))]


def _reject_future(dates: Iterable[date], today: Optional[date], label: str) -> None:
    if today is None:
        return
    future = sorted({d for d in dates if d > today})
    if future:
        raise ValueError(f"{label}: records dated after {today}: {future[:5]}")


# ===================================================================
# Loaders
# ===================================================================

def load_flocks(path: PathLike) -> List[Flock]:
    label = "Flocks"
    df = _read_csv(path, FLOCK_COLUMNS, label)

    types = df["type"].astype(str).str.strip().str.upper()
    unknown = set(types) - set(FLOCK_TYPES)
    if unknown:
        raise ValueError(f"{label}: unknown flock types {sorted(unknown)}")

    statuses = df["status"].astype(str).str.strip().str.upper()
    start_dates = _to_dates(df["start_date"], label)
    initial_ages = _non_negative_ints(df, "initial_age_days", label)
    populations = _non_negative_ints(df, "current_population", label)

    names = df["name"].fillna("").astype(str).tolist() if "name" in df.columns else [""] * len(df)

    initial_pops = _optional_ints(df, "initial_population", label)

    return [
        Flock(
            flock_id=str(df["flock_id"].iloc[i]),
            flock_type=types.iloc[i],
            status=statuses.iloc[i],
            start_date=start_dates[i],
            initial_age_days=int(initial_ages[i]),
            current_population=int(populations[i]),
            name=names[i],
            initial_population=initial_pops[i],
        )
        for i in range(len(df))
    ]


def load_egg_collections(path: PathLike, today: Optional[date] = None) -> List[EggCollectionRecord]:
    label = "Egg collections"
    df = _read_csv(path, EGG_COLUMNS, label)

    dates = _to_dates(df["date"], label)
    _reject_future(dates, today, label)

    good = _non_negative_ints(df, "total_good_count", label)
    if "damaged_count" in df.columns:
        damaged = _non_negative_ints(df, "damaged_count", label, default=0)
    else:
        damaged = np.zeros(len(df), dtype=np.int64)

    return [
        EggCollectionRecord(
            date=dates[i],
            flock_id=str(df["flock_id"].iloc[i]),
            total_good_count=int(good[i]),
            damaged_count=int(damaged[i]),
        )
        for i in range(len(df))
    ]


def load_feed_consumption(path: PathLike, today: Optional[date] = None) -> List[FeedConsumptionRecord]:
    label = "Feed consumption"
    df = _read_csv(path, FEED_COLUMNS, label)

    dates = _to_dates(df["date"], label)
    _reject_future(dates, today, label)

    quantities = _non_negative_floats(df, "quantity_kg", label)

    return [
        FeedConsumptionRecord(
            date=dates[i],
            flock_id=str(df["flock_id"].iloc[i]),
            quantity_kg=float(quantities[i]),
        )
        for i in range(len(df))
    ]


def load_snapshot(
    data_dir: PathLike,
    today: Optional[date] = None,
) -> Tuple[List[Flock], List[EggCollectionRecord], List[FeedConsumptionRecord]]:
    """Load (flocks, egg_logs, feed_logs) from a directory of CSV exports."""
    data_dir = Path(data_dir)
    flocks = load_flocks(data_dir / FLOCKS_FILE)
    egg_logs = load_egg_collections(data_dir / EGG_FILE, today=today)
    feed_logs = load_feed_consumption(data_dir / FEED_FILE, today=today)

    logger.info(
        "Snapshot loaded from %s | flocks=%s | egg_logs=%s | feed_logs=%s",
        data_dir,
        len(flocks),
        len(egg_logs),
        len(feed_logs),
    )
    return flocks, egg_logs, feed_logs


# ===================================================================
# Export
# ===================================================================

def forecast_to_frame(points: Iterable[ForecastPoint]) -> pd.DataFrame:
    df = pd.DataFrame(
        [(p.date, p.projected_total, p.standard_total) for p in points],
        columns=["date", "projected_total", "standard_total"],
    )
    df["cumulative_projected"] = df["projected_total"].cumsum()
    return df
