# src/poultry_reports/utils/config.py
"""
Environment-driven settings for the forecasting reports.

Values come from the process environment, with a project-root .env loaded first.
Every key has a safe default so a bare checkout runs without any setup.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from poultry_reports.forecasting.production_models import ForecastParameters

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parents[3]
load_dotenv(BASE_DIR / ".env")


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key, "").strip()
    return float(raw) if raw else default


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    return int(raw) if raw else default


class Config:
    DATA_DIR = os.getenv("DATA_DIR", str(BASE_DIR / "data")).strip()

    FORECAST_HORIZON_DAYS = _env_int("FORECAST_HORIZON_DAYS", 30)
    KPI_WINDOW_DAYS = _env_int("KPI_WINDOW_DAYS", 7)
    CALIBRATION_WINDOW = _env_int("CALIBRATION_WINDOW", 14)

    LOG_DIR = os.getenv("LOG_DIR", "logs").strip()
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    LOG_FILE = os.getenv("LOG_FILE", "").strip() or str(Path(LOG_DIR) / "poultry_reports.log")

    # Heuristics without a cited derivation; override per farm if needed
    SURVIVAL_RATE = _env_float("SURVIVAL_RATE", 0.999)
    EGG_MASS_KG = _env_float("EGG_MASS_KG", 0.06)

    def forecast_parameters(self) -> ForecastParameters:
        return ForecastParameters(
            survival_rate=self.SURVIVAL_RATE,
            egg_mass_kg=self.EGG_MASS_KG,
            horizon_days=self.FORECAST_HORIZON_DAYS,
            kpi_window_days=self.KPI_WINDOW_DAYS,
            calibration_window=self.CALIBRATION_WINDOW,
        )

    def __repr__(self):
        return (
            f"<Config data_dir={self.DATA_DIR} horizon={self.FORECAST_HORIZON_DAYS} "
            f"survival={self.SURVIVAL_RATE} egg_mass={self.EGG_MASS_KG}>"
        )


# Singleton
config = Config()
