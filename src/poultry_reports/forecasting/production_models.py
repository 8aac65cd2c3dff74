"""
Egg Production Domain Models

Enterprise rules:
- No logic beyond trivial properties
- No I/O
- No formatting
- Immutable snapshots
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional


LAYER = "LAYER"
BROILER = "BROILER"
FLOCK_TYPES = (LAYER, BROILER)

ACTIVE = "ACTIVE"


# -------------------------------------------------
# Input snapshots
# -------------------------------------------------

@dataclass(frozen=True)
class Flock:
    flock_id: str
    flock_type: str
    status: str
    start_date: date
    initial_age_days: int
    current_population: int
    name: str = ""
    initial_population: Optional[int] = None

    @property
    def is_active_layer(self) -> bool:
        return self.flock_type == LAYER and self.status == ACTIVE


@dataclass(frozen=True)
class EggCollectionRecord:
    date: date
    flock_id: str
    total_good_count: int
    damaged_count: int = 0


@dataclass(frozen=True)
class FeedConsumptionRecord:
    date: date
    flock_id: str
    quantity_kg: float


# -------------------------------------------------
# Tunable heuristics
# -------------------------------------------------

@dataclass(frozen=True)
class ForecastParameters:
    survival_rate: float = 0.999      # daily attrition applied over the horizon
    egg_mass_kg: float = 0.06         # average egg weight used for FCR
    horizon_days: int = 30
    kpi_window_days: int = 7
    calibration_window: int = 14
    min_calibration_samples: int = 3
    min_standard_rate: float = 0.1
    efficiency_floor: float = 0.5
    efficiency_ceiling: float = 1.2
    trend_days: int = 7


# -------------------------------------------------
# Derived results
# -------------------------------------------------

@dataclass(frozen=True)
class FlockCalibration:
    flock_id: str
    name: str
    current_age_days: int
    current_population: int
    factor: float
    samples_used: int
    survival_rate: Optional[float]


@dataclass(frozen=True)
class ForecastPoint:
    date: date
    projected_total: float
    standard_total: float


@dataclass(frozen=True)
class EfficiencyKPIs:
    window_days: int
    eggs_sum: int
    feed_sum_kg: float
    bird_days: int

    # None means "no data", never NaN
    fcr: Optional[float]
    hen_day_production: Optional[float]


@dataclass(frozen=True)
class DailyProductionPoint:
    date: date
    total_good: int
    damaged: int
    production_rate: Optional[float]
    standard_rate: Optional[float]


@dataclass(frozen=True)
class ProductionForecastResult:
    report_date: date
    parameters: ForecastParameters
    flocks: List[FlockCalibration]
    points: List[ForecastPoint]
    total_forecasted_yield: float
    total_standard_yield: float
    kpis: EfficiencyKPIs
    laying_rate_today: Optional[float]
    trend: List[DailyProductionPoint] = field(default_factory=list)

    @property
    def performance_factors(self) -> Dict[str, float]:
        return {c.flock_id: c.factor for c in self.flocks}
