from datetime import date, timedelta

import pytest

from poultry_reports.forecasting.production_models import (
    EggCollectionRecord,
    FeedConsumptionRecord,
    Flock,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_flock():
    """Factory for a layer flock whose current age is `age_days` on TODAY."""

    def _make(
        flock_id="F1",
        age_days=210,
        population=1000,
        flock_type="LAYER",
        status="ACTIVE",
        days_since_start=30,
        initial_population=None,
    ):
        return Flock(
            flock_id=flock_id,
            flock_type=flock_type,
            status=status,
            start_date=TODAY - timedelta(days=days_since_start),
            initial_age_days=age_days - days_since_start,
            current_population=population,
            name=f"House {flock_id}",
            initial_population=initial_population,
        )

    return _make


@pytest.fixture
def egg_log():
    def _make(days_ago, good, flock_id="F1", damaged=0):
        return EggCollectionRecord(
            date=TODAY - timedelta(days=days_ago),
            flock_id=flock_id,
            total_good_count=good,
            damaged_count=damaged,
        )

    return _make


@pytest.fixture
def feed_log():
    def _make(days_ago, kg, flock_id="F1"):
        return FeedConsumptionRecord(
            date=TODAY - timedelta(days=days_ago),
            flock_id=flock_id,
            quantity_kg=kg,
        )

    return _make
