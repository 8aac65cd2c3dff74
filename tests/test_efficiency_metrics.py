"""
Test: Rolling Efficiency Metrics
FCR, hen-day production, today's laying rate and the daily trend.
"""

import math
from datetime import timedelta

import pytest

from poultry_reports.forecasting.efficiency_metrics import (
    compute_weekly_kpis,
    daily_production_trend,
    laying_rate_today,
)


@pytest.fixture
def week_of_logs(egg_log, feed_log):
    eggs = [egg_log(d, 900, damaged=d) for d in range(0, 7)]
    feed = [feed_log(d, 110.0) for d in range(0, 7)]
    return eggs, feed


def test_weekly_kpis(make_flock, week_of_logs, today):
    eggs, feed = week_of_logs
    kpis = compute_weekly_kpis([make_flock(population=1000)], eggs, feed, today)

    assert kpis.eggs_sum == 6300
    assert kpis.feed_sum_kg == pytest.approx(770.0)
    assert kpis.bird_days == 7000
    assert kpis.fcr == pytest.approx(770.0 / (6300 * 0.06))
    assert kpis.hen_day_production == pytest.approx(0.9)


def test_window_filters_old_and_foreign_logs(make_flock, egg_log, feed_log, today):
    flock = make_flock(flock_id="F1", population=1000)
    eggs = [
        egg_log(7, 700),                  # on the cutoff: kept
        egg_log(8, 10_000),               # too old
        egg_log(1, 800, flock_id="F9"),   # not an active layer
    ]
    feed = [feed_log(7, 50.0), feed_log(30, 999.0), feed_log(2, 80.0, flock_id="F9")]

    kpis = compute_weekly_kpis([flock], eggs, feed, today)

    assert kpis.eggs_sum == 700
    assert kpis.feed_sum_kg == pytest.approx(50.0)


def test_custom_window_and_egg_mass(make_flock, week_of_logs, today):
    eggs, feed = week_of_logs
    kpis = compute_weekly_kpis(
        [make_flock(population=1000)], eggs, feed, today, window_days=3, egg_mass_kg=0.065
    )

    assert kpis.eggs_sum == 900 * 4
    assert kpis.bird_days == 3000
    assert kpis.fcr == pytest.approx(440.0 / (3600 * 0.065))


def test_no_flocks_gives_no_data(week_of_logs, today):
    eggs, feed = week_of_logs
    kpis = compute_weekly_kpis([], eggs, feed, today)

    assert kpis.fcr is None
    assert kpis.hen_day_production is None


def test_zero_eggs_gives_undefined_fcr(make_flock, feed_log, today):
    kpis = compute_weekly_kpis([make_flock()], [], [feed_log(1, 100.0)], today)

    assert kpis.fcr is None
    assert kpis.hen_day_production == 0.0


def test_zero_population_gives_undefined_hen_day(make_flock, week_of_logs, today):
    eggs, feed = week_of_logs
    kpis = compute_weekly_kpis([make_flock(population=0)], eggs, feed, today)

    assert kpis.hen_day_production is None
    assert kpis.fcr is not None and math.isfinite(kpis.fcr)


def test_laying_rate_today(make_flock, egg_log, today):
    flocks = [make_flock("A", population=600), make_flock("B", population=400)]
    logs = [egg_log(0, 500, "A"), egg_log(0, 300, "B"), egg_log(0, 50, "B"), egg_log(1, 999, "A")]

    assert laying_rate_today(flocks, logs, today) == pytest.approx(850 / 1000)
    assert laying_rate_today([], logs, today) is None


def test_daily_production_trend(make_flock, week_of_logs, today):
    eggs, _ = week_of_logs
    flock = make_flock(population=1000, age_days=210)

    trend = daily_production_trend([flock], eggs, today, days=7)

    assert len(trend) == 7
    assert trend[0].date == today - timedelta(days=6)
    assert trend[-1].date == today
    assert [t.total_good for t in trend] == [900] * 7
    assert [t.damaged for t in trend] == [6, 5, 4, 3, 2, 1, 0]
    assert all(t.production_rate == pytest.approx(0.9) for t in trend)
    assert all(t.standard_rate == pytest.approx(0.95) for t in trend)


def test_trend_standard_rate_is_population_weighted(make_flock, today):
    young = make_flock("Y", population=1000, age_days=19 * 7)   # 0.05 today
    prime = make_flock("P", population=3000, age_days=30 * 7)   # 0.95 today

    trend = daily_production_trend([young, prime], [], today, days=1)

    assert len(trend) == 1
    assert trend[0].total_good == 0
    assert trend[0].production_rate == 0.0
    assert trend[0].standard_rate == pytest.approx((1000 * 0.05 + 3000 * 0.95) / 4000)


def test_trend_without_population(today):
    trend = daily_production_trend([], [], today, days=3)
    assert [t.production_rate for t in trend] == [None, None, None]
    assert [t.standard_rate for t in trend] == [None, None, None]
