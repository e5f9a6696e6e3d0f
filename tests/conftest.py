"""
Pytest configuration and shared fixtures for flood risk tests.

Series are built around a fixed evaluation instant so every test is
deterministic: 168 observed hours before NOW and 168 forecast hours from NOW,
so the pivot is always index 168.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from risk_scoring import FloodSeries, RiskScorer, WeatherSeries

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
PAST_HOURS = 168
FUTURE_HOURS = 168


def hourly_times(start: datetime, hours: int):
    return [(start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]


def _fill(values, length):
    if isinstance(values, (int, float)):
        return [float(values)] * length
    values = list(values)
    return values + [0.0] * (length - len(values))


def make_weather(
    past_precip=0.0,
    future_precip=0.0,
    probability=0.0,
    soil=0.0,
):
    """
    Weather series around NOW

    ``past_precip`` / ``future_precip`` are either one value for every hour
    or a list of leading hourly values (the rest zero).
    """
    total = PAST_HOURS + FUTURE_HOURS
    return WeatherSeries(
        time=hourly_times(NOW - timedelta(hours=PAST_HOURS), total),
        precipitation=_fill(past_precip, PAST_HOURS) + _fill(future_precip, FUTURE_HOURS),
        precipitation_probability=[float(probability)] * total,
        soil_moisture_0_to_1cm=[float(soil)] * total,
        soil_moisture_1_to_3cm=[float(soil)] * total,
    )


def make_flood(current, median, day=None):
    """Daily flood series with a constant discharge over a week containing ``day``"""
    day = day or NOW.date()
    days = [day + timedelta(days=offset) for offset in range(-3, 4)]
    return FloodSeries(
        time=[d.isoformat() for d in days],
        river_discharge=[current] * len(days),
        river_discharge_median=[median] * len(days),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def weather_factory():
    return make_weather


@pytest.fixture
def flood_factory():
    return make_flood


@pytest.fixture
def scorer():
    return RiskScorer()
