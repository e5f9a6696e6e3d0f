"""
Time Alignment

Locates the "now" pivot inside an hourly series and extracts the
precipitation, probability and soil moisture windows around it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from .models import WeatherSeries

logger = logging.getLogger(__name__)

PAST_WINDOW_HOURS = 168
FORECAST_24H = 24
FORECAST_72H = 72
FORECAST_7D = 168


class WeatherMetrics(NamedTuple):
    """Aggregates derived from the hourly series around the pivot"""

    pivot: int
    recent_precip_total: float
    forecast_precip_24h: float
    forecast_precip_72h: float
    forecast_precip_7d: float
    max_hourly_intensity: float
    max_precip_prob: float
    soil_saturation: float


def to_utc_timestamp(value: Optional[datetime]) -> pd.Timestamp:
    """Normalize an evaluation instant to a UTC pandas Timestamp (naive = UTC)"""
    if value is None:
        return pd.Timestamp.now(tz="UTC")

    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def parse_timestamps(times: Sequence[str], utc_offset_seconds: int = 0) -> pd.DatetimeIndex:
    """
    Parse ISO-8601 strings into a UTC DatetimeIndex

    Naive timestamps are placed in the fixed ``utc_offset_seconds`` zone.
    Anything unparseable becomes NaT rather than raising.
    """
    local_tz = timezone(timedelta(seconds=utc_offset_seconds))
    stamps = []

    for value in times:
        try:
            stamp = pd.Timestamp(value)
        except (TypeError, ValueError):
            stamps.append(pd.NaT)
            continue

        if pd.isna(stamp):
            stamps.append(pd.NaT)
        elif stamp.tzinfo is None:
            stamps.append(stamp.tz_localize(local_tz).tz_convert("UTC"))
        else:
            stamps.append(stamp.tz_convert("UTC"))

    return pd.DatetimeIndex(stamps, tz="UTC")


def find_pivot(timestamps: pd.DatetimeIndex, now: pd.Timestamp) -> int:
    """
    Index of the first sample at or after ``now``

    Falls back to the last index when every sample is in the past, and to 0
    for an empty series.
    """
    hits = np.flatnonzero(np.asarray(timestamps >= now))
    if len(hits) > 0:
        return int(hits[0])

    if len(timestamps) > 0:
        logger.debug(f"No sample at or after {now}, using last index")
        return len(timestamps) - 1
    return 0


def as_array(values: Sequence[Optional[float]]) -> np.ndarray:
    """Float array with None/NaN read as 0"""
    array = np.array(
        [0.0 if v is None else float(v) for v in values],
        dtype=float,
    )
    return np.nan_to_num(array, nan=0.0)


def _value_at(values: np.ndarray, index: int) -> float:
    if index < 0 or index >= len(values):
        return 0.0
    return float(values[index])


def _window_max(window: np.ndarray) -> float:
    # Empty windows read as 0, not -inf
    return float(window.max()) if len(window) > 0 else 0.0


def soil_saturation_at(weather: WeatherSeries, pivot: int) -> float:
    """Mean of the two soil moisture layers at the pivot (clamped to layer A)"""
    layer_a = as_array(weather.soil_moisture_0_to_1cm)
    layer_b = as_array(weather.soil_moisture_1_to_3cm)

    index = min(pivot, len(layer_a) - 1)
    return (_value_at(layer_a, index) + _value_at(layer_b, index)) / 2


def extract_weather_metrics(weather: WeatherSeries, now: pd.Timestamp) -> WeatherMetrics:
    """
    Derive all precipitation and soil aggregates for one evaluation instant

    Windows sliced past the end of the series are simply shorter.
    """
    timestamps = parse_timestamps(weather.time, weather.utc_offset_seconds)
    pivot = find_pivot(timestamps, now)

    precipitation = as_array(weather.precipitation)
    probability = as_array(weather.precipitation_probability)

    past = precipitation[max(0, pivot - PAST_WINDOW_HOURS):pivot]
    next_24h = precipitation[pivot:pivot + FORECAST_24H]
    next_72h = precipitation[pivot:pivot + FORECAST_72H]
    next_7d = precipitation[pivot:pivot + FORECAST_7D]
    next_72h_prob = probability[pivot:pivot + FORECAST_72H]

    return WeatherMetrics(
        pivot=pivot,
        recent_precip_total=float(past.sum()),
        forecast_precip_24h=float(next_24h.sum()),
        forecast_precip_72h=float(next_72h.sum()),
        forecast_precip_7d=float(next_7d.sum()),
        max_hourly_intensity=_window_max(next_72h),
        max_precip_prob=_window_max(next_72h_prob),
        soil_saturation=soil_saturation_at(weather, pivot),
    )
