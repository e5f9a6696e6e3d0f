"""
Chart data for the presentation layer

Observed vs. forecast hourly precipitation around the current hour, and
daily river discharge against its historical median.
"""

from datetime import datetime
from typing import List, Optional

import pandas as pd

from .alignment import as_array, find_pivot, parse_timestamps, to_utc_timestamp
from .localization import chart_text, weekday_abbreviation
from .models import FloodSeries, WeatherSeries

CHART_COLUMNS = ["label", "timestamp", "precipitation", "is_forecast"]


def build_rain_chart_data(
    weather: WeatherSeries,
    now: Optional[datetime] = None,
    language: str = "en",
    hours_back: int = 48,
    hours_ahead: int = 168
) -> pd.DataFrame:
    """
    Hourly precipitation from ``hours_back`` before the pivot to
    ``hours_ahead`` after it

    Returns:
        DataFrame with columns label, timestamp, precipitation, is_forecast.
        ``label`` is "Now" at the pivot, a short weekday at local noon,
        otherwise empty. Timestamps are in the series' local offset.
    """
    timestamps = parse_timestamps(weather.time, weather.utc_offset_seconds)
    if len(timestamps) == 0:
        return pd.DataFrame(columns=CHART_COLUMNS)

    pivot = find_pivot(timestamps, to_utc_timestamp(now))
    precipitation = as_array(weather.precipitation)
    local_times = timestamps + pd.Timedelta(seconds=weather.utc_offset_seconds)

    records = []
    for i in range(max(0, pivot - hours_back), min(len(timestamps), pivot + hours_ahead)):
        local_time = local_times[i]

        if i == pivot:
            label = chart_text("now", language)
        elif not pd.isna(local_time) and local_time.hour == 12:
            label = weekday_abbreviation(local_time.weekday(), language)
        else:
            label = ""

        records.append({
            "label": label,
            "timestamp": local_time.tz_localize(None) if not pd.isna(local_time) else pd.NaT,
            "precipitation": float(precipitation[i]) if i < len(precipitation) else 0.0,
            "is_forecast": i >= pivot,
        })

    return pd.DataFrame(records, columns=CHART_COLUMNS)


DISCHARGE_COLUMNS = ["date", "discharge", "median"]


def _fit(values: Optional[List[Optional[float]]], length: int) -> List[Optional[float]]:
    values = list(values or [])[:length]
    return values + [None] * (length - len(values))


def build_discharge_chart_data(flood: Optional[FloodSeries]) -> pd.DataFrame:
    """
    Daily river discharge and historical median, one row per flood date

    Value lists shorter than ``flood.time`` are padded with None and longer
    ones trimmed. Unparseable dates become NaT.
    """
    if flood is None or not flood.time:
        return pd.DataFrame(columns=DISCHARGE_COLUMNS)

    length = len(flood.time)
    return pd.DataFrame({
        "date": pd.to_datetime(pd.Series(flood.time, dtype=object), errors="coerce"),
        "discharge": pd.Series(_fit(flood.river_discharge, length), dtype=float),
        "median": pd.Series(_fit(flood.river_discharge_median, length), dtype=float),
    }, columns=DISCHARGE_COLUMNS)
