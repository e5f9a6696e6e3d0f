"""Tests for rain and river discharge chart data preparation."""

from risk_scoring import (
    FloodSeries,
    WeatherSeries,
    build_discharge_chart_data,
    build_rain_chart_data,
)

from .conftest import NOW


def test_chart_spans_two_days_back_and_seven_ahead(weather_factory):
    chart = build_rain_chart_data(weather_factory(future_precip=[3.0]), now=NOW)

    # Pivot 168: rows 120..335
    assert len(chart) == 216
    assert chart["is_forecast"].sum() == 168
    assert list(chart.columns) == ["label", "timestamp", "precipitation", "is_forecast"]


def test_now_label_and_forecast_flag(weather_factory):
    chart = build_rain_chart_data(weather_factory(future_precip=[3.0]), now=NOW)
    now_row = chart.iloc[48]

    assert now_row["label"] == "Now"
    assert now_row["precipitation"] == 3.0
    assert bool(now_row["is_forecast"])
    assert not bool(chart.iloc[47]["is_forecast"])


def test_noon_rows_carry_localized_weekday(weather_factory):
    chart = build_rain_chart_data(weather_factory(), now=NOW, language="pt")

    # NOW is noon on Monday 2026-10-19; the next noon is Tuesday
    assert chart.iloc[48]["label"] == "Agora"
    assert chart.iloc[72]["label"] == "ter"
    assert chart.iloc[73]["label"] == ""


def test_empty_series_gives_empty_frame():
    chart = build_rain_chart_data(WeatherSeries(), now=NOW)

    assert chart.empty
    assert list(chart.columns) == ["label", "timestamp", "precipitation", "is_forecast"]


def test_discharge_frame_follows_flood_dates(flood_factory):
    chart = build_discharge_chart_data(flood_factory(current=300.0, median=100.0))

    assert list(chart.columns) == ["date", "discharge", "median"]
    assert len(chart) == 7
    assert chart["discharge"].tolist() == [300.0] * 7
    assert chart["median"].tolist() == [100.0] * 7


def test_ragged_discharge_lists_are_fitted_to_dates():
    flood = FloodSeries(
        time=["2026-10-18", "2026-10-19", "2026-10-20"],
        river_discharge=[120.0, 130.0, 140.0, 150.0],
        river_discharge_median=[80.0],
    )

    chart = build_discharge_chart_data(flood)

    assert len(chart) == 3
    assert chart["discharge"].tolist() == [120.0, 130.0, 140.0]
    assert chart["median"].iloc[0] == 80.0
    assert chart["median"].iloc[1:].isna().all()


def test_missing_median_gives_empty_column():
    flood = FloodSeries(time=["2026-10-19", "2026-10-20"], river_discharge=[120.0])

    chart = build_discharge_chart_data(flood)

    assert chart["discharge"].iloc[0] == 120.0
    assert chart["discharge"].iloc[1:].isna().all()
    assert chart["median"].isna().all()


def test_no_flood_series_gives_empty_discharge_frame():
    chart = build_discharge_chart_data(None)

    assert chart.empty
    assert list(chart.columns) == ["date", "discharge", "median"]
