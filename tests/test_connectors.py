"""Tests for the Open-Meteo connectors with a mocked HTTP session."""

from unittest.mock import Mock

import pytest
import requests

from api_connectors import (
    OpenMeteoFloodConnector,
    OpenMeteoGeocodingConnector,
    OpenMeteoWeatherConnector,
)
from risk_scoring import FloodSeries, WeatherSeries


def mock_session(payload=None, error=None):
    session = Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        response = Mock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        session.get.return_value = response
    return session


WEATHER_PAYLOAD = {
    "utc_offset_seconds": -10800,
    "hourly": {
        "time": ["2026-10-19T08:00", "2026-10-19T09:00"],
        "temperature_2m": [18.2, 19.0],
        "precipitation": [0.0, 1.4],
        "precipitation_probability": [10, 55],
        "soil_moisture_0_to_1cm": [0.31, 0.33],
        "soil_moisture_1_to_3cm": [0.30, None],
    },
}

FLOOD_PAYLOAD = {
    "daily": {
        "time": ["2026-10-18", "2026-10-19"],
        "river_discharge": [120.5, None],
        "river_discharge_median": [80.0, 81.0],
    },
}

GEOCODING_RESULTS = [
    {"id": 1, "name": "Valencia", "latitude": 39.47, "longitude": -0.38, "country": "Spain"},
    {"id": 2, "name": "Valencia", "latitude": 10.16, "longitude": -68.0, "country": "Venezuela"},
]


class TestWeatherConnector:

    def test_returns_weather_series(self):
        connector = OpenMeteoWeatherConnector()
        connector.session = mock_session(WEATHER_PAYLOAD)

        weather = connector.get_hourly_weather(-30.03, -51.23)

        assert isinstance(weather, WeatherSeries)
        assert weather.utc_offset_seconds == -10800
        assert weather.precipitation == [0.0, 1.4]
        assert weather.soil_moisture_1_to_3cm == [0.30, None]

    def test_requests_hourly_variables_and_window(self):
        connector = OpenMeteoWeatherConnector(timeout=5)
        connector.session = mock_session(WEATHER_PAYLOAD)

        connector.get_hourly_weather(-30.03, -51.23, past_days=7, forecast_days=7)

        args, kwargs = connector.session.get.call_args
        assert args[0] == OpenMeteoWeatherConnector.BASE_URL
        assert kwargs["timeout"] == 5
        params = kwargs["params"]
        assert params["past_days"] == 7
        assert params["forecast_days"] == 7
        assert params["timezone"] == "auto"
        assert "soil_moisture_1_to_3cm" in params["hourly"].split(",")

    def test_service_failure_returns_none(self):
        connector = OpenMeteoWeatherConnector()
        connector.session = mock_session(error=requests.exceptions.ConnectionError("down"))

        assert connector.get_hourly_weather(0.0, 0.0) is None

    def test_missing_hourly_block_gives_empty_series(self):
        connector = OpenMeteoWeatherConnector()
        connector.session = mock_session({"utc_offset_seconds": 0})

        weather = connector.get_hourly_weather(0.0, 0.0)

        assert weather.time == []
        assert weather.precipitation == []

    def test_out_of_range_offset_returns_none(self):
        connector = OpenMeteoWeatherConnector()
        connector.session = mock_session(dict(WEATHER_PAYLOAD, utc_offset_seconds=90000))

        assert connector.get_hourly_weather(0.0, 0.0) is None


class TestFloodConnector:

    def test_returns_flood_series(self):
        connector = OpenMeteoFloodConnector()
        connector.session = mock_session(FLOOD_PAYLOAD)

        flood = connector.get_river_discharge(-30.03, -51.23)

        assert isinstance(flood, FloodSeries)
        assert flood.river_discharge == [120.5, None]
        assert flood.river_discharge_median == [80.0, 81.0]

    def test_no_gauge_returns_none(self):
        connector = OpenMeteoFloodConnector()
        connector.session = mock_session({"daily": {"time": [], "river_discharge": []}})

        assert connector.get_river_discharge(0.0, 0.0) is None

    def test_missing_daily_block_returns_none(self):
        connector = OpenMeteoFloodConnector()
        connector.session = mock_session({"error": True, "reason": "No data"})

        assert connector.get_river_discharge(0.0, 0.0) is None

    def test_http_error_returns_none(self):
        connector = OpenMeteoFloodConnector()
        connector.session = mock_session(FLOOD_PAYLOAD)
        connector.session.get.return_value.raise_for_status.side_effect = \
            requests.exceptions.HTTPError("400 Client Error")

        assert connector.get_river_discharge(0.0, 0.0) is None


class TestGeocodingConnector:

    def test_short_query_skips_request(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"results": GEOCODING_RESULTS})

        assert connector.search_cities(" v ") == []
        connector.session.get.assert_not_called()

    def test_search_cities(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"results": GEOCODING_RESULTS})

        results = connector.search_cities("Valen", language="pt")

        assert len(results) == 2
        params = connector.session.get.call_args.kwargs["params"]
        assert params["count"] == 5
        assert params["language"] == "pt"

    def test_search_failure_returns_empty(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session(error=requests.exceptions.Timeout("slow"))

        assert connector.search_cities("Valencia") == []

    def test_geocode_prefers_requested_country(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"results": GEOCODING_RESULTS})

        location = connector.geocode_location("Valencia", "venez")

        assert location["country"] == "Venezuela"

    def test_geocode_splits_city_and_country(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"results": GEOCODING_RESULTS})

        location = connector.geocode_location("Valencia, Venezuela")

        assert location["id"] == 2
        params = connector.session.get.call_args.kwargs["params"]
        assert params["name"] == "Valencia"
        assert params["count"] == 10

    def test_geocode_falls_back_to_first_result(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"results": GEOCODING_RESULTS})

        assert connector.geocode_location("Valencia", "Chile")["id"] == 1

    def test_geocode_not_found(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session({"generationtime_ms": 0.5})

        assert connector.geocode_location("Nowhereville") is None

    def test_geocode_failure_is_raised(self):
        connector = OpenMeteoGeocodingConnector()
        connector.session = mock_session(error=requests.exceptions.ConnectionError("down"))

        with pytest.raises(requests.exceptions.RequestException):
            connector.geocode_location("Valencia")
