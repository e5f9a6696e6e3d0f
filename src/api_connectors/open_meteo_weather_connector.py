"""
Open-Meteo Weather API Connector

Fetches hourly precipitation and soil moisture from the Open-Meteo forecast API.
API Documentation: https://open-meteo.com/en/docs
"""

import requests
from pydantic import ValidationError
from typing import Optional
import logging

from risk_scoring.models import WeatherSeries

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class OpenMeteoWeatherConnector:
    """Connector for the Open-Meteo hourly forecast API"""

    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    HOURLY_VARIABLES = [
        "temperature_2m",
        "precipitation",
        "precipitation_probability",
        "soil_moisture_0_to_1cm",
        "soil_moisture_1_to_3cm",
    ]

    def __init__(self, timeout: float = 30):
        self.session = requests.Session()
        self.timeout = timeout

    def get_forecast(
        self,
        latitude: float,
        longitude: float,
        past_days: int = 7,
        forecast_days: int = 7
    ) -> Optional[dict]:
        """
        Get the raw hourly forecast payload for a location

        Returns None if the request fails.
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": ",".join(self.HOURLY_VARIABLES),
            "past_days": past_days,
            "forecast_days": forecast_days,
            "timezone": "auto",
        }

        try:
            logger.info(f"Fetching hourly weather for ({latitude}, {longitude})")
            response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Error fetching weather data: {e}")
            return None

    def get_hourly_weather(
        self,
        latitude: float,
        longitude: float,
        past_days: int = 7,
        forecast_days: int = 7
    ) -> Optional[WeatherSeries]:
        """
        Get hourly weather series for flood risk scoring

        Args:
            latitude: Location latitude
            longitude: Location longitude
            past_days: Days of observed history to include
            forecast_days: Days of forecast to include

        Returns:
            WeatherSeries, or None if the weather service is unavailable
        """
        payload = self.get_forecast(latitude, longitude, past_days, forecast_days)

        if not payload:
            return None

        try:
            series = WeatherSeries.from_open_meteo(payload)
        except ValidationError as e:
            logger.error(f"Malformed weather payload: {e}")
            return None

        logger.info(f"Retrieved {len(series.time)} hourly weather samples")
        return series


if __name__ == "__main__":
    # Test the connector
    print("\n" + "="*60)
    print("OPEN-METEO WEATHER CONNECTOR TEST")
    print("="*60 + "\n")

    connector = OpenMeteoWeatherConnector()

    print("Fetching hourly weather for Porto Alegre, BR...")
    weather = connector.get_hourly_weather(-30.0331, -51.23)

    if weather:
        print(f"\n✓ Retrieved {len(weather.time)} hourly samples")
        print(f"  First: {weather.time[0]}")
        print(f"  Last:  {weather.time[-1]}")
        print(f"  Total precipitation: {sum(p or 0 for p in weather.precipitation):.1f} mm")
    else:
        print("✗ Could not retrieve weather data")

    print("\n" + "="*60)
    print("TEST COMPLETE")
    print("="*60)
