"""
API Connectors for the Flood Risk Platform

This package contains connectors for the Open-Meteo data sources:
- Geocoding: city name to coordinates
- Forecast: hourly precipitation and soil moisture
- Flood: daily river discharge (GloFAS)
"""

from .open_meteo_geocoding_connector import OpenMeteoGeocodingConnector
from .open_meteo_weather_connector import OpenMeteoWeatherConnector
from .open_meteo_flood_connector import OpenMeteoFloodConnector

__all__ = [
    "OpenMeteoGeocodingConnector",
    "OpenMeteoWeatherConnector",
    "OpenMeteoFloodConnector",
]
