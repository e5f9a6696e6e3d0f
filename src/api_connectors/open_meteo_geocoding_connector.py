"""
Open-Meteo Geocoding API Connector

Resolves city names to coordinates.
API Documentation: https://open-meteo.com/en/docs/geocoding-api
"""

import requests
from typing import Dict, List, Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class OpenMeteoGeocodingConnector:
    """Connector for the Open-Meteo geocoding search API"""

    BASE_URL = "https://geocoding-api.open-meteo.com/v1/search"

    def __init__(self, timeout: float = 10):
        self.session = requests.Session()
        self.timeout = timeout

    def _search(self, name: str, count: int, language: str) -> List[Dict]:
        params = {
            "name": name,
            "count": count,
            "language": language,
            "format": "json",
        }
        response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()

        return response.json().get("results") or []

    def search_cities(self, query: str, language: str = "en") -> List[Dict]:
        """
        Get up to 5 candidate locations for a partial city name

        Returns an empty list for queries shorter than 2 characters or when
        the service fails.
        """
        if not query or len(query.strip()) < 2:
            return []

        try:
            return self._search(query.strip(), count=5, language=language)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"City search error: {e}")
            return []

    def geocode_location(
        self,
        city: str,
        country: Optional[str] = None,
        language: str = "en"
    ) -> Optional[Dict]:
        """
        Resolve a city (optionally "City, Country") to a single location

        Args:
            city: City name, or "City, Country" when country is not given
            country: Country name used to pick among same-named cities
            language: Language for returned place names

        Returns:
            Location dict (name, latitude, longitude, country, ...) or None
            when nothing matches

        Raises:
            requests.exceptions.RequestException: the geocoding service failed
        """
        search_city = city.strip()
        search_country = country.strip() if country else None

        if not search_country and "," in search_city:
            parts = search_city.split(",")
            search_city = parts[0].strip()
            search_country = parts[-1].strip()

        try:
            logger.info(f"Geocoding '{search_city}' (country: {search_country})")
            results = self._search(search_city, count=10, language=language)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Geocoding error: {e}")
            raise

        if not results:
            return None

        if search_country:
            wanted = search_country.lower()
            for location in results:
                if location.get("country") and wanted in location["country"].lower():
                    return location

        return results[0]


if __name__ == "__main__":
    connector = OpenMeteoGeocodingConnector()

    for query in ["Porto Alegre", "Valencia, Venezuela", "Lisboa"]:
        location = connector.geocode_location(query, language="pt")
        if location:
            print(f"✓ {query}: {location['name']}, {location.get('country')} "
                  f"({location['latitude']}, {location['longitude']})")
        else:
            print(f"✗ {query}: not found")
