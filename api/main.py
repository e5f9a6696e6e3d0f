"""
FastAPI REST API for the Flood Risk Platform

Provides RESTful endpoints for flood risk assessment queries.
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
import requests
import sys
import os

# Add project root and src directory to path
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT_DIR)
sys.path.append(os.path.join(ROOT_DIR, "src"))

from api.config import get_settings
from api_connectors import (
    OpenMeteoGeocodingConnector,
    OpenMeteoWeatherConnector,
    OpenMeteoFloodConnector,
)
from risk_scoring import (
    FloodSeries,
    RiskAnalysis,
    RiskLevel,
    RiskScorer,
    WeatherSeries,
    get_recommendations,
    level_label,
)

settings = get_settings()

logging.basicConfig(level=settings.log_level, format=settings.log_format, force=True)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Flood risk assessment from weather and river discharge telemetry",
    version=settings.app_version
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize connectors
geocoding_connector = OpenMeteoGeocodingConnector(timeout=settings.request_timeout)
weather_connector = OpenMeteoWeatherConnector(timeout=settings.request_timeout)
flood_connector = OpenMeteoFloodConnector(timeout=settings.request_timeout)
risk_scorer = RiskScorer(strict_flood_date=settings.strict_flood_date)


# Pydantic models
class LocationInput(BaseModel):
    city: Optional[str] = Field(None, description="City name, or 'City, Country'")
    country: Optional[str] = Field(None, description="Country used to disambiguate the city")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude (-90 to 90)")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude (-180 to 180)")
    language: Optional[str] = Field(None, description="Output language (en, pt, es)")


class AnalyzeInput(BaseModel):
    weather: WeatherSeries
    flood: Optional[FloodSeries] = None
    language: Optional[str] = None
    evaluated_at: Optional[datetime] = None


class FloodRiskResponse(BaseModel):
    location: Dict[str, Any]
    analysis: RiskAnalysis
    level_label: str
    timestamp: datetime
    data_sources: Dict[str, int]


def _language(requested: Optional[str]) -> str:
    return requested or settings.default_language


# API Endpoints

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "health": "/health",
            "city_search": "/api/v1/geocode/search",
            "risk_assessment": "/api/v1/risk/location",
            "risk_analysis": "/api/v1/risk/analyze",
            "recommendations": "/api/v1/recommendations/{level}"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "open_meteo_geocoding": "operational",
            "open_meteo_forecast": "operational",
            "open_meteo_flood": "operational"
        }
    }


@app.get("/api/v1/geocode/search")
async def search_cities(
    name: str = Query(..., min_length=1),
    language: Optional[str] = Query(None)
):
    """Get candidate locations for a city name"""
    results = geocoding_connector.search_cities(name, language=_language(language))
    return {"count": len(results), "results": results}


@app.post("/api/v1/risk/location", response_model=FloodRiskResponse)
async def assess_location_risk(location: LocationInput):
    """
    Assess flood risk for a city or a coordinate pair

    Fetches hourly weather and river discharge, then scores them.
    """
    language = _language(location.language)

    try:
        if location.latitude is not None and location.longitude is not None:
            place = {
                "name": location.city or f"{location.latitude}, {location.longitude}",
                "country": location.country,
                "latitude": location.latitude,
                "longitude": location.longitude,
            }
        elif location.city:
            try:
                place = geocoding_connector.geocode_location(
                    location.city, location.country, language=language
                )
            except requests.exceptions.RequestException as e:
                raise HTTPException(status_code=502, detail=f"Geocoding service unavailable: {e}")

            if place is None:
                raise HTTPException(status_code=404, detail=f"Could not find location '{location.city}'")
        else:
            raise HTTPException(status_code=400, detail="Must provide either city or latitude/longitude")

        weather = weather_connector.get_hourly_weather(
            place["latitude"],
            place["longitude"],
            past_days=settings.weather_past_days,
            forecast_days=settings.weather_forecast_days
        )

        if weather is None:
            raise HTTPException(status_code=502, detail="Weather data service unavailable")

        # No gauge near the location is normal, scoring goes ahead without it
        flood = flood_connector.get_river_discharge(
            place["latitude"],
            place["longitude"],
            past_days=settings.flood_past_days,
            forecast_days=settings.flood_forecast_days
        )

        analysis = risk_scorer.calculate_flood_risk(weather, flood, language=language)

        logger.info(f"Flood risk for {place.get('name')}: {analysis.score} ({analysis.level.value})")

        return FloodRiskResponse(
            location=place,
            analysis=analysis,
            level_label=level_label(analysis.level, analysis.language),
            timestamp=datetime.now(),
            data_sources={
                "hourly_samples": len(weather.time),
                "daily_discharge_samples": len(flood.time) if flood else 0
            }
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error assessing flood risk")
        raise HTTPException(status_code=500, detail=f"Error assessing risk: {str(e)}")


@app.post("/api/v1/risk/analyze", response_model=RiskAnalysis)
async def analyze_series(payload: AnalyzeInput):
    """Score caller-supplied weather and river discharge series"""
    try:
        return risk_scorer.calculate_flood_risk(
            payload.weather,
            payload.flood,
            language=_language(payload.language),
            now=payload.evaluated_at
        )
    except Exception as e:
        logger.exception("Error analyzing series")
        raise HTTPException(status_code=500, detail=f"Error analyzing series: {str(e)}")


@app.get("/api/v1/recommendations/{level}")
async def get_level_recommendations(
    level: RiskLevel,
    language: Optional[str] = Query(None)
) -> Dict[str, Any]:
    """Get the preparedness checklist for a risk level"""
    recommendations: List[str] = get_recommendations(level, _language(language))
    return {
        "level": level.value,
        "label": level_label(level, _language(language)),
        "recommendations": recommendations
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
