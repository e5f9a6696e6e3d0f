"""
Data models for flood risk scoring

Input series mirror the Open-Meteo hourly forecast and daily flood payloads.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """Categorical flood risk level, banded from the 0-100 score"""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"


class WeatherSeries(BaseModel):
    """
    Hourly weather samples

    Each list is indexed by hour. Lists may differ in length or be empty;
    missing values (None) are read as zero by the scorer.

    Timestamps without an explicit offset are interpreted using
    ``utc_offset_seconds`` (Open-Meteo returns local time with ``timezone=auto``).
    """

    model_config = ConfigDict(frozen=True)

    time: List[str] = Field(default_factory=list)
    precipitation: List[Optional[float]] = Field(default_factory=list)
    precipitation_probability: List[Optional[float]] = Field(default_factory=list)
    soil_moisture_0_to_1cm: List[Optional[float]] = Field(default_factory=list)
    soil_moisture_1_to_3cm: List[Optional[float]] = Field(default_factory=list)
    # Fixed offsets must stay strictly within one day
    utc_offset_seconds: int = Field(0, gt=-86400, lt=86400)

    @classmethod
    def from_open_meteo(cls, payload: Dict) -> "WeatherSeries":
        """Build from an Open-Meteo ``/v1/forecast`` response body"""
        hourly = payload.get("hourly") or {}

        return cls(
            time=hourly.get("time") or [],
            precipitation=hourly.get("precipitation") or [],
            precipitation_probability=hourly.get("precipitation_probability") or [],
            soil_moisture_0_to_1cm=hourly.get("soil_moisture_0_to_1cm") or [],
            soil_moisture_1_to_3cm=hourly.get("soil_moisture_1_to_3cm") or [],
            utc_offset_seconds=payload.get("utc_offset_seconds") or 0,
        )


class FloodSeries(BaseModel):
    """
    Daily river discharge samples (m³/s)

    ``None`` discharge means the gauge reported nothing for that day, which is
    not the same as zero flow.
    """

    model_config = ConfigDict(frozen=True)

    time: List[str] = Field(default_factory=list)
    river_discharge: List[Optional[float]] = Field(default_factory=list)
    river_discharge_median: Optional[List[Optional[float]]] = None
    river_discharge_mean: Optional[List[Optional[float]]] = None

    @classmethod
    def from_open_meteo(cls, payload: Dict) -> Optional["FloodSeries"]:
        """
        Build from an Open-Meteo ``/v1/flood`` response body

        Returns None when the payload carries no discharge data (no gauge
        near the location).
        """
        daily = payload.get("daily")
        if not daily or not daily.get("river_discharge"):
            return None

        return cls(
            time=daily.get("time") or [],
            river_discharge=daily["river_discharge"],
            river_discharge_median=daily.get("river_discharge_median"),
            river_discharge_mean=daily.get("river_discharge_mean"),
        )


class ScoreContribution(BaseModel):
    """One named additive term of the raw score"""

    model_config = ConfigDict(frozen=True)

    name: str
    points: float


class RiskAnalysis(BaseModel):
    """Result of a single flood risk evaluation"""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    level: RiskLevel
    recent_precip_total: float
    forecast_precip_24h: float
    forecast_precip_72h: float
    forecast_precip_7d: float
    max_precip_prob: float
    current_soil_saturation: float
    river_discharge_current: Optional[float] = None
    river_discharge_median: Optional[float] = None
    factors: List[str]
    recommendations: List[str]
    contributions: List[ScoreContribution] = Field(default_factory=list)
    language: str = "en"
