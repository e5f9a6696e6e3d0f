"""
Risk Scoring Module

Estimate flood risk from weather and river discharge telemetry.
"""

from .chart import build_discharge_chart_data, build_rain_chart_data
from .localization import SUPPORTED_LANGUAGES, get_recommendations, level_label
from .models import FloodSeries, RiskAnalysis, RiskLevel, ScoreContribution, WeatherSeries
from .risk_scorer import RiskScorer, classify_risk_level

__all__ = [
    "RiskScorer",
    "RiskAnalysis",
    "RiskLevel",
    "ScoreContribution",
    "WeatherSeries",
    "FloodSeries",
    "SUPPORTED_LANGUAGES",
    "build_discharge_chart_data",
    "build_rain_chart_data",
    "classify_risk_level",
    "get_recommendations",
    "level_label",
]
