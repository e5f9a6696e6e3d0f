"""
Risk Scoring Module

Calculates a 0-100 flood risk score for a location from hourly weather and
daily river discharge telemetry.
"""

import math
import numpy as np
import pandas as pd
from typing import List, Optional
from datetime import datetime, timedelta, timezone
import logging

from .alignment import WeatherMetrics, extract_weather_metrics, to_utc_timestamp
from .localization import (
    BLUE_SKY,
    HEAVY_RAIN_24H,
    HEAVY_RAIN_PAST,
    INTENSE,
    LOW_PROBABILITY,
    RAIN_7D,
    RIVER_HIGH,
    SATURATED,
    STABLE,
    format_factor,
    get_recommendations,
    normalize_language,
)
from .models import FloodSeries, RiskAnalysis, RiskLevel, ScoreContribution, WeatherSeries
from .river import RiverAnalysis, analyze_river_discharge

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Volumetric soil moisture at which most soils are close to saturation
SOIL_SATURATION_REFERENCE = 0.45

DRY_WEATHER_RAIN_LIMIT = 5.0
DRY_WEATHER_MIN_ANOMALY = 20
DRY_WEATHER_FLOOR = 60.0

LOW_CONFIDENCE_PROBABILITY = 30.0
LOW_CONFIDENCE_FACTOR = 0.6


def apply_dry_weather_floor(score: float, forecast_24h: float, anomaly_score: int) -> float:
    """
    Raise the score to at least 60 when rivers run high under dry local skies

    Upstream flooding should be flagged even when no rain is expected here.
    """
    if is_dry_weather_flood(forecast_24h, anomaly_score):
        return max(score, DRY_WEATHER_FLOOR)
    return score


def apply_low_confidence_dampener(
    score: float,
    max_precip_prob: float,
    forecast_24h: float,
    anomaly_score: int
) -> float:
    """Scale the whole running score by 0.6 for unlikely rain with no river signal"""
    if is_low_confidence(max_precip_prob, forecast_24h, anomaly_score):
        return score * LOW_CONFIDENCE_FACTOR
    return score


def is_dry_weather_flood(forecast_24h: float, anomaly_score: int) -> bool:
    return forecast_24h < DRY_WEATHER_RAIN_LIMIT and anomaly_score >= DRY_WEATHER_MIN_ANOMALY


def is_low_confidence(max_precip_prob: float, forecast_24h: float, anomaly_score: int) -> bool:
    return (
        max_precip_prob < LOW_CONFIDENCE_PROBABILITY
        and forecast_24h > 0
        and anomaly_score == 0
    )


def finalize_score(raw_score: float) -> int:
    """Clamp to 0-100, then round half up (NaN scores 0)"""
    if math.isnan(raw_score):
        return 0
    bounded = min(max(raw_score, 0.0), 100.0)
    return int(math.floor(bounded + 0.5))


def classify_risk_level(score: float) -> RiskLevel:
    """Band a final score into a risk level (25/50/75 upper bounds)"""
    if score <= 25:
        return RiskLevel.LOW
    elif score <= 50:
        return RiskLevel.MODERATE
    elif score <= 75:
        return RiskLevel.HIGH
    else:
        return RiskLevel.CRITICAL


class RiskScorer:
    """Calculate flood risk scores from weather and river discharge series"""

    def __init__(self, strict_flood_date: bool = False):
        """
        Initialize risk scorer

        Args:
            strict_flood_date: Require a flood row for the evaluation date.
                When False, the first row is used if today's is missing.
        """
        self.strict_flood_date = strict_flood_date

    def calculate_flood_risk(
        self,
        weather: WeatherSeries,
        flood: Optional[FloodSeries] = None,
        language: str = "en",
        now: Optional[datetime] = None
    ) -> RiskAnalysis:
        """
        Calculate the flood risk analysis for a location

        Args:
            weather: Hourly series, nominally 7 days back to 7 days ahead
            flood: Daily river discharge series, None when there is no gauge
            language: Language for factors and recommendations
            now: Evaluation instant (defaults to current UTC time)

        Returns:
            RiskAnalysis with score 0-100 (higher = more risk)
        """
        language = normalize_language(language)
        evaluated_at = to_utc_timestamp(now)

        metrics = extract_weather_metrics(weather, evaluated_at)
        river = analyze_river_discharge(
            flood, evaluated_at.date(), strict=self.strict_flood_date
        )

        contributions = self.compose_contributions(metrics, river)
        raw_score = sum(c.points for c in contributions)

        # Floor first, then dampen: the dampener scales the whole running total
        raw_score = apply_dry_weather_floor(
            raw_score, metrics.forecast_precip_24h, river.anomaly_score
        )
        raw_score = apply_low_confidence_dampener(
            raw_score, metrics.max_precip_prob, metrics.forecast_precip_24h, river.anomaly_score
        )

        score = finalize_score(raw_score)
        level = classify_risk_level(score)

        logger.debug(
            f"Flood risk {score} ({level.value}) at pivot {metrics.pivot}, "
            f"river anomaly {river.anomaly_score}"
        )

        return RiskAnalysis(
            score=score,
            level=level,
            recent_precip_total=metrics.recent_precip_total,
            forecast_precip_24h=metrics.forecast_precip_24h,
            forecast_precip_72h=metrics.forecast_precip_72h,
            forecast_precip_7d=metrics.forecast_precip_7d,
            max_precip_prob=metrics.max_precip_prob,
            current_soil_saturation=metrics.soil_saturation,
            river_discharge_current=river.current,
            river_discharge_median=river.median,
            factors=self.describe_factors(metrics, river, language),
            recommendations=get_recommendations(level, language),
            contributions=contributions,
            language=language,
        )

    @staticmethod
    def compose_contributions(
        metrics: WeatherMetrics,
        river: RiverAnalysis
    ) -> List[ScoreContribution]:
        """
        Additive score terms, in evaluation order

        The four weighted terms are always present; the flat bonuses only
        when triggered.
        """
        contributions = [
            # Unbounded above 25 when saturation passes the reference point
            ScoreContribution(
                name="soil",
                points=(metrics.soil_saturation / SOIL_SATURATION_REFERENCE) * 25,
            ),
            ScoreContribution(
                name="rain_history",
                points=min(metrics.recent_precip_total, 100) * 0.1,
            ),
            ScoreContribution(
                name="immediate_threat",
                points=min(metrics.forecast_precip_24h * 2, 100) * 0.45,
            ),
            ScoreContribution(
                name="extended_threat",
                points=min(metrics.forecast_precip_72h, 100) * 0.2,
            ),
        ]

        if metrics.forecast_precip_7d > 100:
            contributions.append(ScoreContribution(name="seven_day_bonus", points=5))

        if river.anomaly_score > 0:
            contributions.append(
                ScoreContribution(name="river_anomaly", points=river.anomaly_score)
            )

        if metrics.max_hourly_intensity > 10:
            contributions.append(ScoreContribution(name="intensity_penalty", points=10))

        return contributions

    @staticmethod
    def describe_factors(
        metrics: WeatherMetrics,
        river: RiverAnalysis,
        language: str = "en"
    ) -> List[str]:
        """Human-readable sentences for every rule that fired (never empty)"""
        factors = []

        if metrics.soil_saturation > 0.4:
            factors.append(format_factor(
                SATURATED, language, saturation_pct=metrics.soil_saturation * 100
            ))
        elif metrics.recent_precip_total > 50:
            factors.append(format_factor(
                HEAVY_RAIN_PAST, language, recent_mm=metrics.recent_precip_total
            ))

        if metrics.forecast_precip_24h > 20:
            factors.append(format_factor(
                HEAVY_RAIN_24H, language, forecast_24h_mm=metrics.forecast_precip_24h
            ))

        if metrics.forecast_precip_7d > 100:
            factors.append(format_factor(
                RAIN_7D, language, forecast_7d_mm=metrics.forecast_precip_7d
            ))

        if river.anomaly_score > 0:
            factors.append(format_factor(RIVER_HIGH, language, discharge=river.current))

        if metrics.max_hourly_intensity > 10:
            factors.append(format_factor(INTENSE, language))

        if is_dry_weather_flood(metrics.forecast_precip_24h, river.anomaly_score):
            factors.append(format_factor(BLUE_SKY, language))

        if is_low_confidence(
            metrics.max_precip_prob, metrics.forecast_precip_24h, river.anomaly_score
        ):
            factors.append(format_factor(LOW_PROBABILITY, language))

        if not factors:
            factors.append(format_factor(STABLE, language))

        return factors


if __name__ == "__main__":
    # Test the risk scorer
    print("\n" + "="*60)
    print("FLOOD RISK SCORING TEST")
    print("="*60 + "\n")

    scorer = RiskScorer()
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)

    # 7 days back, 7 days ahead
    hours = pd.date_range(end=now - timedelta(hours=1), periods=168, freq="h").append(
        pd.date_range(start=now, periods=168, freq="h")
    )
    rng = np.random.default_rng(42)

    weather = WeatherSeries(
        time=[h.strftime("%Y-%m-%dT%H:%M") for h in hours],
        precipitation=rng.exponential(0.4, len(hours)).round(1).tolist(),
        precipitation_probability=rng.uniform(0, 80, len(hours)).round().tolist(),
        soil_moisture_0_to_1cm=rng.uniform(0.25, 0.40, len(hours)).tolist(),
        soil_moisture_1_to_3cm=rng.uniform(0.25, 0.40, len(hours)).tolist(),
    )

    days = pd.date_range(end=now, periods=4, freq="D").append(
        pd.date_range(start=now + timedelta(days=1), periods=6, freq="D")
    )
    flood = FloodSeries(
        time=[d.strftime("%Y-%m-%d") for d in days],
        river_discharge=[310.0] * len(days),
        river_discharge_median=[120.0] * len(days),
    )

    for lang in ("en", "pt"):
        analysis = scorer.calculate_flood_risk(weather, flood, language=lang, now=now)

        print(f"Language: {lang}")
        print(f"  Score:              {analysis.score}/100")
        print(f"  Level:              {analysis.level.value}")
        print(f"  Next 24h:           {analysis.forecast_precip_24h:.1f} mm")
        print(f"  Soil saturation:    {analysis.current_soil_saturation:.2f}")
        print(f"  River discharge:    {analysis.river_discharge_current} m³/s")
        for factor in analysis.factors:
            print(f"  - {factor}")
        print()

    print("="*60)
    print("TEST COMPLETE")
    print("="*60)
