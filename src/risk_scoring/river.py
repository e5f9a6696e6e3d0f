"""
River Discharge Analysis

Rates today's river flow against its historical median for the same day.
"""

import logging
from datetime import date
from typing import List, NamedTuple, Optional

from .models import FloodSeries

logger = logging.getLogger(__name__)

# (ratio threshold, anomaly points), checked from the most severe down
ANOMALY_BANDS = (
    (4.0, 30),  # critical upstream flow
    (2.0, 20),  # elevated
    (1.3, 10),  # slightly high
)


class RiverAnalysis(NamedTuple):
    current: Optional[float]
    median: Optional[float]
    ratio: Optional[float]
    anomaly_score: int


NO_RIVER_DATA = RiverAnalysis(current=None, median=None, ratio=None, anomaly_score=0)


def discharge_anomaly_score(ratio: float) -> int:
    """Anomaly points for a current/median discharge ratio"""
    for threshold, points in ANOMALY_BANDS:
        if ratio > threshold:
            return points
    return 0


def _item(values: Optional[List[Optional[float]]], index: int) -> Optional[float]:
    if values is None or index >= len(values):
        return None
    return values[index]


def locate_day(flood: FloodSeries, evaluation_date: date, strict: bool = False) -> Optional[int]:
    """
    Index of the flood row for ``evaluation_date``

    Rows are matched on the date prefix of their timestamp. Without a match
    the first row is used, unless ``strict`` is set, in which case None.
    """
    day = evaluation_date.isoformat()
    for index, stamp in enumerate(flood.time):
        if stamp and stamp.startswith(day):
            return index

    if strict:
        logger.info(f"No river discharge row for {day}")
        return None

    logger.warning(f"No river discharge row for {day}, falling back to first day")
    return 0


def analyze_river_discharge(
    flood: Optional[FloodSeries],
    evaluation_date: date,
    strict: bool = False,
) -> RiverAnalysis:
    """
    Current/median discharge and anomaly score for the evaluation date

    A missing series (no gauge) is the common case and yields no data and
    zero anomaly. A missing median leaves the current value recorded but
    scores no anomaly.
    """
    if flood is None or not flood.river_discharge:
        return NO_RIVER_DATA

    index = locate_day(flood, evaluation_date, strict=strict)
    if index is None:
        return NO_RIVER_DATA

    current = _item(flood.river_discharge, index)
    if current is None:
        return NO_RIVER_DATA

    median = _item(flood.river_discharge_median, index)
    if median is None or median <= 0:
        return RiverAnalysis(current=current, median=None, ratio=None, anomaly_score=0)

    ratio = current / median
    return RiverAnalysis(
        current=current,
        median=median,
        ratio=ratio,
        anomaly_score=discharge_anomaly_score(ratio),
    )
