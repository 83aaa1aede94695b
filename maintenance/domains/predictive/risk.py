"""Classify equipment failure risk from a batch of sensor readings."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from maintenance.config import RiskThresholds
from maintenance.utils.types import ReadingStatus, RiskAnalysis, RiskLevel, SensorReading

logger = logging.getLogger(__name__)

NEXT_ANALYSIS_INTERVAL = timedelta(hours=24)


@dataclass(frozen=True)
class RiskProfile:
    risk_level: RiskLevel
    predicted_failure_in_days: int
    confidence: float


def _outside_band(reading: SensorReading, band: float) -> bool:
    """True when the value sits more than ``band`` beyond either range limit."""
    return (
        reading.value < reading.normal_min * (1 - band)
        or reading.value > reading.normal_max * (1 + band)
    )


def partition_readings(
    readings: Sequence[SensorReading],
    thresholds: RiskThresholds | None = None,
) -> tuple[list[SensorReading], list[SensorReading]]:
    """Split readings into disjoint critical and warning buckets.

    A reading that qualifies as critical is never counted as a warning as
    well. Input order is kept within each bucket.
    """
    thresholds = thresholds or RiskThresholds()
    critical: list[SensorReading] = []
    warning: list[SensorReading] = []

    for reading in readings:
        if reading.status == ReadingStatus.CRITICAL or _outside_band(reading, thresholds.critical_band):
            critical.append(reading)
        # warnings stop at the critical band; the high tier counts only these
        elif reading.status == ReadingStatus.WARNING or _outside_band(reading, thresholds.warning_band):
            warning.append(reading)

    return critical, warning


def classify_risk(critical_count: int, warning_count: int) -> RiskProfile:
    """Map anomaly counts to a risk level, failure window and confidence."""
    match (critical_count, warning_count):
        case (c, _) if c >= 2:
            return RiskProfile(RiskLevel.CRITICAL, max(1, 7 - c), 0.95)
        case (c, w) if c >= 1 or w >= 3:
            return RiskProfile(RiskLevel.HIGH, max(7, 30 - w), 0.88)
        case (_, w) if w >= 1:
            return RiskProfile(RiskLevel.MEDIUM, 45, 0.82)
        case _:
            return RiskProfile(RiskLevel.LOW, 90, 0.85)


def _distinct_types(readings: Sequence[SensorReading]) -> str:
    types = list(dict.fromkeys(r.type for r in readings))
    return ", ".join(types) if types else "none"


def recommend_action(
    risk_level: RiskLevel,
    critical: Sequence[SensorReading],
    warning: Sequence[SensorReading],
) -> str:
    match risk_level:
        case RiskLevel.CRITICAL:
            return (
                f"IMMEDIATE MAINTENANCE REQUIRED: Critical issues with {_distinct_types(critical)}. "
                "Shut down equipment if safe."
            )
        case RiskLevel.HIGH:
            return (
                "Schedule maintenance within 48 hours. "
                f"Critical: {_distinct_types(critical)}, Warnings: {_distinct_types(warning)}"
            )
        case RiskLevel.MEDIUM:
            return f"Plan maintenance within 2 weeks. Warning issues: {_distinct_types(warning)}"
        case _:
            return "Monitor equipment. All readings within normal range."


def analyze(
    readings: Sequence[SensorReading],
    equipment_id: str,
    equipment_name: str | None = None,
    now: datetime | None = None,
    thresholds: RiskThresholds | None = None,
) -> RiskAnalysis:
    """Produce a risk analysis for one equipment unit.

    An empty reading list is a valid input and yields a low-risk analysis
    with no contributing factors.
    """
    now = now or datetime.now()
    critical, warning = partition_readings(readings, thresholds)
    profile = classify_risk(len(critical), len(warning))

    factors = (
        [f"Critical {r.type} reading" for r in critical]
        + [f"Warning {r.type} reading" for r in warning]
    )

    logger.debug(
        "Equipment %s: %d critical, %d warning readings -> %s",
        equipment_id, len(critical), len(warning), profile.risk_level,
    )

    return RiskAnalysis(
        equipment_id=equipment_id,
        equipment_name=equipment_name or f"Equipment {equipment_id}",
        risk_level=profile.risk_level,
        predicted_failure_in_days=profile.predicted_failure_in_days,
        confidence=profile.confidence,
        recommended_action=recommend_action(profile.risk_level, critical, warning),
        contributing_factors=tuple(factors),
        last_analysis=now,
        next_analysis=now + NEXT_ANALYSIS_INTERVAL,
    )
