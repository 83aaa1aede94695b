"""Fleet-level summary of a batch of risk analyses."""

import logging
from collections.abc import Sequence

from maintenance.utils.types import RISK_ORDER, ReadingStatus, RiskAnalysis, RiskLevel

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 7


def overall_risk(analyses: Sequence[RiskAnalysis]) -> RiskLevel:
    """The most severe risk level present; low for an empty fleet."""
    if not analyses:
        return RiskLevel.LOW
    return max((a.risk_level for a in analyses), key=lambda level: RISK_ORDER[str(level)])


def _fleet_recommendations(analyses: Sequence[RiskAnalysis]) -> list[str]:
    recommendations = []
    critical = [a for a in analyses if a.risk_level == RiskLevel.CRITICAL]
    high = [a for a in analyses if a.risk_level == RiskLevel.HIGH]

    if critical:
        names = ", ".join(a.equipment_name for a in critical)
        recommendations.append(f"Take {names} out of service for immediate inspection")
    if high:
        recommendations.append(f"Schedule maintenance within 48 hours for {len(high)} equipment items")
    if not recommendations:
        recommendations.append("Continue routine monitoring")
    return recommendations


def build_fleet_report(
    analyses: Sequence[RiskAnalysis],
    upcoming_days: int = UPCOMING_WINDOW_DAYS,
) -> dict:
    """Summarize analyses into critical, upcoming and overall risk views."""
    critical = [
        a for a in analyses
        if a.status == ReadingStatus.CRITICAL or a.risk_level == RiskLevel.CRITICAL
    ]
    upcoming = [
        a for a in analyses
        if a.predicted_failure_in_days <= upcoming_days and a.status != ReadingStatus.CRITICAL
    ]
    risk = overall_risk(analyses)

    logger.info(
        "Fleet report: %d analyses, %d critical, %d upcoming, overall %s",
        len(analyses), len(critical), len(upcoming), risk,
    )
    return {
        "critical_equipment": critical,
        "upcoming_maintenance": upcoming,
        "recommendations": _fleet_recommendations(analyses),
        "overall_risk": risk,
    }
