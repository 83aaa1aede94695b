"""Threshold-driven maintenance recommendations."""

from dataclasses import asdict, dataclass

from maintenance.utils.types import Priority


@dataclass(frozen=True)
class Recommendation:
    type: str
    title: str
    description: str
    action: str
    priority: Priority

    def to_dict(self) -> dict:
        return {**asdict(self), "priority": str(self.priority)}


def generate_recommendations(
    critical: int,
    high: int,
    imminent: int,
    imminent_days: int = 7,
) -> list[Recommendation]:
    """Recommendations for the given alert counts, most urgent first.

    The list is never empty: with nothing to report it holds a single
    "status normal" entry.
    """
    recommendations = []

    if critical > 0:
        recommendations.append(Recommendation(
            type="critical",
            title="Immediate Action Required",
            description=f"{critical} equipment items at critical risk level",
            action="Schedule emergency maintenance immediately",
            priority=Priority.CRITICAL,
        ))

    if high > 0:
        recommendations.append(Recommendation(
            type="high",
            title="High Priority Maintenance",
            description=f"{high} equipment items at high risk level",
            action="Schedule maintenance within 48 hours",
            priority=Priority.HIGH,
        ))

    if imminent > 0:
        recommendations.append(Recommendation(
            type="imminent",
            title="Imminent Failures",
            description=f"{imminent} equipment items predicted to fail within {imminent_days} days",
            action="Prioritize maintenance scheduling",
            priority=Priority.HIGH,
        ))

    if not recommendations:
        recommendations.append(Recommendation(
            type="monitor",
            title="Maintenance Status Normal",
            description="All equipment operating within normal parameters",
            action="Continue routine monitoring",
            priority=Priority.LOW,
        ))

    return recommendations
