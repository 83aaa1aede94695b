"""Technician suitability scoring for a single task."""

from maintenance.config import ScoringWeights
from maintenance.utils.types import Equipment, MaintenanceTask, Priority, Technician


def has_matching_skills(technician: Technician, equipment: Equipment) -> bool:
    """A skill matches when it contains the equipment type or vice versa."""
    equipment_type = equipment.type.lower()
    return any(
        skill.lower() in equipment_type or equipment_type in skill.lower()
        for skill in technician.skills
    )


def score_technician(
    technician: Technician,
    task: MaintenanceTask,
    equipment: Equipment | None = None,
    weights: ScoringWeights | None = None,
) -> float:
    """Score how well a technician fits a task.

    Unavailable technicians score 0. Otherwise the score is the sum of an
    availability base, a workload term that shrinks as workload grows
    (floored at 0), a skill-match bonus and a bonus for critical tasks.
    Only a score above 0 makes a technician usable.
    """
    weights = weights or ScoringWeights()
    if not technician.is_available:
        return 0.0

    score = weights.availability
    score += max(0.0, weights.workload_ceiling - technician.current_workload * weights.workload_factor)

    if equipment is not None and has_matching_skills(technician, equipment):
        score += weights.skill_match

    if task.priority == Priority.CRITICAL:
        score += weights.critical_priority

    return score
