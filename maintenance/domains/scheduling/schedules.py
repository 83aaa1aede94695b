"""Per-technician schedule summaries built from a run's assignments."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from maintenance.domains.scheduling.scoring import has_matching_skills
from maintenance.utils.types import Equipment, MaintenanceTask, Technician


@dataclass(frozen=True)
class TechnicianSchedule:
    technician_id: str
    technician_name: str
    tasks: tuple[MaintenanceTask, ...]
    date: datetime
    total_hours: float
    efficiency: float


def _skill_share(
    technician: Technician,
    tasks: Sequence[MaintenanceTask],
    equipment_registry: Mapping[str, Equipment],
) -> float:
    """Fraction of tasks on equipment the technician has skills for."""
    matches = 0
    for task in tasks:
        equipment = equipment_registry.get(task.equipment_id)
        if equipment is not None and has_matching_skills(technician, equipment):
            matches += 1
    return matches / len(tasks)


def schedule_efficiency(
    technician: Technician,
    tasks: Sequence[MaintenanceTask],
    equipment_registry: Mapping[str, Equipment],
) -> float:
    if not tasks:
        return 100.0
    workload_factor = max(0.5, 1 - technician.current_workload / 200)
    return min(100.0, _skill_share(technician, tasks, equipment_registry) * workload_factor * 100)


def build_technician_schedules(
    assignments: Mapping[str, Sequence[MaintenanceTask]],
    technicians: Sequence[Technician],
    equipment_registry: Mapping[str, Equipment],
    date: datetime,
) -> list[TechnicianSchedule]:
    by_id = {t.id: t for t in technicians}
    schedules = []

    for technician_id, tasks in assignments.items():
        technician = by_id.get(technician_id)
        if technician is None:
            continue
        schedules.append(TechnicianSchedule(
            technician_id=technician.id,
            technician_name=technician.name,
            tasks=tuple(tasks),
            date=date,
            total_hours=sum(t.estimated_duration for t in tasks) / 60,
            efficiency=schedule_efficiency(technician, tasks, equipment_registry),
        ))

    return schedules
