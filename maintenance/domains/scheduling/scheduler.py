"""Greedy assignment of predictive maintenance tasks to technicians.

Analyses are ranked by urgency and placed one at a time, each on the
best-scoring technician still in the run's available pool. Every assignment
raises the technician's workload immediately, so later (less urgent) tasks
see the reduced capacity. There is no backtracking: once a task is
scheduled it stays scheduled, and a task nobody can take is reported as
unscheduled together with a conflict message.

The run holds no shared state. Technician records are copied into a
``TechnicianRoster`` and the resulting workload changes are handed back as
``technician_updates`` for the caller to persist. Two concurrent runs over
the same technicians will each see the original workloads, so callers must
serialize runs per department.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

import pandas as pd

from maintenance.config import SchedulingConfig, ScoringWeights
from maintenance.domains.scheduling.roster import TechnicianRoster, TechnicianUpdate
from maintenance.domains.scheduling.schedules import TechnicianSchedule, build_technician_schedules
from maintenance.domains.scheduling.scoring import score_technician
from maintenance.domains.scheduling.tasks import build_task
from maintenance.utils.types import (
    Equipment,
    InventoryItem,
    MaintenanceTask,
    RiskAnalysis,
    RiskLevel,
    TaskStatus,
    Technician,
    tasks_to_frame,
)

logger = logging.getLogger(__name__)


@dataclass
class SchedulingResult:
    scheduled_tasks: list[MaintenanceTask] = field(default_factory=list)
    unscheduled_tasks: list[MaintenanceTask] = field(default_factory=list)
    technician_assignments: dict[str, list[MaintenanceTask]] = field(default_factory=dict)
    conflicts: list[str] = field(default_factory=list)
    technician_updates: list[TechnicianUpdate] = field(default_factory=list)
    schedules: list[TechnicianSchedule] = field(default_factory=list)

    def scheduled_frame(self) -> pd.DataFrame:
        return tasks_to_frame(self.scheduled_tasks)

    def unscheduled_frame(self) -> pd.DataFrame:
        return tasks_to_frame(self.unscheduled_tasks)

    def updates_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [vars(u) for u in self.technician_updates],
            columns=["technician_id", "previous_workload", "current_workload",
                     "is_available", "assigned_minutes"],
        )


def prioritize_analyses(analyses: Iterable[RiskAnalysis]) -> list[RiskAnalysis]:
    """Drop low-risk analyses and order the rest by urgency.

    Critical analyses come first; within the critical and non-critical
    groups the sooner predicted failure comes first. The sort is stable, so
    ties keep their input order.
    """
    pending = [a for a in analyses if a.risk_level != RiskLevel.LOW]
    return sorted(
        pending,
        key=lambda a: (a.risk_level != RiskLevel.CRITICAL, a.predicted_failure_in_days),
    )


def select_technician(
    task: MaintenanceTask,
    candidates: Sequence[Technician],
    equipment: Equipment | None,
    weights: ScoringWeights | None = None,
) -> tuple[Technician | None, float]:
    """Highest-scoring candidate; the first one wins a tie.

    Returns ``(None, best_score)`` when nobody scores above zero.
    """
    best, best_score = None, 0.0
    for tech in candidates:
        score = score_technician(tech, task, equipment, weights)
        if best is None or score > best_score:
            best, best_score = tech, score

    if best is None or best_score <= 0:
        return None, best_score
    return best, best_score


def compute_schedule_date(
    technician: Technician,
    task: MaintenanceTask,
    now: datetime,
    config: SchedulingConfig | None = None,
) -> datetime:
    """Start date pushed out by whichever is larger: workload or priority delay."""
    config = config or SchedulingConfig()
    workload_delay = math.ceil(technician.current_workload / config.workload_delay_step)
    priority_delay = config.priority_delays.get(str(task.priority), config.default_priority_delay)
    return now + timedelta(days=max(workload_delay, priority_delay, 0))


def schedule(
    analyses: Iterable[RiskAnalysis],
    technicians: Iterable[Technician],
    equipment: Iterable[Equipment] = (),
    inventory: Sequence[InventoryItem] = (),
    now: datetime | None = None,
    config: SchedulingConfig | None = None,
    weights: ScoringWeights | None = None,
) -> SchedulingResult:
    """Rank, assign and date maintenance tasks for one scheduling run."""
    now = now or datetime.now()
    config = config or SchedulingConfig()
    registry = {e.id: e for e in equipment}
    roster = TechnicianRoster(technicians, config)
    result = SchedulingResult()

    for analysis in prioritize_analyses(analyses):
        eq = registry.get(analysis.equipment_id)
        task = build_task(analysis, eq, inventory, now=now, config=config)

        tech, score = select_technician(task, roster.available(), eq, weights)
        if tech is None:
            result.unscheduled_tasks.append(task)
            result.conflicts.append(f"No available technician for {task.equipment_name}")
            logger.debug("No usable technician for %s", task.equipment_id)
            continue

        assigned = replace(
            task,
            assigned_to=tech.id,
            status=TaskStatus.SCHEDULED,
            scheduled_date=compute_schedule_date(tech, task, now, config),
        )
        result.scheduled_tasks.append(assigned)
        result.technician_assignments.setdefault(tech.id, []).append(assigned)
        roster.record_assignment(tech.id, assigned.estimated_duration)

        logger.debug(
            "Assigned %s to %s (score %.1f, due %s)",
            assigned.equipment_id, tech.id, score, assigned.scheduled_date.date(),
        )

    result.technician_updates = roster.updates()
    result.schedules = build_technician_schedules(
        result.technician_assignments, roster.technicians(), registry, now,
    )

    logger.info(
        "Scheduling run: %d scheduled, %d unscheduled across %d technicians",
        len(result.scheduled_tasks), len(result.unscheduled_tasks),
        len(result.technician_assignments),
    )
    return result
