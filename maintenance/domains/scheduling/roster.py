"""Run-scoped working copy of technician capacity."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, replace

from maintenance.config import SchedulingConfig
from maintenance.utils.types import Technician

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TechnicianUpdate:
    """Workload change for one technician, for the caller to persist."""

    technician_id: str
    previous_workload: float
    current_workload: float
    is_available: bool
    assigned_minutes: int


class TechnicianRoster:
    """Technician state for a single scheduling run.

    The roster copies the technician records it is given and never touches
    the originals. The available pool is fixed at construction to technicians
    that are available and below the workload limit; a technician leaves the
    pool once an assignment pushes their workload above the limit.
    """

    def __init__(self, technicians: Iterable[Technician], config: SchedulingConfig | None = None):
        self.config = config or SchedulingConfig()
        self._initial: dict[str, Technician] = {}
        for tech in technicians:
            if tech.id in self._initial:
                logger.warning("Duplicate technician id %s, keeping the first record", tech.id)
                continue
            self._initial[tech.id] = tech

        self._current = dict(self._initial)
        self._pool = [
            tech_id for tech_id, tech in self._initial.items()
            if tech.is_available and tech.current_workload < self.config.workload_limit
        ]
        self._assigned_minutes: dict[str, int] = defaultdict(int)

    def available(self) -> list[Technician]:
        """Technicians still open for assignment, in pool order."""
        return [self._current[tech_id] for tech_id in self._pool]

    def get(self, technician_id: str) -> Technician:
        return self._current[technician_id]

    def workload_increase(self, minutes: int | float) -> float:
        """Share of one working day, as a percentage."""
        return (minutes / self.config.workday_minutes) * 100

    def record_assignment(self, technician_id: str, minutes: int | float) -> Technician:
        """Add a task's duration to a technician's workload."""
        tech = self._current[technician_id]
        workload = tech.current_workload + self.workload_increase(minutes)
        updated = replace(tech, current_workload=workload)

        if workload > self.config.workload_limit:
            updated = replace(updated, is_available=False)
            self._pool.remove(technician_id)
            logger.debug("Technician %s at %.1f%% workload, removed from pool", technician_id, workload)

        self._current[technician_id] = updated
        self._assigned_minutes[technician_id] += minutes
        return updated

    def technicians(self) -> list[Technician]:
        """Current state of every technician on the roster."""
        return list(self._current.values())

    def updates(self) -> list[TechnicianUpdate]:
        """One update per technician that received work in this run."""
        return [
            TechnicianUpdate(
                technician_id=tech_id,
                previous_workload=self._initial[tech_id].current_workload,
                current_workload=self._current[tech_id].current_workload,
                is_available=self._current[tech_id].is_available,
                assigned_minutes=minutes,
            )
            for tech_id, minutes in self._assigned_minutes.items()
        ]
