"""Turn risk analyses into draft maintenance tasks."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from maintenance.config import SchedulingConfig
from maintenance.utils.types import (
    Equipment,
    InventoryItem,
    MaintenanceTask,
    Priority,
    RiskAnalysis,
    RiskLevel,
    TaskStatus,
)

logger = logging.getLogger(__name__)


def first_clause(action: str) -> str:
    """Text of a recommended action up to its first full stop."""
    return action.split(".")[0]


def describe_task(analysis: RiskAnalysis, equipment: Equipment | None = None) -> str:
    base = f"Predictive maintenance for {analysis.equipment_name}"
    if equipment is not None:
        return f"{base} ({equipment.type}) - {first_clause(analysis.recommended_action)}"
    return f"{base} - {first_clause(analysis.recommended_action)}"


def map_risk_to_priority(risk_level: RiskLevel | str) -> Priority:
    match str(risk_level):
        case "critical" | "high" | "medium" | "low" as level:
            return Priority(level)
        case _:
            return Priority.MEDIUM


def estimate_duration(
    analysis: RiskAnalysis,
    equipment: Equipment | None = None,
    config: SchedulingConfig | None = None,
) -> int:
    """Minutes of work: a risk-based base plus an equipment criticality overhead."""
    config = config or SchedulingConfig()
    duration = config.base_durations.get(str(analysis.risk_level), config.default_duration)

    if equipment is not None:
        duration += config.criticality_overheads.get(str(equipment.criticality), 0)

    return duration


def determine_required_parts(
    equipment: Equipment | None,
    inventory: Iterable[InventoryItem],
    config: SchedulingConfig | None = None,
) -> tuple[str, ...]:
    """Catalog parts for the equipment type that are actually in stock.

    A part is in stock when some inventory item with a positive quantity
    contains the part name (case-insensitive). Parts not in stock are
    dropped; there is no fallback to the full catalog list.
    """
    if equipment is None:
        return ()

    config = config or SchedulingConfig()
    candidates = config.parts_catalog.get(equipment.type.lower(), [])
    stocked = [item.name.lower() for item in inventory if item.quantity > 0]

    return tuple(
        part for part in candidates
        if any(part.lower() in name for name in stocked)
    )


def build_task(
    analysis: RiskAnalysis,
    equipment: Equipment | None = None,
    inventory: Sequence[InventoryItem] = (),
    now: datetime | None = None,
    config: SchedulingConfig | None = None,
) -> MaintenanceTask | None:
    """Draft a pending, unassigned task; low-risk analyses produce nothing."""
    if analysis.risk_level == RiskLevel.LOW:
        return None

    now = now or datetime.now()
    if equipment is None:
        logger.warning(
            "No equipment record for %s, skipping type-specific parts and duration",
            analysis.equipment_id,
        )

    return MaintenanceTask(
        equipment_id=analysis.equipment_id,
        equipment_name=analysis.equipment_name,
        description=describe_task(analysis, equipment),
        priority=map_risk_to_priority(analysis.risk_level),
        status=TaskStatus.PENDING,
        assigned_to="",
        estimated_duration=estimate_duration(analysis, equipment, config),
        scheduled_date=now,
        predicted_failure_in_days=analysis.predicted_failure_in_days,
        required_parts=determine_required_parts(equipment, inventory, config),
        notes=analysis.recommended_action,
        created_at=now,
    )


def build_tasks(
    analyses: Iterable[RiskAnalysis],
    equipment_registry: Mapping[str, Equipment],
    inventory: Sequence[InventoryItem] = (),
    now: datetime | None = None,
    config: SchedulingConfig | None = None,
) -> list[MaintenanceTask]:
    """Draft a task for every analysis that is not low risk, in input order."""
    drafts = []
    for analysis in analyses:
        task = build_task(
            analysis,
            equipment_registry.get(analysis.equipment_id),
            inventory,
            now=now,
            config=config,
        )
        if task is not None:
            drafts.append(task)
    return drafts
