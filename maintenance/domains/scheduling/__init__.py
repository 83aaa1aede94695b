"""Scheduling domain: turn risk analyses into assigned maintenance tasks."""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from maintenance.config import SchedulingConfig, ScoringWeights
from maintenance.domains.scheduling.ingest import fetch_equipment, fetch_inventory, fetch_technicians
from maintenance.domains.scheduling.transform import (
    equipment_from_frame,
    inventory_from_frame,
    normalize_equipment,
    normalize_inventory,
    normalize_technicians,
    technicians_from_frame,
)
from maintenance.domains.scheduling.models import (
    EquipmentSchema,
    InventorySchema,
    ScheduledTaskSchema,
    TechnicianSchema,
)
from maintenance.domains.scheduling.tasks import build_task, build_tasks
from maintenance.domains.scheduling.scoring import score_technician
from maintenance.domains.scheduling.scheduler import SchedulingResult, schedule
from maintenance.utils.types import RiskAnalysis, analyses_to_frame
from maintenance.utils.validators import validate_referential_integrity

logger = logging.getLogger(__name__)


def validate(source: str = "technicians", data_dir: Path | None = None) -> dict:
    """Validate scheduling directories before pipeline execution."""
    try:
        match source:
            case "technicians":
                raw = fetch_technicians(data_dir)
                TechnicianSchema.validate(normalize_technicians(raw))
            case "equipment":
                raw = fetch_equipment(data_dir)
                EquipmentSchema.validate(normalize_equipment(raw))
            case "inventory":
                raw = fetch_inventory(data_dir)
                InventorySchema.validate(normalize_inventory(raw))
            case unknown:
                return {"status": "error", "message": f"Unknown source: {unknown}"}
        return {"status": "ok", "row_count": len(raw)}
    except FileNotFoundError as exc:
        return {"status": "error", "message": str(exc)}
    except Exception as exc:
        return {"status": "error", "message": f"Validation failed: {exc}"}


def run(
    analyses: list[RiskAnalysis],
    technicians: pd.DataFrame | None = None,
    equipment: pd.DataFrame | None = None,
    inventory: pd.DataFrame | None = None,
    data_dir: Path | None = None,
    now: datetime | None = None,
    config: SchedulingConfig | None = None,
    weights: ScoringWeights | None = None,
) -> dict:
    """Execute a scheduling run for the given analyses."""
    tech_df = normalize_technicians(technicians if technicians is not None else fetch_technicians(data_dir))
    equipment_df = normalize_equipment(equipment if equipment is not None else fetch_equipment(data_dir))
    inventory_df = normalize_inventory(inventory if inventory is not None else fetch_inventory(data_dir))

    TechnicianSchema.validate(tech_df)
    EquipmentSchema.validate(equipment_df)
    InventorySchema.validate(inventory_df)

    integrity = validate_referential_integrity(
        analyses_to_frame(analyses), equipment_df, "equipment_id", "id",
    )
    if not integrity["valid"]:
        logger.warning("Analyses reference unknown equipment: %s", ", ".join(integrity["unknown"]))

    result = schedule(
        analyses,
        technicians_from_frame(tech_df),
        equipment_from_frame(equipment_df),
        inventory_from_frame(inventory_df),
        now=now,
        config=config,
        weights=weights,
    )

    scheduled = result.scheduled_frame()
    if not scheduled.empty:
        ScheduledTaskSchema.validate(scheduled)

    return {
        "result": result,
        "scheduled": scheduled,
        "unscheduled": result.unscheduled_frame(),
        "technician_updates": result.updates_frame(),
        "conflicts": result.conflicts,
        "equipment": equipment_df,
    }
