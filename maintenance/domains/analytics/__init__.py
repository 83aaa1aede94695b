"""Analytics domain: dashboard metrics over persisted tasks and maintenance logs."""

from datetime import datetime
from pathlib import Path

import pandas as pd

from maintenance.config import AnalyticsConfig
from maintenance.domains.analytics.ingest import (
    fetch_maintenance_logs,
    fetch_task_history,
    select_window,
)
from maintenance.domains.analytics.transform import analyses_to_logs, normalize_logs, normalize_tasks
from maintenance.domains.analytics.metrics import aggregate, completion_trends
from maintenance.domains.analytics.insights import Recommendation, generate_recommendations
from maintenance.domains.analytics.overview import build_equipment_overview
from maintenance.domains.analytics.models import LogWindowSchema, TaskWindowSchema


def validate(source: str = "tasks", data_dir: Path | None = None) -> dict:
    """Validate the task and log stores before pipeline execution."""
    try:
        match source:
            case "tasks":
                raw = fetch_task_history(data_dir)
                TaskWindowSchema.validate(normalize_tasks(raw))
            case "logs":
                raw = fetch_maintenance_logs(data_dir)
                LogWindowSchema.validate(normalize_logs(raw))
            case unknown:
                return {"status": "error", "message": f"Unknown source: {unknown}"}
        return {"status": "ok", "row_count": len(raw)}
    except FileNotFoundError as exc:
        return {"status": "error", "message": str(exc)}
    except Exception as exc:
        return {"status": "error", "message": f"Validation failed: {exc}"}


def run(
    tasks: pd.DataFrame | None = None,
    logs: pd.DataFrame | None = None,
    equipment: pd.DataFrame | None = None,
    period: str | None = None,
    as_of: datetime | None = None,
    data_dir: Path | None = None,
    config: AnalyticsConfig | None = None,
) -> dict:
    """Aggregate the task and log windows for ``period`` ending at ``as_of``."""
    as_of = as_of or datetime.now()
    task_df = normalize_tasks(tasks if tasks is not None else fetch_task_history(data_dir))
    log_df = normalize_logs(logs if logs is not None else fetch_maintenance_logs(data_dir))
    TaskWindowSchema.validate(task_df)
    LogWindowSchema.validate(log_df)

    task_window = select_window(task_df, period, as_of, "created_at", config)
    log_window = select_window(log_df, period, as_of, "created_at", config)

    output = {
        "summary": aggregate(task_window, log_window, config),
        "completion_trends": completion_trends(task_window),
        "task_window": task_window,
        "log_window": log_window,
    }
    if equipment is not None:
        output["overview"] = build_equipment_overview(equipment, task_window, log_window, as_of, config)
    return output
