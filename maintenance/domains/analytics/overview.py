"""Equipment overview: fleet counts, open work per unit and recent critical alerts."""

from datetime import datetime, timedelta

import pandas as pd

from maintenance.config import AnalyticsConfig

OPEN_STATUSES = ["pending", "scheduled", "in-progress"]
RECENT_ALERT_LIMIT = 10


def recent_critical_alerts(
    log_window: pd.DataFrame,
    as_of: datetime,
    hours: int = 24,
) -> pd.DataFrame:
    """Critical log entries in the ``hours`` before ``as_of``, newest first."""
    if log_window.empty:
        return log_window.iloc[0:0]
    as_of = pd.Timestamp(as_of)
    start = as_of - timedelta(hours=hours)
    mask = (
        (log_window["severity"] == "critical")
        & (log_window["created_at"] >= start)
        & (log_window["created_at"] <= as_of)
    )
    alerts = log_window[mask].sort_values("created_at", ascending=False, kind="stable")
    return alerts.head(RECENT_ALERT_LIMIT).reset_index(drop=True)


def open_tasks_per_equipment(equipment: pd.DataFrame, task_window: pd.DataFrame) -> pd.Series:
    if task_window.empty:
        return pd.Series(0, index=equipment["id"], dtype=int)
    open_tasks = task_window[task_window["status"].isin(OPEN_STATUSES)]
    counts = open_tasks.groupby("equipment_id").size()
    return counts.reindex(equipment["id"], fill_value=0).astype(int)


def build_equipment_overview(
    equipment: pd.DataFrame,
    task_window: pd.DataFrame,
    log_window: pd.DataFrame,
    as_of: datetime | None = None,
    config: AnalyticsConfig | None = None,
) -> dict:
    config = config or AnalyticsConfig()
    as_of = as_of or datetime.now()

    status = equipment["status"] if "status" in equipment.columns else pd.Series("", index=equipment.index)
    critical_equipment = int(((status == "critical") | (equipment["criticality"] == "critical")).sum())

    task_status = task_window["status"] if not task_window.empty else pd.Series(dtype=str)
    alerts = recent_critical_alerts(log_window, as_of, config.critical_alert_hours)

    per_equipment = equipment.copy()
    per_equipment["pending_tasks"] = open_tasks_per_equipment(equipment, task_window).to_numpy()

    return {
        "overview": {
            "total_equipment": len(equipment),
            "critical_equipment": critical_equipment,
            "pending_tasks": int((task_status == "pending").sum()),
            "completed_tasks": int((task_status == "completed").sum()),
            "critical_alerts": len(alerts),
        },
        "equipment": per_equipment,
        "recent_alerts": alerts,
    }
