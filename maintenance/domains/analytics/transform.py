"""Normalize persisted tasks and maintenance logs for aggregation."""

import logging

import pandas as pd

from maintenance.utils.transforms import normalize_columns
from maintenance.utils.types import RiskAnalysis, RiskLevel, TaskStatus

logger = logging.getLogger(__name__)

PREDICTIVE_LOG_TYPE = "predictive_analysis"

TASK_COLUMN_MAP: dict[str, str] = {
    "asset_id": "equipment_id",
    "estimated_minutes": "estimated_duration",
    "actual_minutes": "actual_duration",
    "completed_at": "completed_date",
}

LOG_COLUMN_MAP: dict[str, str] = {
    "asset_id": "equipment_id",
    "log_type": "type",
    "risk_level": "severity",
    "timestamp": "created_at",
}


def map_priority(raw: object) -> str:
    """Map ticketing-style priority labels onto the four risk tiers."""
    if not isinstance(raw, str):
        return RiskLevel.MEDIUM
    match raw.strip().lower():
        case "critical" | "crit" | "p0" | "urgent" | "emergency":
            return RiskLevel.CRITICAL
        case "high" | "p1":
            return RiskLevel.HIGH
        case "medium" | "p2" | "normal":
            return RiskLevel.MEDIUM
        case "low" | "p3" | "p4":
            return RiskLevel.LOW
        case other:
            logger.warning("Unmapped priority label: %s", other)
            return RiskLevel.MEDIUM


def map_task_status(raw: object) -> str:
    if not isinstance(raw, str):
        return TaskStatus.PENDING
    match raw.strip().lower().replace("_", "-").replace(" ", "-"):
        case "pending" | "open" | "new":
            return TaskStatus.PENDING
        case "scheduled" | "assigned":
            return TaskStatus.SCHEDULED
        case "in-progress" | "started" | "active":
            return TaskStatus.IN_PROGRESS
        case "completed" | "complete" | "done" | "closed":
            return TaskStatus.COMPLETED
        case other:
            logger.warning("Unmapped task status: %s", other)
            return TaskStatus.PENDING


def _to_datetime(df: pd.DataFrame, columns: tuple[str, ...]) -> pd.DataFrame:
    for col in columns:
        if col not in df.columns:
            df[col] = pd.NaT
        df[col] = pd.to_datetime(df[col], errors="coerce")
    return df


def normalize_tasks(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Clean a persisted task window.

    Tasks without a ``created_at`` stamp keep NaT and fall outside every window.
    """
    df = normalize_columns(raw_df, TASK_COLUMN_MAP)
    df["equipment_id"] = df["equipment_id"].astype(str).str.strip()
    for col, mapper in (("priority", map_priority), ("status", map_task_status)):
        if col not in df.columns:
            df[col] = None
        df[col] = df[col].map(mapper).astype(str)

    for col in ("estimated_duration", "actual_duration"):
        if col not in df.columns:
            df[col] = float("nan")
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df = _to_datetime(df, ("scheduled_date", "completed_date", "created_at"))
    missing = int(df["created_at"].isna().sum())
    if missing:
        logger.warning("%d tasks have no creation date", missing)
    return df.reset_index(drop=True)


def _expand_metadata(df: pd.DataFrame) -> pd.DataFrame:
    """Lift fields of a nested ``metadata.analysis`` dict into columns."""
    if "metadata" not in df.columns:
        return df
    analysis = df["metadata"].map(
        lambda m: m.get("analysis", {}) if isinstance(m, dict) else {}
    )
    df = df.drop(columns=["metadata"])
    for key, col in (
        ("equipmentName", "equipment_name"),
        ("predictedFailureInDays", "predicted_failure_in_days"),
        ("confidence", "confidence"),
        ("recommendedAction", "recommended_action"),
    ):
        if col not in df.columns:
            df[col] = analysis.map(lambda a, k=key: a.get(k))
    return df


def normalize_logs(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = normalize_columns(raw_df, LOG_COLUMN_MAP)
    df = _expand_metadata(df)
    df["equipment_id"] = df["equipment_id"].astype(str).str.strip()
    df["type"] = df["type"].astype(str).str.strip().str.lower()
    df["severity"] = df["severity"].map(map_priority).astype(str)

    for col in ("predicted_failure_in_days", "confidence"):
        if col not in df.columns:
            df[col] = float("nan")
        df[col] = pd.to_numeric(df[col], errors="coerce")

    if "equipment_name" not in df.columns:
        df["equipment_name"] = df["equipment_id"]
    df["equipment_name"] = df["equipment_name"].fillna(df["equipment_id"])

    df = _to_datetime(df, ("created_at",))
    return df.reset_index(drop=True)


def analyses_to_logs(analyses: list[RiskAnalysis]) -> pd.DataFrame:
    """Render fresh risk analyses as the log rows a store would persist."""
    rows = [{
        "equipment_id": a.equipment_id,
        "equipment_name": a.equipment_name,
        "type": PREDICTIVE_LOG_TYPE,
        "severity": str(a.risk_level),
        "description": a.recommended_action,
        "predicted_failure_in_days": a.predicted_failure_in_days,
        "confidence": a.confidence,
        "created_at": a.last_analysis,
    } for a in analyses]
    columns = ["equipment_id", "equipment_name", "type", "severity", "description",
               "predicted_failure_in_days", "confidence", "created_at"]
    df = pd.DataFrame(rows, columns=columns)
    df["created_at"] = pd.to_datetime(df["created_at"])
    return df
