"""Normalize raw sensor feeds and convert rows into reading records."""

import logging

import pandas as pd

from maintenance.utils.transforms import normalize_columns
from maintenance.utils.types import ReadingStatus, SensorReading

logger = logging.getLogger(__name__)

# Column names used by older gateway exports
LEGACY_COLUMN_MAP: dict[str, str] = {
    "sensor_type": "type",
    "reading": "value",
    "min": "normal_min",
    "max": "normal_max",
    "range_min": "normal_min",
    "range_max": "normal_max",
    "asset_id": "equipment_id",
}


def _map_status(raw_status: object) -> str:
    """Map varied gateway status labels to the canonical reading statuses."""
    if not isinstance(raw_status, str):
        return ReadingStatus.NORMAL
    match raw_status.strip().lower():
        case "normal" | "ok" | "green" | "":
            return ReadingStatus.NORMAL
        case "warning" | "warn" | "amber" | "yellow":
            return ReadingStatus.WARNING
        case "critical" | "crit" | "alarm" | "red":
            return ReadingStatus.CRITICAL
        case other:
            logger.warning("Unmapped reading status: %s", other)
            return ReadingStatus.NORMAL


def _expand_normal_range(df: pd.DataFrame) -> pd.DataFrame:
    """Split a nested ``normal_range`` {min, max} column into two columns."""
    if "normal_range" not in df.columns:
        return df
    ranges = df["normal_range"].apply(lambda r: r if isinstance(r, dict) else {})
    df = df.drop(columns=["normal_range"])
    for col, key in (("normal_min", "min"), ("normal_max", "max")):
        nested = ranges.map(lambda r, k=key: r.get(k))
        # rows from flat exports already carry the limits
        df[col] = df[col].fillna(nested) if col in df.columns else nested
    return df


def normalize_readings(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Clean and standardize a raw sensor reading feed."""
    df = normalize_columns(raw_df)
    df = df.rename(columns={k: v for k, v in LEGACY_COLUMN_MAP.items() if k in df.columns})
    df = _expand_normal_range(df)

    if "status" not in df.columns:
        df["status"] = ReadingStatus.NORMAL
    df["status"] = df["status"].map(_map_status).astype(str)

    for col in ("value", "normal_min", "normal_max"):
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # a reading without a value or range can't be classified
    before = len(df)
    df = df.dropna(subset=["value", "normal_min", "normal_max"])
    if len(df) < before:
        logger.warning("Dropped %d readings with missing value or range", before - len(df))

    df["equipment_id"] = df["equipment_id"].astype(str).str.strip()
    df["type"] = df["type"].astype(str).str.strip().str.lower()
    if "unit" not in df.columns:
        df["unit"] = ""
    df["unit"] = df["unit"].fillna("")

    return df.reset_index(drop=True)


def readings_from_frame(df: pd.DataFrame) -> list[SensorReading]:
    """Convert normalized reading rows into ``SensorReading`` records."""
    readings = []
    for row in df.to_dict("records"):
        timestamp = row.get("timestamp")
        readings.append(SensorReading(
            type=row["type"],
            value=float(row["value"]),
            normal_min=float(row["normal_min"]),
            normal_max=float(row["normal_max"]),
            status=ReadingStatus(row["status"]),
            unit=row.get("unit") or "",
            equipment_id=row["equipment_id"],
            timestamp=timestamp.to_pydatetime() if isinstance(timestamp, pd.Timestamp) else None,
        ))
    return readings


def group_readings(df: pd.DataFrame) -> dict[str, list[SensorReading]]:
    """Group normalized readings by equipment, keeping feed order."""
    return {
        str(equipment_id): readings_from_frame(group)
        for equipment_id, group in df.groupby("equipment_id", sort=False)
    }
