"""Normalize directory exports and convert them into scheduling records."""

import logging

import pandas as pd

from maintenance.utils.transforms import coerce_bool, normalize_columns, split_list_column
from maintenance.utils.types import Criticality, Equipment, InventoryItem, Technician

logger = logging.getLogger(__name__)

TECHNICIAN_COLUMN_MAP: dict[str, str] = {
    "technician_id": "id",
    "workload": "current_workload",
    "available": "is_available",
}

EQUIPMENT_COLUMN_MAP: dict[str, str] = {
    "equipment_id": "id",
    "equipment_type": "type",
    "equipment_name": "name",
}

INVENTORY_COLUMN_MAP: dict[str, str] = {
    "item_name": "name",
    "qty_on_hand": "quantity",
    "qty": "quantity",
}


def _map_criticality(raw: object) -> str:
    if not isinstance(raw, str):
        return Criticality.MEDIUM
    match raw.strip().lower():
        case "critical" | "crit" | "tier1" | "mission_critical":
            return Criticality.CRITICAL
        case "high" | "tier2":
            return Criticality.HIGH
        case "medium" | "normal" | "tier3":
            return Criticality.MEDIUM
        case "low" | "tier4":
            return Criticality.LOW
        case other:
            logger.warning("Unmapped equipment criticality: %s", other)
            return Criticality.MEDIUM


def normalize_technicians(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = normalize_columns(raw_df, TECHNICIAN_COLUMN_MAP)
    df["id"] = df["id"].astype(str).str.strip()
    if "name" not in df.columns:
        df["name"] = df["id"]
    df["name"] = df["name"].fillna(df["id"])

    if "skills" not in df.columns:
        df["skills"] = ""
    df["skills"] = df["skills"].map(split_list_column)

    if "current_workload" not in df.columns:
        df["current_workload"] = 0.0
    df["current_workload"] = pd.to_numeric(df["current_workload"], errors="coerce").fillna(0.0)

    if "is_available" not in df.columns:
        df["is_available"] = True
    df["is_available"] = df["is_available"].map(coerce_bool)
    return df.reset_index(drop=True)


def normalize_equipment(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = normalize_columns(raw_df, EQUIPMENT_COLUMN_MAP)
    df["id"] = df["id"].astype(str).str.strip()
    df["type"] = df["type"].astype(str).str.strip().str.lower()
    if "name" not in df.columns:
        df["name"] = df["id"]
    df["name"] = df["name"].fillna(df["id"])
    if "criticality" not in df.columns:
        df["criticality"] = None
    df["criticality"] = df["criticality"].map(_map_criticality).astype(str)
    for col in ("location", "status"):
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].fillna("")
    return df.reset_index(drop=True)


def normalize_inventory(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = normalize_columns(raw_df, INVENTORY_COLUMN_MAP)
    df = df.dropna(subset=["name"])
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce").fillna(0)
    return df.reset_index(drop=True)


def technicians_from_frame(df: pd.DataFrame) -> list[Technician]:
    return [
        Technician(
            id=row["id"],
            name=row["name"],
            skills=frozenset(split_list_column(row.get("skills"))),
            current_workload=float(row["current_workload"]),
            is_available=coerce_bool(row["is_available"]),
        )
        for row in df.to_dict("records")
    ]


def _optional_datetime(value: object):
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return None


def equipment_from_frame(df: pd.DataFrame) -> list[Equipment]:
    return [
        Equipment(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            location=row.get("location") or "",
            criticality=Criticality(row["criticality"]),
            status=row.get("status") or "operational",
            last_maintenance=_optional_datetime(row.get("last_maintenance")),
            next_scheduled_maintenance=_optional_datetime(row.get("next_scheduled_maintenance")),
        )
        for row in df.to_dict("records")
    ]


def inventory_from_frame(df: pd.DataFrame) -> list[InventoryItem]:
    return [
        InventoryItem(name=str(row["name"]), quantity=row["quantity"])
        for row in df.to_dict("records")
    ]
