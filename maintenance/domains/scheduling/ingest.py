"""Ingest technician, equipment and inventory directories."""

import logging
from pathlib import Path

import pandas as pd

from maintenance.config import load_maintenance_config
from maintenance.utils.io import read_csv_files, read_records

logger = logging.getLogger(__name__)

DIRECTORY_FILES = {
    "technicians": "technicians",
    "equipment": "equipment",
    "inventory": "inventory",
}


def _resolve_dir(data_dir: Path | None) -> Path:
    if data_dir is None:
        data_dir = load_maintenance_config().data_dir
    return Path(data_dir) / "scheduling"


def _load_directory(name: str, data_dir: Path) -> pd.DataFrame:
    """Load one directory export, preferring a JSON dump over CSV shards."""
    json_path = data_dir / f"{name}.json"
    if json_path.exists():
        return read_records(json_path)
    return read_csv_files(data_dir, pattern=f"{name}*.csv")


def fetch_technicians(data_dir: Path | None = None) -> pd.DataFrame:
    data_dir = _resolve_dir(data_dir)
    df = _load_directory(DIRECTORY_FILES["technicians"], data_dir)
    if df.empty:
        raise FileNotFoundError(f"No technician records found in {data_dir}")
    logger.info("Ingested %d technicians", len(df))
    return df


def fetch_equipment(data_dir: Path | None = None) -> pd.DataFrame:
    data_dir = _resolve_dir(data_dir)
    df = _load_directory(DIRECTORY_FILES["equipment"], data_dir)
    if df.empty:
        raise FileNotFoundError(f"No equipment records found in {data_dir}")
    logger.info("Ingested %d equipment records", len(df))
    return df


def fetch_inventory(data_dir: Path | None = None) -> pd.DataFrame:
    """Inventory is optional; an empty frame means every part is out of stock."""
    data_dir = _resolve_dir(data_dir)
    df = _load_directory(DIRECTORY_FILES["inventory"], data_dir)
    if df.empty:
        logger.warning("No inventory found in %s, tasks will list no required parts", data_dir)
        return pd.DataFrame(columns=["name", "quantity"])
    return df
