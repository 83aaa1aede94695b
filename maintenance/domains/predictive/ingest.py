"""Ingest sensor reading exports from the monitoring gateways."""

import logging
from pathlib import Path

import pandas as pd

from maintenance.config import load_maintenance_config
from maintenance.domains.predictive.transform import LEGACY_COLUMN_MAP
from maintenance.utils.io import read_csv_files, read_records
from maintenance.utils.transforms import normalize_columns

logger = logging.getLogger(__name__)

READING_SOURCES = ["gateway", "manual_rounds"]


def _load_source(source_name: str, data_dir: Path) -> pd.DataFrame:
    """Load readings exported by a single source."""
    json_path = data_dir / f"readings_{source_name}.json"
    if json_path.exists():
        df = read_records(json_path)
    else:
        df = read_csv_files(data_dir, pattern=f"readings_{source_name}*.csv")

    if df.empty:
        logger.warning("No readings found for source %s in %s", source_name, data_dir)
        return df
    # align column spelling across sources before merging
    df = normalize_columns(df, LEGACY_COLUMN_MAP)
    df["source_system"] = source_name
    return df


def fetch_sensor_readings(
    data_dir: Path | None = None,
    validate_only: bool = False,
) -> pd.DataFrame:
    """Fetch and merge sensor readings from all configured sources."""
    if data_dir is None:
        data_dir = load_maintenance_config().data_dir
    data_dir = Path(data_dir) / "predictive"

    chunks = [_load_source(source, data_dir) for source in READING_SOURCES]
    chunks = [c for c in chunks if not c.empty]
    if not chunks:
        raise FileNotFoundError(f"No sensor readings found in {data_dir}")

    combined = pd.concat(chunks, ignore_index=True)

    if validate_only:
        return combined.head(500)

    logger.info("Ingested %d readings from %d sources", len(combined), len(chunks))
    return combined
