"""Ingest persisted task history and maintenance logs, and cut analysis windows."""

import logging
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd

from maintenance.config import AnalyticsConfig, load_maintenance_config
from maintenance.utils.io import read_csv_files, read_records

logger = logging.getLogger(__name__)


def _load_store(name: str, data_dir: Path | None) -> pd.DataFrame:
    if data_dir is None:
        data_dir = load_maintenance_config().data_dir
    data_dir = Path(data_dir) / "analytics"

    json_path = data_dir / f"{name}.json"
    if json_path.exists():
        df = read_records(json_path)
    else:
        df = read_csv_files(data_dir, pattern=f"{name}*.csv")

    if df.empty:
        raise FileNotFoundError(f"No {name} records found in {data_dir}")
    logger.info("Ingested %d %s records", len(df), name)
    return df


def fetch_task_history(data_dir: Path | None = None) -> pd.DataFrame:
    return _load_store("tasks", data_dir)


def fetch_maintenance_logs(data_dir: Path | None = None) -> pd.DataFrame:
    return _load_store("maintenance_logs", data_dir)


def period_days(period: str | None, config: AnalyticsConfig | None = None) -> int:
    """Length of a named reporting period; unknown names use the default period."""
    config = config or AnalyticsConfig()
    if period is None:
        period = config.default_period
    if period not in config.periods:
        logger.warning("Unknown period %s, using %s", period, config.default_period)
        period = config.default_period
    return config.periods[period]


def select_window(
    df: pd.DataFrame,
    period: str | None = None,
    as_of: datetime | None = None,
    column: str = "created_at",
    config: AnalyticsConfig | None = None,
) -> pd.DataFrame:
    """Rows whose ``column`` falls in the period ending at ``as_of``.

    Rows with no timestamp in ``column`` are left out of the window.
    """
    as_of = pd.Timestamp(as_of or datetime.now())
    start = as_of - timedelta(days=period_days(period, config))
    if df.empty or column not in df.columns:
        return df.iloc[0:0]

    stamps = pd.to_datetime(df[column], errors="coerce")
    mask = (stamps >= start) & (stamps <= as_of)
    return df[mask].reset_index(drop=True)
