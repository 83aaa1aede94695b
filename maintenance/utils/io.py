"""File I/O utilities for reading and writing maintenance data."""

import json
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console()

DATE_COLUMNS = [
    "timestamp", "scheduled_date", "completed_date", "created_at",
    "last_maintenance", "next_scheduled_maintenance", "last_analysis",
]


def _parse_dates(chunk: pd.DataFrame) -> pd.DataFrame:
    for col in DATE_COLUMNS:
        if col in chunk.columns:
            chunk[col] = pd.to_datetime(chunk[col], errors="coerce")
    return chunk


def read_csv_files(directory: FilePath, pattern: str = "*.csv") -> pd.DataFrame:
    """Read all CSV files from a directory and concatenate them."""
    directory = Path(directory)
    chunks = []

    for csv_file in sorted(directory.glob(pattern)):
        console.print(f"  Reading {csv_file.name}...")
        chunks.append(_parse_dates(pd.read_csv(csv_file)))

    if not chunks:
        return pd.DataFrame()
    return pd.concat(chunks, ignore_index=True)


def read_records(path: FilePath) -> pd.DataFrame:
    """Read a single CSV or JSON records file into a DataFrame."""
    path = Path(path)

    match path.suffix:
        case ".csv":
            df = pd.read_csv(path)
        case ".json":
            with open(path) as f:
                df = pd.DataFrame(json.load(f))
        case ".parquet":
            df = pd.read_parquet(path)
        case ext:
            raise ValueError(f"Unsupported input format: {ext}")

    return _parse_dates(df)


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "parquet":
            df.to_parquet(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
