"""Shared utilities for the maintenance pipeline."""

from maintenance.utils.io import read_csv_files, read_records, write_output
from maintenance.utils.transforms import normalize_columns, split_list_column, coerce_bool
from maintenance.utils.validators import validate_referential_integrity
from maintenance.utils.types import (
    Equipment,
    InventoryItem,
    MaintenanceTask,
    RiskAnalysis,
    RiskLevel,
    SensorReading,
    TaskStatus,
    Technician,
)
