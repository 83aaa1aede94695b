"""Predictive domain: sensor deviation scoring and equipment risk analysis."""

from datetime import datetime
from pathlib import Path

import pandas as pd

from maintenance.config import RiskThresholds
from maintenance.domains.predictive.ingest import fetch_sensor_readings
from maintenance.domains.predictive.transform import normalize_readings, group_readings
from maintenance.domains.predictive.sensors import analyze_sensor_readings
from maintenance.domains.predictive.risk import analyze
from maintenance.domains.predictive.report import build_fleet_report
from maintenance.domains.predictive.models import RiskAnalysisSchema, SensorDeviationSchema, SensorReadingSchema
from maintenance.utils.types import analyses_to_frame


def validate(source: str = "readings", data_dir: Path | None = None) -> dict:
    """Validate predictive data sources before pipeline execution."""
    try:
        raw = fetch_sensor_readings(data_dir=data_dir, validate_only=True)
        match source:
            case "readings":
                SensorReadingSchema.validate(normalize_readings(raw))
            case unknown:
                return {"status": "error", "message": f"Unknown source: {unknown}"}
        return {"status": "ok", "row_count": len(raw)}
    except FileNotFoundError as exc:
        return {"status": "error", "message": str(exc)}
    except Exception as exc:
        return {"status": "error", "message": f"Validation failed: {exc}"}


def run(
    readings: pd.DataFrame | None = None,
    data_dir: Path | None = None,
    equipment_names: dict[str, str] | None = None,
    now: datetime | None = None,
    thresholds: RiskThresholds | None = None,
) -> dict:
    """Execute the predictive pipeline over every equipment unit in the feed."""
    raw = readings if readings is not None else fetch_sensor_readings(data_dir=data_dir)
    cleaned = normalize_readings(raw)
    SensorReadingSchema.validate(cleaned)

    names = equipment_names or {}
    deviations = analyze_sensor_readings(cleaned, thresholds)
    SensorDeviationSchema.validate(deviations)
    analyses = [
        analyze(group, equipment_id, names.get(equipment_id), now=now, thresholds=thresholds)
        for equipment_id, group in group_readings(cleaned).items()
    ]
    analysis_frame = analyses_to_frame(analyses)
    RiskAnalysisSchema.validate(analysis_frame)

    return {
        "sensor_analysis": deviations,
        "analyses": analyses,
        "analysis_frame": analysis_frame,
        "fleet_report": build_fleet_report(analyses),
    }
