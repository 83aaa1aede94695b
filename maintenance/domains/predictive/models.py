"""Pandera schemas for validating predictive domain DataFrames."""

import pandera as pa
from pandera import Column, Check

VALID_READING_STATUSES = ["normal", "warning", "critical"]
VALID_RISK_LEVELS = ["low", "medium", "high", "critical"]


SensorReadingSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, Check.str_length(min_value=1), nullable=False),
        "type": Column(str, nullable=False),
        "value": Column(float, nullable=False),
        "normal_min": Column(float, nullable=False),
        "normal_max": Column(float, nullable=False),
        "status": Column(str, Check.isin(VALID_READING_STATUSES)),
        "unit": Column(str, nullable=True, required=False),
        "timestamp": Column("datetime64[ns]", nullable=True, required=False),
    },
    checks=[
        Check(lambda df: df["normal_min"] <= df["normal_max"], error="normal_min above normal_max"),
    ],
    coerce=True,
    strict=False,
)


RiskAnalysisSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, nullable=False),
        "equipment_name": Column(str, nullable=False),
        "risk_level": Column(str, Check.isin(VALID_RISK_LEVELS)),
        "status": Column(str, Check.isin(VALID_READING_STATUSES)),
        "predicted_failure_in_days": Column(int, Check.ge(1)),
        "confidence": Column(float, Check.in_range(0, 1)),
        "recommended_action": Column(str, nullable=False),
        "contributing_factors": Column(str, nullable=True),
    },
    coerce=True,
    strict=False,
)


SensorDeviationSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, nullable=False),
        "type": Column(str, nullable=False),
        "deviation": Column(float, Check.ge(0)),
        "derived_status": Column(str, Check.isin(VALID_READING_STATUSES)),
        "anomaly_score": Column(float, Check.in_range(0, 1)),
    },
    coerce=True,
    strict=False,
)
