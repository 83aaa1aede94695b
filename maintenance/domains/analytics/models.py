"""Pandera schemas for persisted maintenance tasks and maintenance logs."""

import pandera as pa
from pandera import Column, Check

VALID_PRIORITIES = ["critical", "high", "medium", "low"]
VALID_TASK_STATUSES = ["pending", "scheduled", "in-progress", "completed"]
VALID_SEVERITIES = ["critical", "high", "medium", "low"]


TaskWindowSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, nullable=False),
        "priority": Column(str, Check.isin(VALID_PRIORITIES)),
        "status": Column(str, Check.isin(VALID_TASK_STATUSES)),
        "estimated_duration": Column(float, Check.ge(0), nullable=True),
        "actual_duration": Column(float, Check.ge(0), nullable=True),
        "created_at": Column("datetime64[ns]", nullable=True),
        "completed_date": Column("datetime64[ns]", nullable=True),
    },
    checks=[
        # a completed task must carry its completion date
        Check(
            lambda df: ~((df["status"] == "completed") & df["completed_date"].isna()),
            element_wise=False,
            error="completed tasks require completed_date",
        ),
    ],
    coerce=True,
    strict=False,
)


LogWindowSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, nullable=False),
        "type": Column(str, nullable=False),
        "severity": Column(str, Check.isin(VALID_SEVERITIES)),
        "predicted_failure_in_days": Column(float, Check.ge(1), nullable=True),
        "confidence": Column(float, Check.in_range(0, 1), nullable=True),
        "created_at": Column("datetime64[ns]", nullable=False),
    },
    coerce=True,
    strict=False,
)
