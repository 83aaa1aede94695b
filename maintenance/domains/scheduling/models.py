"""Pandera schemas for the scheduling domain's directories and outputs."""

import pandera as pa
from pandera import Column, Check

VALID_PRIORITIES = ["critical", "high", "medium", "low"]
VALID_CRITICALITIES = ["critical", "high", "medium", "low"]
VALID_TASK_STATUSES = ["pending", "scheduled", "in-progress", "completed"]


TechnicianSchema = pa.DataFrameSchema(
    columns={
        "id": Column(str, Check.str_length(min_value=1), unique=True),
        "name": Column(str, nullable=False),
        "skills": Column(object, nullable=True),
        "current_workload": Column(float, Check.ge(0)),
        "is_available": Column(bool, nullable=False),
    },
    coerce=True,
    strict=False,
)


EquipmentSchema = pa.DataFrameSchema(
    columns={
        "id": Column(str, Check.str_length(min_value=1), unique=True),
        "name": Column(str, nullable=False),
        "type": Column(str, nullable=False),
        "location": Column(str, nullable=True, required=False),
        "criticality": Column(str, Check.isin(VALID_CRITICALITIES)),
        "status": Column(str, nullable=True, required=False),
    },
    coerce=True,
    strict=False,
)


InventorySchema = pa.DataFrameSchema(
    columns={
        "name": Column(str, nullable=False),
        "quantity": Column(float, nullable=False),
    },
    coerce=True,
    strict=False,
)


ScheduledTaskSchema = pa.DataFrameSchema(
    columns={
        "equipment_id": Column(str, nullable=False),
        "description": Column(str, nullable=False),
        "priority": Column(str, Check.isin(VALID_PRIORITIES)),
        "status": Column(str, Check.isin(VALID_TASK_STATUSES)),
        "assigned_to": Column(str, nullable=True),
        "estimated_duration": Column(float, Check.gt(0)),
        "scheduled_date": Column("datetime64[ns]", nullable=False),
    },
    coerce=True,
    strict=False,
)
