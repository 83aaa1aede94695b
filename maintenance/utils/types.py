"""Shared type definitions for the maintenance pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

import pandas as pd


type EquipmentID = str
type TechnicianID = str
type Minutes = int | float
type Percentage = float


class ReadingStatus(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Task priority uses the same four tiers as risk.
Priority = RiskLevel


class Criticality(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskStatus(StrEnum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


RISK_ORDER = {"low": 0, "medium": 1, "high": 2, "critical": 3}


@dataclass(frozen=True)
class SensorReading:
    type: str
    value: float
    normal_min: float
    normal_max: float
    status: ReadingStatus = ReadingStatus.NORMAL
    unit: str = ""
    equipment_id: EquipmentID | None = None
    timestamp: datetime | None = None


@dataclass(frozen=True)
class RiskAnalysis:
    equipment_id: EquipmentID
    equipment_name: str
    risk_level: RiskLevel
    predicted_failure_in_days: int
    confidence: float
    recommended_action: str
    contributing_factors: tuple[str, ...]
    last_analysis: datetime
    next_analysis: datetime | None = None

    @property
    def status(self) -> ReadingStatus:
        match self.risk_level:
            case RiskLevel.CRITICAL:
                return ReadingStatus.CRITICAL
            case RiskLevel.HIGH:
                return ReadingStatus.WARNING
            case _:
                return ReadingStatus.NORMAL


@dataclass(frozen=True)
class Equipment:
    id: EquipmentID
    name: str
    type: str
    location: str = ""
    criticality: Criticality = Criticality.MEDIUM
    status: str = "operational"
    last_maintenance: datetime | None = None
    next_scheduled_maintenance: datetime | None = None


@dataclass(frozen=True)
class Technician:
    id: TechnicianID
    name: str
    skills: frozenset[str] = field(default_factory=frozenset)
    current_workload: Percentage = 0.0
    is_available: bool = True


@dataclass(frozen=True)
class InventoryItem:
    name: str
    quantity: int | float


@dataclass(frozen=True)
class MaintenanceTask:
    equipment_id: EquipmentID
    equipment_name: str
    description: str
    priority: Priority
    status: TaskStatus
    assigned_to: TechnicianID
    estimated_duration: Minutes
    scheduled_date: datetime
    predicted_failure_in_days: int | None
    required_parts: tuple[str, ...] = ()
    notes: str = ""
    actual_duration: Minutes | None = None
    completed_date: datetime | None = None
    created_at: datetime | None = None


def tasks_to_frame(tasks: list[MaintenanceTask]) -> pd.DataFrame:
    """Flatten task records into a DataFrame with the persisted column names."""
    rows = [{
        "equipment_id": t.equipment_id,
        "equipment_name": t.equipment_name,
        "description": t.description,
        "priority": str(t.priority),
        "status": str(t.status),
        "assigned_to": t.assigned_to,
        "estimated_duration": t.estimated_duration,
        "actual_duration": t.actual_duration,
        "scheduled_date": t.scheduled_date,
        "completed_date": t.completed_date,
        "created_at": t.created_at,
        "predicted_failure_in_days": t.predicted_failure_in_days,
        "required_parts": ", ".join(t.required_parts),
        "notes": t.notes,
    } for t in tasks]
    return pd.DataFrame(rows, columns=TASK_COLUMNS)


def analyses_to_frame(analyses: list[RiskAnalysis]) -> pd.DataFrame:
    """Flatten risk analyses into a DataFrame for reporting and log writes."""
    rows = [{
        "equipment_id": a.equipment_id,
        "equipment_name": a.equipment_name,
        "risk_level": str(a.risk_level),
        "status": str(a.status),
        "predicted_failure_in_days": a.predicted_failure_in_days,
        "confidence": a.confidence,
        "recommended_action": a.recommended_action,
        "contributing_factors": "; ".join(a.contributing_factors),
        "last_analysis": a.last_analysis,
    } for a in analyses]
    return pd.DataFrame(rows, columns=ANALYSIS_COLUMNS)


TASK_COLUMNS = [
    "equipment_id", "equipment_name", "description", "priority", "status",
    "assigned_to", "estimated_duration", "actual_duration", "scheduled_date",
    "completed_date", "created_at", "predicted_failure_in_days", "required_parts", "notes",
]

ANALYSIS_COLUMNS = [
    "equipment_id", "equipment_name", "risk_level", "status",
    "predicted_failure_in_days", "confidence", "recommended_action",
    "contributing_factors", "last_analysis",
]
