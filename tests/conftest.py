"""
Maintenance pipeline: Test Infrastructure (conftest.py)
===========================================================
Provides:
  - A fixed scheduling clock
  - Technician, equipment and inventory records
  - Builders for sensor readings and risk analyses
"""

import datetime

import pytest

from maintenance.utils.types import (
    Criticality,
    Equipment,
    InventoryItem,
    ReadingStatus,
    RiskAnalysis,
    RiskLevel,
    SensorReading,
    Technician,
)

NOW = datetime.datetime(2024, 6, 3, 8, 0, 0)


# ============================================================================
# Builders
# ============================================================================

def build_reading(kind="normal", type="temperature", equipment_id="GEN-001", status=ReadingStatus.NORMAL):
    """Reading against a 40-60 normal range; ``kind`` picks the value band."""
    values = {
        "normal": 50.0,
        "warning": 68.0,     # above 60 * 1.1, within 60 * 1.2
        "critical": 80.0,    # above 60 * 1.2
        "low_warning": 35.0,   # below 40 * 0.9, within 40 * 0.8
        "low_critical": 30.0,  # below 40 * 0.8
    }
    return SensorReading(
        type=type,
        value=values[kind],
        normal_min=40.0,
        normal_max=60.0,
        status=status,
        equipment_id=equipment_id,
    )


def build_analysis(equipment_id, risk_level, days, name=None, confidence=0.9, action=None):
    return RiskAnalysis(
        equipment_id=equipment_id,
        equipment_name=name or f"Equipment {equipment_id}",
        risk_level=RiskLevel(risk_level),
        predicted_failure_in_days=days,
        confidence=confidence,
        recommended_action=action or "Schedule maintenance within 48 hours. Critical: none, Warnings: none",
        contributing_factors=(),
        last_analysis=NOW,
        next_analysis=NOW + datetime.timedelta(hours=24),
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def now():
    return NOW


@pytest.fixture
def generator():
    return Equipment(
        id="GEN-001",
        name="Generator A",
        type="generator",
        location="Plant 1",
        criticality=Criticality.CRITICAL,
    )


@pytest.fixture
def pump():
    return Equipment(id="PUMP-002", name="Pump B", type="pump", criticality=Criticality.HIGH)


@pytest.fixture
def equipment_registry(generator, pump):
    return [
        generator,
        pump,
        Equipment(id="AC-003", name="Rooftop AC", type="ac_unit", criticality=Criticality.LOW),
    ]


@pytest.fixture
def inventory():
    return [
        InventoryItem(name="Fuel Filter (diesel)", quantity=4),
        InventoryItem(name="Oil Filter", quantity=0),
        InventoryItem(name="AIR FILTER 20x20", quantity=12),
        InventoryItem(name="Seal Kit", quantity=1),
    ]


@pytest.fixture
def generator_tech():
    return Technician(id="T-1", name="Ada", skills=frozenset({"generator"}), current_workload=0.0)


@pytest.fixture
def technicians():
    return [
        Technician(id="T-1", name="Ada", skills=frozenset({"generator"}), current_workload=0.0),
        Technician(id="T-2", name="Bo", skills=frozenset({"Pump", "hvac"}), current_workload=20.0),
        Technician(id="T-3", name="Cy", skills=frozenset(), current_workload=10.0, is_available=False),
    ]
