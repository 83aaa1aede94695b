"""
Maintenance pipeline: Domain Pipeline Tests
===========================================
Tests: file ingest, domain validate() / run(), predictive -> scheduling chain,
       CLI validation sweep
"""

import json
import logging
from dataclasses import replace

import pandas as pd
import pytest

from maintenance.config import DEFAULT_CONFIG
from maintenance.domains import analytics, predictive, scheduling
from maintenance.domains.predictive.ingest import fetch_sensor_readings
from maintenance.domains.scheduling.ingest import fetch_inventory, fetch_technicians
from maintenance.run import validate_all
from maintenance.utils.types import RiskLevel, TaskStatus
from tests.conftest import NOW


GATEWAY_READINGS = [
    {"equipmentId": "GEN-001", "type": "temperature", "value": 80,
     "normalRange": {"min": 40, "max": 60}, "status": "alarm", "unit": "C"},
    {"equipmentId": "GEN-001", "type": "vibration", "value": 50,
     "normalRange": {"min": 40, "max": 60}, "status": "crit", "unit": "mm/s"},
    {"equipmentId": "GEN-001", "type": "pressure", "value": 68,
     "normalRange": {"min": 40, "max": 60}, "status": "ok", "unit": "psi"},
    {"equipmentId": "AC-003", "type": "temperature", "value": 50,
     "normalRange": {"min": 40, "max": 60}, "status": "green", "unit": "C"},
]

MANUAL_ROUNDS_CSV = (
    "asset_id,sensor_type,reading,min,max,status\n"
    "PUMP-002,flow,35,40,60,\n"
    "PUMP-002,flow,,40,60,\n"
)


@pytest.fixture
def data_dir(tmp_path):
    predictive_dir = tmp_path / "predictive"
    predictive_dir.mkdir()
    (predictive_dir / "readings_gateway.json").write_text(json.dumps(GATEWAY_READINGS))
    (predictive_dir / "readings_manual_rounds.csv").write_text(MANUAL_ROUNDS_CSV)

    scheduling_dir = tmp_path / "scheduling"
    scheduling_dir.mkdir()
    (scheduling_dir / "technicians.csv").write_text(
        "technicianId,name,skills,workload,available\n"
        'T-1,Ada,"generator, electrical",0,yes\n'
        "T-2,Bo,pump,30,true\n"
        "T-3,Cy,hvac,0,no\n"
    )
    (scheduling_dir / "equipment.json").write_text(json.dumps([
        {"equipmentId": "GEN-001", "name": "Generator A", "equipmentType": "generator", "criticality": "crit"},
        {"equipmentId": "PUMP-002", "name": "Pump B", "equipmentType": "Pump", "criticality": "tier2"},
        {"equipmentId": "AC-003", "name": "Rooftop AC", "equipmentType": "ac_unit"},
    ]))
    (scheduling_dir / "inventory.csv").write_text(
        "itemName,qtyOnHand\nFuel Filter,3\nSeal Kit,0\nBearings,5\n"
    )
    return tmp_path


# ============================================================================
# INGEST
# ============================================================================

class TestIngest:

    def test_sources_merged(self, data_dir):
        df = fetch_sensor_readings(data_dir)
        assert len(df) == 6
        assert set(df["source_system"]) == {"gateway", "manual_rounds"}
        assert "equipment_id" in df.columns

    def test_missing_readings(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            fetch_sensor_readings(tmp_path)

    def test_missing_technicians(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            fetch_technicians(tmp_path)

    def test_missing_inventory_is_empty(self, tmp_path):
        assert fetch_inventory(tmp_path).empty


# ============================================================================
# DOMAIN RUNS
# ============================================================================

class TestPredictiveDomain:

    def test_validate(self, data_dir, tmp_path_factory):
        assert predictive.validate(data_dir=data_dir) == {"status": "ok", "row_count": 6}
        missing = predictive.validate(data_dir=tmp_path_factory.mktemp("empty"))
        assert missing["status"] == "error"

    def test_run(self, data_dir):
        output = predictive.run(data_dir=data_dir, now=NOW)
        levels = {a.equipment_id: a.risk_level for a in output["analyses"]}

        # the reading without a value is dropped
        assert levels == {
            "GEN-001": RiskLevel.CRITICAL,
            "AC-003": RiskLevel.LOW,
            "PUMP-002": RiskLevel.MEDIUM,
        }
        assert len(output["sensor_analysis"]) == 5
        assert output["fleet_report"]["overall_risk"] == RiskLevel.CRITICAL
        assert list(output["analysis_frame"]["equipment_id"]) == ["GEN-001", "AC-003", "PUMP-002"]


class TestSchedulingDomain:

    def test_validate_sources(self, data_dir):
        for source in ("technicians", "equipment", "inventory"):
            assert scheduling.validate(source, data_dir)["status"] == "ok"
        assert scheduling.validate("payroll", data_dir)["status"] == "error"

    def test_chain(self, data_dir):
        analyses = predictive.run(data_dir=data_dir, now=NOW)["analyses"]
        output = scheduling.run(analyses, data_dir=data_dir, now=NOW)
        result = output["result"]

        by_equipment = {t.equipment_id: t for t in result.scheduled_tasks}
        assert set(by_equipment) == {"GEN-001", "PUMP-002"}

        generator_task = by_equipment["GEN-001"]
        assert generator_task.assigned_to == "T-1"
        assert generator_task.estimated_duration == 300
        assert generator_task.required_parts == ("Fuel Filter",)
        assert generator_task.scheduled_date == NOW

        pump_task = by_equipment["PUMP-002"]
        assert pump_task.assigned_to == "T-2"
        # seal kit is out of stock
        assert pump_task.required_parts == ("Bearings",)
        assert pump_task.status == TaskStatus.SCHEDULED

        assert output["conflicts"] == []
        assert set(output["technician_updates"]["technician_id"]) == {"T-1", "T-2"}

    def test_unknown_equipment_still_scheduled(self, data_dir, caplog):
        analyses = predictive.run(
            readings=pd.DataFrame([{
                "equipment_id": "GHOST-9", "type": "temperature", "value": 80,
                "normal_min": 40, "normal_max": 60,
            }]),
            now=NOW,
        )["analyses"]
        with caplog.at_level(logging.WARNING):
            output = scheduling.run(analyses, data_dir=data_dir, now=NOW)
        assert "Analyses reference unknown equipment: GHOST-9" in caplog.text
        assert len(output["scheduled"]) == 1
        assert output["scheduled"].loc[0, "estimated_duration"] == 180


class TestAnalyticsDomain:

    def test_validate_missing_store(self, tmp_path):
        assert analytics.validate("tasks", tmp_path)["status"] == "error"
        assert analytics.validate("bogus", tmp_path)["status"] == "error"

    def test_run_from_files(self, tmp_path):
        store = tmp_path / "analytics"
        store.mkdir()
        (store / "tasks.csv").write_text(
            "equipmentId,priority,status,estimatedDuration,actualDuration,createdAt,completedDate\n"
            "GEN-001,critical,completed,240,200,2024-06-01 08:00,2024-06-02 08:00\n"
        )
        (store / "maintenance_logs.json").write_text(json.dumps([
            {"equipmentId": "GEN-001", "type": "predictive_analysis", "severity": "high",
             "createdAt": "2024-06-02 08:00", "metadata": {"analysis": {"predictedFailureInDays": 20,
                                                                        "confidence": 0.88}}},
        ]))
        output = analytics.run(data_dir=tmp_path, period="7d", as_of=NOW)
        summary = output["summary"]

        assert summary["insights"]["efficiency"]["average_efficiency"] == 100
        assert summary["insights"]["high_priority_alerts"] == 1
        assert [r.title for r in summary["recommendations"]] == ["High Priority Maintenance"]


# ============================================================================
# CLI VALIDATION SWEEP
# ============================================================================

class TestValidateAll:

    def test_reports_each_source(self, data_dir):
        results = validate_all(replace(DEFAULT_CONFIG, data_dir=data_dir))
        status = {r["domain"]: r["valid"] for r in results}

        assert status == {
            "predictive.readings": True,
            "scheduling.technicians": True,
            "scheduling.equipment": True,
            "scheduling.inventory": True,
            "analytics.tasks": False,
            "analytics.logs": False,
        }
