"""
Maintenance pipeline: Task Factory Tests
========================================
Tests: low-risk skip, description, priority, duration, required parts
"""

import logging

from maintenance.domains.scheduling.tasks import (
    build_task,
    build_tasks,
    describe_task,
    determine_required_parts,
    estimate_duration,
)
from maintenance.utils.types import Criticality, Equipment, InventoryItem, Priority, TaskStatus
from tests.conftest import NOW, build_analysis

CRITICAL_ACTION = (
    "IMMEDIATE MAINTENANCE REQUIRED: Critical issues with temperature. Shut down equipment if safe."
)


class TestBuildTask:

    def test_low_risk_produces_no_task(self, generator):
        assert build_task(build_analysis("GEN-001", "low", 90), generator, now=NOW) is None

    def test_build_tasks_skips_only_low(self, equipment_registry):
        registry = {e.id: e for e in equipment_registry}
        analyses = [
            build_analysis("GEN-001", "critical", 5),
            build_analysis("PUMP-002", "low", 90),
            build_analysis("AC-003", "medium", 45),
            build_analysis("GEN-001", "low", 90),
            build_analysis("PUMP-002", "high", 20),
        ]
        drafts = build_tasks(analyses, registry, now=NOW)
        assert [t.equipment_id for t in drafts] == ["GEN-001", "AC-003", "PUMP-002"]

    def test_draft_fields(self, generator, inventory):
        analysis = build_analysis("GEN-001", "critical", 5, name="Generator A", action=CRITICAL_ACTION)
        task = build_task(analysis, generator, inventory, now=NOW)

        assert task.priority == Priority.CRITICAL
        assert task.status == TaskStatus.PENDING
        assert task.assigned_to == ""
        assert task.scheduled_date == NOW
        assert task.created_at == NOW
        assert task.notes == CRITICAL_ACTION
        assert task.predicted_failure_in_days == 5

    def test_missing_equipment_proceeds(self, caplog):
        analysis = build_analysis("GHOST-1", "high", 20)
        with caplog.at_level(logging.WARNING):
            task = build_task(analysis, None, now=NOW)
        assert task.estimated_duration == 180
        assert task.required_parts == ()
        assert "GHOST-1" in caplog.text


class TestDescription:

    def test_with_equipment_type(self, generator):
        analysis = build_analysis("GEN-001", "critical", 5, name="Generator A", action=CRITICAL_ACTION)
        assert describe_task(analysis, generator) == (
            "Predictive maintenance for Generator A (generator) - "
            "IMMEDIATE MAINTENANCE REQUIRED: Critical issues with temperature"
        )

    def test_without_equipment(self):
        analysis = build_analysis("X-1", "medium", 45, name="Mystery", action="Plan maintenance within 2 weeks. Warning issues: flow")
        assert describe_task(analysis) == "Predictive maintenance for Mystery - Plan maintenance within 2 weeks"


class TestDuration:

    def test_critical_risk_on_critical_equipment(self, generator):
        assert estimate_duration(build_analysis("GEN-001", "critical", 5), generator) == 300

    def test_high_risk_on_high_equipment(self, pump):
        assert estimate_duration(build_analysis("PUMP-002", "high", 20), pump) == 210

    def test_medium_risk_on_low_equipment(self):
        ac = Equipment(id="AC-003", name="AC", type="ac_unit", criticality=Criticality.LOW)
        assert estimate_duration(build_analysis("AC-003", "medium", 45), ac) == 120

    def test_no_equipment_record(self):
        assert estimate_duration(build_analysis("GEN-001", "critical", 5)) == 240


class TestRequiredParts:

    def test_filtered_to_stock(self, generator, inventory):
        # oil filter is in the catalog but out of stock
        assert determine_required_parts(generator, inventory) == ("Fuel Filter", "Air Filter")

    def test_no_fallback_when_nothing_in_stock(self, generator):
        assert determine_required_parts(generator, [InventoryItem("Oil Filter", 0)]) == ()

    def test_unknown_type(self, inventory):
        boiler = Equipment(id="B-1", name="Boiler", type="boiler")
        assert determine_required_parts(boiler, inventory) == ()

    def test_pump_parts(self, pump, inventory):
        assert determine_required_parts(pump, inventory) == ("Seal Kit",)
