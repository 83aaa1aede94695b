"""
Maintenance pipeline: Sensor Deviation & Fleet Report Tests
===========================================================
Tests: per-reading deviation scoring, fleet risk rollup
"""

import pandas as pd
import pytest

from maintenance.domains.predictive.report import build_fleet_report, overall_risk
from maintenance.domains.predictive.sensors import analyze_sensor_readings
from maintenance.utils.types import RiskLevel
from tests.conftest import build_analysis


# ============================================================================
# SENSOR DEVIATION
# ============================================================================

class TestSensorDeviation:

    @pytest.fixture
    def scored(self):
        df = pd.DataFrame({
            "equipment_id": ["GEN-001"] * 5,
            "type": ["temperature", "temperature", "vibration", "pressure", "flow"],
            "value": [50.0, 63.0, 80.0, 10.0, -2.0],
            "normal_min": [40.0, 40.0, 40.0, 40.0, 0.0],
            "normal_max": [60.0, 60.0, 60.0, 60.0, 10.0],
        })
        return analyze_sensor_readings(df)

    def test_deviation(self, scored):
        assert scored["deviation"].tolist() == pytest.approx([0.0, 0.05, 1 / 3, 0.75, 2.0])

    def test_derived_status(self, scored):
        assert scored["derived_status"].tolist() == [
            "normal", "warning", "critical", "critical", "critical",
        ]

    def test_anomaly_score_is_capped(self, scored):
        assert scored["anomaly_score"].tolist() == pytest.approx([0.0, 0.1, 2 / 3, 1.0, 1.0])

    def test_input_frame_untouched(self):
        df = pd.DataFrame({
            "equipment_id": ["GEN-001"], "type": ["temperature"],
            "value": [50.0], "normal_min": [40.0], "normal_max": [60.0],
        })
        analyze_sensor_readings(df)
        assert "deviation" not in df.columns


# ============================================================================
# FLEET REPORT
# ============================================================================

class TestFleetReport:

    def test_overall_risk_empty_fleet(self):
        assert overall_risk([]) == RiskLevel.LOW

    def test_overall_risk_highest_level(self):
        analyses = [
            build_analysis("A", "medium", 45),
            build_analysis("B", "high", 20),
            build_analysis("C", "low", 90),
        ]
        assert overall_risk(analyses) == RiskLevel.HIGH

    def test_critical_and_upcoming(self):
        analyses = [
            build_analysis("A", "critical", 5),
            build_analysis("B", "high", 7),
            build_analysis("C", "medium", 45),
        ]
        report = build_fleet_report(analyses)

        assert [a.equipment_id for a in report["critical_equipment"]] == ["A"]
        assert [a.equipment_id for a in report["upcoming_maintenance"]] == ["B"]
        assert report["overall_risk"] == RiskLevel.CRITICAL
        assert report["recommendations"]

    def test_quiet_fleet_recommendation(self):
        report = build_fleet_report([build_analysis("A", "low", 90)])
        assert report["recommendations"] == ["Continue routine monitoring"]
