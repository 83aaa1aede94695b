"""
Maintenance pipeline: Technician Scorer Tests
=============================================
Tests: availability gate, workload term, skill match, critical bonus
"""

import pytest

from maintenance.config import ScoringWeights
from maintenance.domains.scheduling.scoring import has_matching_skills, score_technician
from maintenance.domains.scheduling.tasks import build_task
from maintenance.utils.types import Equipment, Technician
from tests.conftest import NOW, build_analysis


@pytest.fixture
def critical_task(generator):
    return build_task(build_analysis("GEN-001", "critical", 5), generator, now=NOW)


@pytest.fixture
def high_task(pump):
    return build_task(build_analysis("PUMP-002", "high", 20), pump, now=NOW)


class TestScore:

    def test_unavailable_scores_zero(self, critical_task, generator):
        tech = Technician(id="T-9", name="Off", skills=frozenset({"generator"}), is_available=False)
        assert score_technician(tech, critical_task, generator) == 0

    def test_full_marks(self, generator_tech, critical_task, generator):
        assert score_technician(generator_tech, critical_task, generator) == 100

    def test_workload_penalty(self, high_task, pump):
        tech = Technician(id="T-9", name="Busy", current_workload=50.0)
        assert score_technician(tech, high_task, pump) == pytest.approx(55.0)

    def test_workload_term_floored(self, high_task, pump):
        tech = Technician(id="T-9", name="Swamped", current_workload=200.0)
        assert score_technician(tech, high_task, pump) == 40

    def test_no_equipment_no_skill_bonus(self, generator_tech, critical_task):
        assert score_technician(generator_tech, critical_task, None) == 80

    def test_custom_weights(self, generator_tech, critical_task, generator):
        weights = ScoringWeights(skill_match=50)
        assert score_technician(generator_tech, critical_task, generator, weights) == 130


class TestSkillMatch:

    @pytest.mark.parametrize("skills,equipment_type,expected", [
        ({"generator"}, "generator", True),
        ({"Generator Maintenance"}, "generator", True),
        ({"ac"}, "ac_unit", True),
        ({"PUMP"}, "pump", True),
        ({"electrical"}, "pump", False),
        (set(), "pump", False),
    ])
    def test_substring_either_direction(self, skills, equipment_type, expected):
        tech = Technician(id="T-9", name="Tech", skills=frozenset(skills))
        equipment = Equipment(id="E-1", name="E", type=equipment_type)
        assert has_matching_skills(tech, equipment) is expected
