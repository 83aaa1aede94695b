"""
Maintenance pipeline: Configuration Tests
=========================================
Tests: environment presets, TOML / YAML overrides
"""

import logging
from pathlib import Path

import pytest

from maintenance.config import (
    DEFAULT_CONFIG,
    SchedulingConfig,
    load_maintenance_config,
    load_overrides,
)


class TestEnvironments:

    @pytest.mark.parametrize("env,data_dir", [
        ("production", Path("/srv/maintenance/data")),
        ("staging", Path("/srv/maintenance-staging/data")),
        ("development", Path("data")),
    ])
    def test_presets(self, env, data_dir):
        assert load_maintenance_config(env).data_dir == data_dir

    def test_unknown_environment(self):
        with pytest.raises(ValueError, match="Unknown environment: qa"):
            load_maintenance_config("qa")

    def test_defaults(self):
        scheduling = DEFAULT_CONFIG.scheduling
        assert scheduling.workload_limit == 80.0
        assert scheduling.workday_minutes == 480
        assert scheduling.parts_catalog["pump"] == ["Seal Kit", "Bearings", "Gaskets"]
        assert DEFAULT_CONFIG.domains == ["predictive", "scheduling", "analytics"]


class TestOverrides:

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "x"\n\n'
            "[tool.maintenance.scheduling]\nworkload_limit = 70.0\n\n"
            "[tool.maintenance.risk]\ncritical_band = 0.25\n"
        )
        config = load_overrides(DEFAULT_CONFIG, path)
        assert config.scheduling.workload_limit == 70.0
        assert config.scheduling.workday_minutes == 480
        assert config.risk.critical_band == 0.25
        assert config.risk.warning_band == 0.1

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "maintenance.yaml"
        path.write_text(
            "data_dir: /tmp/maint\n"
            "analytics:\n  imminent_failure_days: 10\n"
            "scoring:\n  skill_match: 25\n"
        )
        config = load_overrides(DEFAULT_CONFIG, path)
        assert config.data_dir == Path("/tmp/maint")
        assert config.analytics.imminent_failure_days == 10
        assert config.scoring.skill_match == 25

    def test_missing_file_keeps_config(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_overrides(DEFAULT_CONFIG, tmp_path / "nope.toml")
        assert config is DEFAULT_CONFIG
        assert "Config not found" in caplog.text

    def test_no_path(self):
        assert load_overrides(DEFAULT_CONFIG) is DEFAULT_CONFIG

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[scheduling]\n")
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_overrides(DEFAULT_CONFIG, path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "maintenance.yaml"
        path.write_text("scheduling:\n  overtime: true\n")
        with pytest.raises(TypeError):
            load_overrides(DEFAULT_CONFIG, path)

    def test_config_is_frozen(self):
        with pytest.raises(AttributeError):
            SchedulingConfig().workload_limit = 10
