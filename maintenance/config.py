"""Maintenance pipeline configuration and environment setup."""

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

type ConfigDict = dict[str, str | int | float | bool | list[str] | dict]


@dataclass(frozen=True)
class RiskThresholds:
    # fraction outside the normal range that marks a reading critical / warning
    critical_band: float = 0.2
    warning_band: float = 0.1


@dataclass(frozen=True)
class ScoringWeights:
    availability: float = 40
    workload_ceiling: float = 30
    workload_factor: float = 0.3
    skill_match: float = 20
    critical_priority: float = 10


@dataclass(frozen=True)
class SchedulingConfig:
    workload_limit: float = 80.0
    workday_minutes: int = 8 * 60
    workload_delay_step: float = 20
    priority_delays: dict[str, int] = field(
        default_factory=lambda: {"critical": 0, "high": 1}
    )
    default_priority_delay: int = 2
    base_durations: dict[str, int] = field(
        default_factory=lambda: {"critical": 240, "high": 180}
    )
    default_duration: int = 120
    criticality_overheads: dict[str, int] = field(
        default_factory=lambda: {"critical": 60, "high": 30}
    )
    parts_catalog: dict[str, list[str]] = field(
        default_factory=lambda: {
            "generator": ["Fuel Filter", "Oil Filter", "Air Filter"],
            "ac_unit": ["Refrigerant", "Air Filter", "Thermostat"],
            "pump": ["Seal Kit", "Bearings", "Gaskets"],
            "compressor": ["Air Filter", "Oil", "Belts"],
        }
    )


@dataclass(frozen=True)
class AnalyticsConfig:
    imminent_failure_days: int = 7
    periods: dict[str, int] = field(
        default_factory=lambda: {"7d": 7, "30d": 30, "90d": 90}
    )
    default_period: str = "30d"
    critical_alert_hours: int = 24


@dataclass(frozen=True)
class MaintenanceConfig:
    data_dir: Path
    output_dir: Path
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    domains: list[str] = field(
        default_factory=lambda: ["predictive", "scheduling", "analytics"]
    )


def load_maintenance_config(env: str = "production") -> MaintenanceConfig:
    match env:
        case "production":
            data_dir = Path("/srv/maintenance/data")
            output_dir = Path("/srv/maintenance/output")
        case "staging":
            data_dir = Path("/srv/maintenance-staging/data")
            output_dir = Path("/srv/maintenance-staging/output")
        case "development":
            data_dir = Path("data")
            output_dir = Path("output")
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return MaintenanceConfig(data_dir=data_dir, output_dir=output_dir)


def _read_config_file(path: Path) -> ConfigDict:
    match path.suffix:
        case ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            # pyproject.toml keeps overrides under [tool.maintenance]
            return data.get("tool", {}).get("maintenance", data)
        case ".yaml" | ".yml":
            with open(path) as f:
                return yaml.safe_load(f) or {}
        case ext:
            raise ValueError(f"Unsupported config format: {ext}")


def load_overrides(
    config: MaintenanceConfig,
    path: str | Path | None = None,
) -> MaintenanceConfig:
    """Apply overrides from a TOML or YAML file on top of ``config``.

    Recognised sections are ``risk``, ``scoring``, ``scheduling`` and
    ``analytics``; top-level ``data_dir`` / ``output_dir`` keys replace the
    directories. A missing file leaves the configuration untouched.
    """
    if path is None:
        return config

    path = Path(path)
    if not path.exists():
        logger.warning(f"Config not found at {path}, using defaults")
        return config

    overrides = _read_config_file(path)
    sections = {
        "risk": config.risk,
        "scoring": config.scoring,
        "scheduling": config.scheduling,
        "analytics": config.analytics,
    }
    updated = {}
    for name, current in sections.items():
        values = overrides.get(name)
        if values:
            updated[name] = replace(current, **values)

    for key in ("data_dir", "output_dir"):
        if key in overrides:
            updated[key] = Path(overrides[key])

    logger.info("Loaded %d config overrides from %s", len(updated), path)
    return replace(config, **updated)


DEFAULT_CONFIG = MaintenanceConfig(data_dir=Path("data"), output_dir=Path("output"))
