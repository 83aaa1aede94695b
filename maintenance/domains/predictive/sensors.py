"""Per-reading deviation analysis for sensor feeds."""

import logging

import numpy as np
import pandas as pd

from maintenance.config import RiskThresholds

logger = logging.getLogger(__name__)


def _relative_gap(gap: pd.Series, limit: pd.Series) -> np.ndarray:
    """Gap as a fraction of the violated limit; a zero limit counts the raw gap."""
    limit = limit.abs().to_numpy(dtype=float)
    gap = gap.to_numpy(dtype=float)
    return np.divide(gap, limit, out=gap.copy(), where=limit != 0)


def analyze_sensor_readings(
    df: pd.DataFrame,
    thresholds: RiskThresholds | None = None,
) -> pd.DataFrame:
    """Score every reading by how far it strays from its normal range.

    Adds ``deviation`` (fraction beyond the violated limit, 0 inside the
    range), ``derived_status`` and ``anomaly_score`` (``min(1, 2 * deviation)``).
    """
    thresholds = thresholds or RiskThresholds()
    out = df.copy()

    below = out["value"] < out["normal_min"]
    above = out["value"] > out["normal_max"]

    low_dev = _relative_gap(out["normal_min"] - out["value"], out["normal_min"])
    high_dev = _relative_gap(out["value"] - out["normal_max"], out["normal_max"])

    out["deviation"] = np.select([below, above], [low_dev, high_dev], default=0.0)
    out["derived_status"] = np.select(
        [out["deviation"] > thresholds.critical_band, below | above],
        ["critical", "warning"],
        default="normal",
    )
    out["anomaly_score"] = np.minimum(1.0, out["deviation"].abs() * 2)

    logger.info(
        "Scored %d readings: %d critical, %d warning",
        len(out),
        (out["derived_status"] == "critical").sum(),
        (out["derived_status"] == "warning").sum(),
    )
    return out
