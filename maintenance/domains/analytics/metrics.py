"""Dashboard metrics over a window of persisted tasks and maintenance logs.

Everything here is a pure function of the two input frames, so running the
aggregation twice over the same window gives identical output.
"""

import logging

import pandas as pd

from maintenance.config import AnalyticsConfig
from maintenance.domains.analytics.insights import generate_recommendations
from maintenance.domains.analytics.transform import PREDICTIVE_LOG_TYPE

logger = logging.getLogger(__name__)


def _count_by(df: pd.DataFrame, column: str) -> dict[str, int]:
    if df.empty or column not in df.columns:
        return {}
    counts = df[column].astype(str).value_counts().sort_index()
    return {str(k): int(v) for k, v in counts.items()}


def predictive_analyses(log_window: pd.DataFrame) -> pd.DataFrame:
    """Log rows written by risk analysis runs."""
    if log_window.empty or "type" not in log_window.columns:
        return log_window.iloc[0:0]
    return log_window[log_window["type"] == PREDICTIVE_LOG_TYPE]


def imminent_failures(analyses: pd.DataFrame, days: int = 7) -> int:
    """Analyses predicting failure within ``days``; unknown predictions don't count."""
    if analyses.empty:
        return 0
    predicted = pd.to_numeric(analyses["predicted_failure_in_days"], errors="coerce")
    return int((predicted <= days).sum())


def average_confidence(analyses: pd.DataFrame) -> float:
    """Mean confidence with missing values counted as 0; 0 for no analyses."""
    if analyses.empty:
        return 0.0
    return float(pd.to_numeric(analyses["confidence"], errors="coerce").fillna(0).mean())


def efficiency_metrics(task_window: pd.DataFrame) -> dict:
    """Estimated vs. actual duration over completed tasks with an actual duration.

    ``average_efficiency`` is avg(estimated) / avg(actual) * 100 capped at
    100, and 100 when no completed task recorded its actual duration.
    """
    if task_window.empty:
        completed = task_window
    else:
        completed = task_window[
            (task_window["status"] == "completed") & task_window["actual_duration"].notna()
        ]

    if completed.empty:
        return {
            "average_efficiency": 100.0,
            "total_completed": 0,
            "average_actual_duration": None,
            "average_estimated_duration": None,
        }

    avg_actual = float(completed["actual_duration"].mean())
    avg_estimated = float(completed["estimated_duration"].mean())
    if avg_actual and avg_estimated:
        efficiency = avg_estimated / avg_actual * 100
    else:
        efficiency = 100.0

    return {
        "average_efficiency": min(100.0, efficiency),
        "total_completed": len(completed),
        "average_actual_duration": avg_actual,
        "average_estimated_duration": avg_estimated,
    }


def completion_trends(task_window: pd.DataFrame) -> pd.DataFrame:
    """Completed tasks per completion date, oldest first."""
    columns = ["date", "completed_tasks"]
    if task_window.empty:
        return pd.DataFrame(columns=columns)

    completed = task_window[
        (task_window["status"] == "completed") & task_window["completed_date"].notna()
    ]
    if completed.empty:
        return pd.DataFrame(columns=columns)

    trends = (
        completed.groupby(completed["completed_date"].dt.normalize())
        .size()
        .reset_index()
    )
    trends.columns = columns
    return trends.sort_values("date").reset_index(drop=True)


def aggregate(
    task_window: pd.DataFrame,
    log_window: pd.DataFrame,
    config: AnalyticsConfig | None = None,
) -> dict:
    """Counts, insights and recommendations for one reporting window."""
    config = config or AnalyticsConfig()
    analyses = predictive_analyses(log_window)

    critical = analyses[analyses["severity"] == "critical"] if not analyses.empty else analyses
    high = analyses[analyses["severity"] == "high"] if not analyses.empty else analyses
    imminent = imminent_failures(analyses, config.imminent_failure_days)

    counts = {
        "by_status": _count_by(task_window, "status"),
        "by_priority": _count_by(task_window, "priority"),
        "critical_risk_equipment": int(critical["equipment_id"].nunique()) if not critical.empty else 0,
        "high_risk_equipment": int(high["equipment_id"].nunique()) if not high.empty else 0,
        "imminent_failures": imminent,
    }
    insights = {
        "critical_alerts": len(critical),
        "high_priority_alerts": len(high),
        "imminent_failures": imminent,
        "total_analyses": len(analyses),
        "average_confidence": average_confidence(analyses),
        "efficiency": efficiency_metrics(task_window),
    }
    recommendations = generate_recommendations(
        len(critical), len(high), imminent, config.imminent_failure_days,
    )

    logger.info(
        "Aggregated %d tasks and %d analyses: %d critical, %d high, %d imminent",
        len(task_window), len(analyses), len(critical), len(high), imminent,
    )
    return {"counts": counts, "insights": insights, "recommendations": recommendations}
