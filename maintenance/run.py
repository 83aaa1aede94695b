"""Main pipeline runner: validates inputs and runs the maintenance domains."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from maintenance.config import MaintenanceConfig, load_maintenance_config, load_overrides
from maintenance.domains import analytics, predictive, scheduling
from maintenance.domains.analytics.transform import analyses_to_logs
from maintenance.utils.io import write_output

type DomainResult = dict[str, bool | str | int]

console = Console()
logger = logging.getLogger("maintenance")

DOMAINS = {
    "predictive": predictive,
    "scheduling": scheduling,
    "analytics": analytics,
}

DOMAIN_SOURCES = {
    "predictive": ["readings"],
    "scheduling": ["technicians", "equipment", "inventory"],
    "analytics": ["tasks", "logs"],
}


def _default_config_path() -> Path | None:
    root = Path(__file__).parent.parent
    for candidate in (root / "maintenance.yaml", root / "pyproject.toml"):
        if candidate.exists():
            return candidate
    return None


def load_config(env: str, path: Path | None = None) -> MaintenanceConfig:
    config = load_maintenance_config(env)
    return load_overrides(config, path or _default_config_path())


def validate_all(config: MaintenanceConfig) -> list[DomainResult]:
    results = []
    for name in config.domains:
        module = DOMAINS[name]
        for source in DOMAIN_SOURCES[name]:
            label = f"{name}.{source}"
            match module.validate(source, data_dir=config.data_dir):
                case {"status": "ok", **rest}:
                    results.append({"domain": label, "valid": True, **rest})
                case {"status": "error", "message": msg}:
                    results.append({"domain": label, "valid": False, "error": msg})
                case _:
                    results.append({"domain": label, "valid": False, "error": "Unknown validation result"})
    return results


def _print_frame(title: str, df: pd.DataFrame, columns: list[str]) -> None:
    table = Table(title=title)
    shown = [c for c in columns if c in df.columns]
    for col in shown:
        table.add_column(col)
    for row in df[shown].itertuples(index=False):
        table.add_row(*("" if pd.isna(v) else str(v) for v in row))
    console.print(table)


def run_predictive(config: MaintenanceConfig, now: datetime) -> dict:
    output = predictive.run(data_dir=config.data_dir, now=now, thresholds=config.risk)
    _print_frame(
        "Risk analyses", output["analysis_frame"],
        ["equipment_id", "equipment_name", "risk_level", "predicted_failure_in_days", "confidence"],
    )
    write_output(output["analysis_frame"], config.output_dir / "risk_analyses.csv")
    write_output(output["sensor_analysis"], config.output_dir / "sensor_analysis.csv")
    return output


def run_scheduling(config: MaintenanceConfig, analyses: list, now: datetime) -> dict:
    output = scheduling.run(
        analyses,
        data_dir=config.data_dir,
        now=now,
        config=config.scheduling,
        weights=config.scoring,
    )
    _print_frame(
        "Scheduled tasks", output["scheduled"],
        ["equipment_name", "priority", "assigned_to", "estimated_duration", "scheduled_date"],
    )
    for conflict in output["conflicts"]:
        console.print(f"[yellow]{conflict}[/yellow]")

    write_output(output["scheduled"], config.output_dir / "scheduled_tasks.csv")
    write_output(output["unscheduled"], config.output_dir / "unscheduled_tasks.csv")
    write_output(output["technician_updates"], config.output_dir / "technician_updates.csv")
    return output


def _stored_history(fetch, data_dir: Path) -> pd.DataFrame | None:
    try:
        return fetch(data_dir)
    except FileNotFoundError as exc:
        logger.warning("%s; using this run's records only", exc)
        return None


def run_analytics(
    config: MaintenanceConfig,
    period: str | None,
    now: datetime,
    tasks: pd.DataFrame | None = None,
    logs: pd.DataFrame | None = None,
    equipment: pd.DataFrame | None = None,
) -> dict:
    output = analytics.run(
        tasks=tasks,
        logs=logs,
        equipment=equipment,
        period=period,
        as_of=now,
        data_dir=config.data_dir,
        config=config.analytics,
    )
    summary = output["summary"]

    table = Table(title="Recommendations")
    table.add_column("Priority")
    table.add_column("Title")
    table.add_column("Action")
    for rec in summary["recommendations"]:
        table.add_row(str(rec.priority), rec.title, rec.action)
    console.print(table)

    report = {
        "counts": summary["counts"],
        "insights": summary["insights"],
        "recommendations": [r.to_dict() for r in summary["recommendations"]],
    }
    path = config.output_dir / "analytics_summary.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2, default=str))
    write_output(output["completion_trends"], config.output_dir / "completion_trends.csv")
    return output


def run_all(config: MaintenanceConfig, period: str | None, now: datetime) -> None:
    console.print("[bold]Running predictive -> scheduling -> analytics...[/bold]")

    predicted = run_predictive(config, now)
    scheduled = run_scheduling(config, predicted["analyses"], now)

    run_tasks = pd.concat([scheduled["scheduled"], scheduled["unscheduled"]], ignore_index=True)
    run_logs = analyses_to_logs(predicted["analyses"])

    task_history = _stored_history(analytics.fetch_task_history, config.data_dir)
    log_history = _stored_history(analytics.fetch_maintenance_logs, config.data_dir)
    tasks = analytics.normalize_tasks(run_tasks)
    logs = analytics.normalize_logs(run_logs)
    if task_history is not None:
        tasks = pd.concat([analytics.normalize_tasks(task_history), tasks], ignore_index=True)
    if log_history is not None:
        logs = pd.concat([analytics.normalize_logs(log_history), logs], ignore_index=True)

    run_analytics(config, period, now, tasks=tasks, logs=logs, equipment=scheduled["equipment"])


def main():
    parser = argparse.ArgumentParser(description="Run the maintenance pipeline")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't run")
    parser.add_argument("--domain", choices=list(DOMAINS), help="Run a specific domain only")
    parser.add_argument("--env", default="development", help="production, staging or development")
    parser.add_argument("--config", type=Path, help="TOML or YAML file with config overrides")
    parser.add_argument("--period", choices=["7d", "30d", "90d"], help="Analytics window")
    parser.add_argument("--output", type=Path, help="Override the output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log assignment decisions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    config = load_config(args.env, args.config)
    if args.output:
        config = replace(config, output_dir=args.output)
    now = datetime.now()

    if args.validate:
        results = validate_all(config)
        table = Table(title="Validation Results")
        table.add_column("Source")
        table.add_column("Valid")
        table.add_column("Details")

        for r in results:
            status = "[green]✓[/green]" if r["valid"] else "[red]✗[/red]"
            detail = r.get("error", f"{r.get('row_count', 0)} rows")
            table.add_row(r["domain"], status, detail)

        console.print(table)

        if not all(r["valid"] for r in results):
            sys.exit(1)
        return

    match args.domain:
        case "predictive":
            run_predictive(config, now)
        case "scheduling":
            predicted = predictive.run(data_dir=config.data_dir, now=now, thresholds=config.risk)
            run_scheduling(config, predicted["analyses"], now)
        case "analytics":
            run_analytics(config, args.period, now)
        case _:
            run_all(config, args.period, now)


if __name__ == "__main__":
    main()
