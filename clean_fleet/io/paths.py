"""Path construction helpers for batch-run output directories."""

from __future__ import annotations

from pathlib import Path


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run JSON payload directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    return runs_dir(out_dir) / f"{run_id}.json"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the run summary Parquet file."""
    return logs_dir(out_dir) / "run_summary.parquet"


def robot_reports_path(out_dir: Path) -> Path:
    """Return path to the per-robot report Parquet file."""
    return logs_dir(out_dir) / "robot_reports.parquet"
