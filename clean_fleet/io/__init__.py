"""Persistence contracts: Parquet schemas and output path helpers."""

from clean_fleet.io.paths import (
    logs_dir,
    robot_reports_path,
    run_payload_path,
    run_summary_path,
    runs_dir,
)
from clean_fleet.io.schemas import (
    ROBOT_REPORT_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    RUN_SUMMARY_SCHEMA,
)

__all__ = [
    "ROBOT_REPORT_SCHEMA",
    "RUN_PAYLOAD_SCHEMA_VERSION",
    "RUN_SUMMARY_SCHEMA",
    "logs_dir",
    "robot_reports_path",
    "run_payload_path",
    "run_summary_path",
    "runs_dir",
]
