"""Parquet schema definitions for batch-run artifacts.

Both Arrow schemas used for persisting run summaries and per-robot reports
are centralised here so the engine and its tests work against the same
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_PAYLOAD_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Batch-run schemas
# ---------------------------------------------------------------------------

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("cols", pa.int64()),
        ("rows", pa.int64()),
        ("n_robots", pa.int64()),
        ("initial_dirty", pa.int64()),
        ("ticks", pa.int64()),
        ("completed", pa.bool_()),
        ("termination_reason", pa.string()),
        ("total_traversed", pa.int64()),
        ("total_collected", pa.int64()),
    ]
)

ROBOT_REPORT_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("robot_id", pa.string()),
        ("color", pa.string()),
        ("cells_traversed", pa.int64()),
        ("trash_collected", pa.int64()),
        ("n_visited", pa.int64()),
        ("n_cleaned", pa.int64()),
    ]
)
