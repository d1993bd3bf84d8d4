"""Parquet persistence helpers for batch-run summaries and robot reports."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_rows(
    columns: dict[str, list[object]],
    path: Path,
    schema: pa.Schema,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated column rows to Parquet and clear in-memory buffers."""
    first_column = next(iter(columns.values()), [])
    if not first_column:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def empty_columns(schema: pa.Schema) -> dict[str, list[object]]:
    """Return an empty column buffer keyed by ``schema`` field names."""
    return {name: [] for name in schema.names}
