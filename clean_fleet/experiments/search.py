"""CLI entrypoint for headless batch runs.

This module owns CLI argument parsing and dispatch. Domain logic lives in:

- ``clean_fleet.config``            – configuration dataclasses
- ``clean_fleet.simulation.engine`` – ``run_batch`` engine
- ``clean_fleet.io.schemas``        – Parquet schemas
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from clean_fleet.config.constants import DEFAULT_TICK_MS, GRID_COLS, GRID_ROWS, MAX_TICKS
from clean_fleet.config.types import BatchConfig, GridConfig, SimulationConfig
from clean_fleet.simulation.engine import run_batch

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    """CLI > file > default resolution for integer values."""
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    """CLI > file resolution for integers that may stay unset."""
    raw = _get_val(cli_val, key, file_cfg, None)
    if raw is None:
        return None
    return _coerce_int(raw, key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    """CLI > file > default resolution for string values."""
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _parse_grid_size(raw_grid_size: str) -> tuple[int, int]:
    """Parse a grid size formatted as ``COLSxROWS``."""
    tokens = raw_grid_size.strip().lower().split("x")
    if len(tokens) != 2:
        raise ValueError("grid-size must use COLSxROWS format")
    try:
        return int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise ValueError("grid-size must use integer COLSxROWS values") from exc


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run headless cleaning-fleet simulations")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first run")
    parser.add_argument("--grid-size", type=str, default=None, help="COLSxROWS, e.g. 8x8")
    parser.add_argument("--dirty-count", type=int, default=None)
    parser.add_argument("--tick-ms", type=int, default=None)
    parser.add_argument("--max-ticks", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--log-level", type=str, choices=LOG_LEVELS, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for batch runs.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    log_level = _get_str(args.log_level, "log_level", file_cfg, "WARNING").upper()
    if log_level not in LOG_LEVELS:
        parser.error(f"log-level must be one of {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        n_runs = _get_int(args.n_runs, "n_runs", file_cfg, 10)
        seed = _get_int(args.seed, "seed", file_cfg, 0)
        cols, rows = _parse_grid_size(
            _get_str(args.grid_size, "grid_size", file_cfg, f"{GRID_COLS}x{GRID_ROWS}")
        )
        dirty_count = _get_optional_int(args.dirty_count, "dirty_count", file_cfg)
        tick_ms = _get_int(args.tick_ms, "tick_ms", file_cfg, DEFAULT_TICK_MS)
        max_ticks = _get_int(args.max_ticks, "max_ticks", file_cfg, MAX_TICKS)
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
        batch_config = BatchConfig(
            n_runs=n_runs,
            base_seed=seed,
            out_dir=out_dir,
            grid=GridConfig(cols=cols, rows=rows, dirty_count=dirty_count),
            simulation=SimulationConfig(tick_interval_ms=tick_ms, max_ticks=max_ticks),
        )
    except ValueError as exc:
        parser.error(str(exc))

    results = run_batch(batch_config)
    summary = {
        "grid_size": f"{cols}x{rows}",
        "total_runs": len(results),
        "completed": sum(1 for r in results if r.completed),
        "hit_max_ticks": sum(1 for r in results if not r.completed),
        "mean_ticks": (sum(r.ticks for r in results) / len(results)) if results else 0.0,
        "out_dir": str(out_dir),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
