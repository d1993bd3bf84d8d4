"""Headless batch engine: seeded grid generation, runs to completion, persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from clean_fleet.config.types import BatchConfig, GridConfig, RunResult, SimulationConfig
from clean_fleet.domain.generator import generate_grid
from clean_fleet.domain.grid import Grid
from clean_fleet.domain.stats import RobotReport
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
from clean_fleet.simulation.controller import SimulationController
from clean_fleet.simulation.persistence import empty_columns, flush_rows
from clean_fleet.simulation.scheduler import ManualScheduler

logger = logging.getLogger(__name__)

TERMINATION_COMPLETE = "complete"
TERMINATION_MAX_TICKS = "max_ticks"


@dataclass(frozen=True)
class RunOutcome:
    """Final state of one headless run."""

    grid: Grid
    ticks: int
    completed: bool
    reports: tuple[RobotReport, ...]

    @property
    def termination_reason(self) -> str:
        return TERMINATION_COMPLETE if self.completed else TERMINATION_MAX_TICKS


def _deterministic_run_id(grid_config: GridConfig, seed: int) -> str:
    """Build reproducible run ID stable across batches for identical seeds."""
    return f"g{grid_config.cols}x{grid_config.rows}_s{seed}"


def run_to_completion(
    grid: Grid,
    config: SimulationConfig | None = None,
    rng: Random | None = None,
) -> RunOutcome:
    """Drive ``grid`` through a controller until it is clean or ``max_ticks`` is hit."""
    sim_config = config or SimulationConfig()
    scheduler = ManualScheduler()
    controller = SimulationController(
        grid, config=sim_config, scheduler=scheduler, rng=rng or Random()
    )
    controller.play()
    while controller.playing and controller.ticks < sim_config.max_ticks:
        scheduler.fire()

    if controller.complete:
        return RunOutcome(
            grid=controller.grid,
            ticks=controller.ticks,
            completed=True,
            reports=controller.reports,
        )

    controller.pause()
    logger.warning(
        "Run stopped at max_ticks=%d with %d dirty cells left",
        sim_config.max_ticks,
        controller.grid.dirty_count(),
    )
    return RunOutcome(
        grid=controller.grid,
        ticks=controller.ticks,
        completed=False,
        reports=controller.stats.freeze(controller.grid.robots),
    )


def run_batch(config: BatchConfig) -> list[RunResult]:
    """Run seeded headless simulations and persist JSON/Parquet outputs."""
    out_dir = Path(config.out_dir)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    summary_writer: pq.ParquetWriter | None = None
    report_writer: pq.ParquetWriter | None = None
    summary_columns = empty_columns(RUN_SUMMARY_SCHEMA)
    report_columns = empty_columns(ROBOT_REPORT_SCHEMA)
    results: list[RunResult] = []

    try:
        for i in range(config.n_runs):
            seed = config.base_seed + i
            run_id = _deterministic_run_id(config.grid, seed)
            rng = Random(seed)
            grid = generate_grid(config.grid, rng)
            initial_dirty = grid.dirty_count()
            logger.info(
                "Run %s: %d robots, %d dirty cells", run_id, len(grid.robots), initial_dirty
            )
            outcome = run_to_completion(grid, config.simulation, rng)

            total_traversed = sum(r.cells_traversed for r in outcome.reports)
            total_collected = sum(r.trash_collected for r in outcome.reports)
            summary_row: dict[str, object] = {
                "run_id": run_id,
                "seed": seed,
                "cols": grid.cols,
                "rows": grid.rows,
                "n_robots": len(grid.robots),
                "initial_dirty": initial_dirty,
                "ticks": outcome.ticks,
                "completed": outcome.completed,
                "termination_reason": outcome.termination_reason,
                "total_traversed": total_traversed,
                "total_collected": total_collected,
            }
            for key, value in summary_row.items():
                summary_columns[key].append(value)
            for report in outcome.reports:
                report_columns["run_id"].append(run_id)
                report_columns["robot_id"].append(report.robot_id)
                report_columns["color"].append(report.color)
                report_columns["cells_traversed"].append(report.cells_traversed)
                report_columns["trash_collected"].append(report.trash_collected)
                report_columns["n_visited"].append(len(report.visited_cells))
                report_columns["n_cleaned"].append(len(report.cleaned_cells))

            summary_writer = flush_rows(
                summary_columns, run_summary_path(out_dir), RUN_SUMMARY_SCHEMA, summary_writer
            )
            report_writer = flush_rows(
                report_columns, robot_reports_path(out_dir), ROBOT_REPORT_SCHEMA, report_writer
            )

            run_payload = {
                **summary_row,
                "grid_config": {
                    "cols": config.grid.cols,
                    "rows": config.grid.rows,
                    "dirty_count": config.grid.dirty_count,
                },
                "simulation_config": {
                    "tick_interval_ms": config.simulation.tick_interval_ms,
                    "max_ticks": config.simulation.max_ticks,
                },
                "reports": [report.to_dict() for report in outcome.reports],
                "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
            }
            run_payload_path(out_dir, run_id).write_text(
                json.dumps(run_payload, ensure_ascii=False, indent=2)
            )

            results.append(
                RunResult(
                    run_id=run_id,
                    seed=seed,
                    completed=outcome.completed,
                    ticks=outcome.ticks,
                    initial_dirty=initial_dirty,
                    n_robots=len(grid.robots),
                    termination_reason=outcome.termination_reason,
                )
            )
    finally:
        if summary_writer is not None:
            summary_writer.close()
        if report_writer is not None:
            report_writer.close()

    return results
