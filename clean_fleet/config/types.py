"""Configuration dataclasses and result containers for cleaning runs.

All frozen dataclasses that parameterise grid generation, the tick cadence,
and headless batch runs live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from clean_fleet.config.constants import (
    DEFAULT_TICK_MS,
    GRID_COLS,
    GRID_ROWS,
    MAX_GRID_DIM,
    MAX_TICKS,
    MIN_GRID_DIM,
    TICK_MS_MAX,
    TICK_MS_MIN,
)

__all__ = [
    "BatchConfig",
    "GridConfig",
    "RunResult",
    "SimulationConfig",
    "max_dirty_for",
]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def max_dirty_for(cols: int, rows: int) -> int:
    """Largest dirty-cell count that stays strictly below half of the grid."""
    return (cols * rows) // 2 - 1


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Top-level result for one headless cleaning run."""

    run_id: str
    seed: int
    completed: bool
    ticks: int
    initial_dirty: int
    n_robots: int
    termination_reason: str | None


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridConfig:
    """Initial-state generator parameters."""

    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    dirty_count: int | None = None
    """Requested dirty cells; ``None`` draws a random count. Must stay below 50%."""

    def __post_init__(self) -> None:
        for name, value in (("cols", self.cols), ("rows", self.rows)):
            if not MIN_GRID_DIM <= value <= MAX_GRID_DIM:
                raise ValueError(f"{name} must be in [{MIN_GRID_DIM}, {MAX_GRID_DIM}]")
        if self.dirty_count is not None:
            if self.dirty_count < 1:
                raise ValueError("dirty_count must be >= 1")
            if self.dirty_count > self.max_dirty:
                raise ValueError(
                    f"dirty_count must be <= {self.max_dirty} for a "
                    f"{self.cols}x{self.rows} grid, got {self.dirty_count}"
                )

    @property
    def max_dirty(self) -> int:
        return max_dirty_for(self.cols, self.rows)


@dataclass(frozen=True)
class SimulationConfig:
    """Tick cadence and safety limits for one run."""

    tick_interval_ms: int = DEFAULT_TICK_MS
    max_ticks: int = MAX_TICKS

    def __post_init__(self) -> None:
        if not TICK_MS_MIN <= self.tick_interval_ms <= TICK_MS_MAX:
            raise ValueError(f"tick_interval_ms must be in [{TICK_MS_MIN}, {TICK_MS_MAX}]")
        if self.max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0


@dataclass(frozen=True)
class BatchConfig:
    """Settings for a seeded batch of headless runs."""

    n_runs: int = 10
    base_seed: int = 0
    out_dir: Path = Path("data")
    grid: GridConfig = field(default_factory=GridConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def __post_init__(self) -> None:
        if self.n_runs < 1:
            raise ValueError("n_runs must be >= 1")
