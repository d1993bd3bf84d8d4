"""Configuration layer: constants and typed config dataclasses."""

from clean_fleet.config.constants import (
    DEFAULT_TICK_MS,
    GRID_COLS,
    GRID_ROWS,
    MAX_GRID_DIM,
    MAX_TICKS,
    MIN_GRID_DIM,
    ROBOT_COLORS,
    ROBOT_ID_PREFIX,
    TICK_MS_MAX,
    TICK_MS_MIN,
)
from clean_fleet.config.types import (
    BatchConfig,
    GridConfig,
    RunResult,
    SimulationConfig,
    max_dirty_for,
)

__all__ = [
    "BatchConfig",
    "DEFAULT_TICK_MS",
    "GRID_COLS",
    "GRID_ROWS",
    "GridConfig",
    "MAX_GRID_DIM",
    "MAX_TICKS",
    "MIN_GRID_DIM",
    "ROBOT_COLORS",
    "ROBOT_ID_PREFIX",
    "RunResult",
    "SimulationConfig",
    "TICK_MS_MAX",
    "TICK_MS_MIN",
    "max_dirty_for",
]
