"""Centralized domain constants for cleaning-fleet simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

MIN_GRID_DIM = 3
"""Smallest generated grid side length in cells."""

MAX_GRID_DIM = 16
"""Largest generated grid side length in cells."""

GRID_COLS = 8
"""Default generated grid width in cells."""

GRID_ROWS = 8
"""Default generated grid height in cells."""

TICK_MS_MIN = 150
"""Fastest accepted tick interval in milliseconds."""

TICK_MS_MAX = 1200
"""Slowest accepted tick interval in milliseconds."""

DEFAULT_TICK_MS = 500
"""Default tick interval in milliseconds."""

MAX_TICKS = 10_000
"""Safety cap on ticks per headless run."""

ROBOT_COLORS: tuple[str, ...] = (
    "#22d3ee",
    "#f472b6",
    "#a78bfa",
    "#34d399",
    "#fb923c",
    "#facc15",
    "#f87171",
    "#60a5fa",
    "#c084fc",
    "#2dd4bf",
    "#e879f9",
    "#4ade80",
)
"""Base robot palette; generated fleets larger than this get derived hues."""

ROBOT_ID_PREFIX = "robot"
"""Generated robot ids are ``f"{ROBOT_ID_PREFIX}-{index}"``."""
