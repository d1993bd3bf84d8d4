"""Random initial-state generator for cleaning runs.

Produces idle grids satisfying two invariants: fewer than half of the cells
are dirty, and the fleet has between 1 and ``max(1, dirty // 2)`` robots, all
standing on clean cells with distinct colors.
"""

from __future__ import annotations

import colorsys
from random import Random

from clean_fleet.config.constants import ROBOT_COLORS, ROBOT_ID_PREFIX
from clean_fleet.config.types import GridConfig
from clean_fleet.domain.grid import Coord, Grid, Robot

# Golden-ratio hue step keeps derived colors well separated
_HUE_STEP = 0.618033988749895


def robot_color(index: int) -> str:
    """Return a distinct hex color for the robot at ``index``."""
    if index < len(ROBOT_COLORS):
        return ROBOT_COLORS[index]
    hue = (index * _HUE_STEP) % 1.0
    red, green, blue = colorsys.hls_to_rgb(hue, 0.6, 0.75)
    return f"#{round(red * 255):02x}{round(green * 255):02x}{round(blue * 255):02x}"


def generate_grid(config: GridConfig, rng: Random) -> Grid:
    """Generate a random idle grid for ``config``."""
    cols, rows = config.cols, config.rows
    positions: list[Coord] = [(x, y) for y in range(rows) for x in range(cols)]
    rng.shuffle(positions)

    if config.dirty_count is not None:
        dirty_count = config.dirty_count
    else:
        dirty_count = rng.randint(1, config.max_dirty)
    dirty = positions[:dirty_count]

    max_robots = max(1, dirty_count // 2)
    n_robots = rng.randint(1, max_robots)
    clean_positions = positions[dirty_count:]
    robot_positions = clean_positions[: min(n_robots, len(clean_positions))]

    robots = []
    colors_used: set[str] = set()
    for index, (x, y) in enumerate(robot_positions):
        color = robot_color(index)
        suffix = 0
        while color in colors_used:
            suffix += 1
            color = robot_color(index + suffix * len(robot_positions))
        colors_used.add(color)
        robots.append(Robot(robot_id=f"{ROBOT_ID_PREFIX}-{index}", x=x, y=y, color=color))

    return Grid.create(cols=cols, rows=rows, dirty=dirty, robots=robots)
