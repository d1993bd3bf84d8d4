"""One-shot task assignment: round-robin greedy nearest-neighbor partitioning."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from clean_fleet.domain.grid import Coord, Grid, Robot, manhattan


def assign_targets(robots: Sequence[Robot], dirty_cells: Sequence[Coord]) -> dict[str, list[Coord]]:
    """Partition every dirty cell into per-robot ordered target queues.

    Each round, robots pick in list order: the unassigned cell nearest to the
    last cell already queued for them (or their position when the queue is
    empty). Ties go to the earliest cell in ``dirty_cells``. Every robot id
    is present in the result, possibly with an empty queue.
    """
    assignment: dict[str, list[Coord]] = {robot.robot_id: [] for robot in robots}
    if not robots:
        return assignment

    remaining = list(dirty_cells)
    while remaining:
        for robot in robots:
            if not remaining:
                break
            queue = assignment[robot.robot_id]
            origin = queue[-1] if queue else robot.position
            best_idx = 0
            best_dist = manhattan(origin, remaining[0])
            for idx in range(1, len(remaining)):
                dist = manhattan(origin, remaining[idx])
                if dist < best_dist:
                    best_dist = dist
                    best_idx = idx
            queue.append(remaining.pop(best_idx))
    return assignment


def with_assigned_targets(grid: Grid) -> Grid:
    """Return a copy of ``grid`` whose robots carry freshly assigned queues."""
    assignment = assign_targets(grid.robots, grid.dirty_cells())
    return grid.with_robots(
        replace(robot, targets=tuple(assignment[robot.robot_id])) for robot in grid.robots
    )
