"""Tick orchestrator: advance a grid snapshot by exactly one discrete step.

Robots act sequentially in their enumeration order. The occupied set seen by
robot ``i`` holds the already-updated positions of robots ``0..i-1`` and the
pre-tick positions of robots ``i+1..N-1``, so earlier robots get first claim
on contested cells.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random

from clean_fleet.domain.grid import Cell, Coord, Grid, Robot, manhattan
from clean_fleet.domain.stats import RunningStats
from clean_fleet.simulation.movement import step_toward, wander_step

logger = logging.getLogger(__name__)


@dataclass
class _WorkingRobot:
    """Mutable per-tick copy of a robot."""

    robot_id: str
    x: int
    y: int
    color: str
    targets: list[Coord] = field(default_factory=list)

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    def freeze(self) -> Robot:
        return Robot(
            robot_id=self.robot_id,
            x=self.x,
            y=self.y,
            color=self.color,
            targets=tuple(self.targets),
        )


class _WorkingGrid:
    """Mutable copy of a snapshot; discarded once the new snapshot is built."""

    def __init__(self, grid: Grid) -> None:
        self.cols = grid.cols
        self.rows = grid.rows
        self.dirty = [[cell.dirty for cell in row] for row in grid.cells]
        self.trails = [[list(cell.trail_colors) for cell in row] for row in grid.cells]
        self.robots = [
            _WorkingRobot(
                robot_id=r.robot_id, x=r.x, y=r.y, color=r.color, targets=list(r.targets)
            )
            for r in grid.robots
        ]

    def is_dirty(self, coord: Coord) -> bool:
        return self.dirty[coord[1]][coord[0]]

    def mark_trail(self, robot: _WorkingRobot) -> None:
        trail = self.trails[robot.y][robot.x]
        if robot.color not in trail:
            trail.append(robot.color)

    def clean(self, robot: _WorkingRobot, stats: RunningStats) -> None:
        """Clean the robot's cell and drop that cell from every queue."""
        coord = robot.position
        self.dirty[robot.y][robot.x] = False
        stats.record_clean(robot.robot_id, coord)
        for other in self.robots:
            other.targets = [t for t in other.targets if t != coord]

    def occupied_except(self, index: int) -> set[Coord]:
        return {r.position for j, r in enumerate(self.robots) if j != index}

    def freeze(self) -> Grid:
        cells = tuple(
            tuple(
                Cell(x=x, y=y, dirty=self.dirty[y][x], trail_colors=tuple(self.trails[y][x]))
                for x in range(self.cols)
            )
            for y in range(self.rows)
        )
        return Grid(
            cols=self.cols,
            rows=self.rows,
            cells=cells,
            robots=tuple(r.freeze() for r in self.robots),
        )


def _act(work: _WorkingGrid, index: int, stats: RunningStats, rng: Random) -> None:
    """Run trail marking and the clean-or-move branch for one robot."""
    robot = work.robots[index]
    work.mark_trail(robot)

    if work.is_dirty(robot.position):
        work.clean(robot, stats)
        return

    while robot.targets and not work.is_dirty(robot.targets[0]):
        robot.targets.pop(0)

    occupied = work.occupied_except(index)
    if robot.targets:
        destination = step_toward(robot.position, robot.targets[0], occupied, work.cols, work.rows)
    else:
        destination = wander_step(robot.position, occupied, work.cols, work.rows, rng)
    if destination is None:
        return

    robot.x, robot.y = destination
    stats.record_move(robot.robot_id, destination)
    # Arrival cleaning: a robot stepping onto a dirty cell cleans it this tick
    if work.is_dirty(destination):
        work.clean(robot, stats)


def _find_orphans(work_robots: list[_WorkingRobot], dirty_cells: list[Coord]) -> list[Coord]:
    """Dirty cells not referenced by any robot's queue, in the given order."""
    assigned = {t for r in work_robots for t in r.targets}
    return [c for c in dirty_cells if c not in assigned]


def _closest(robots: list[_WorkingRobot], coord: Coord) -> _WorkingRobot | None:
    """Closest robot to ``coord``; ties go to the first in enumeration order."""
    best: _WorkingRobot | None = None
    best_dist = 0
    for robot in robots:
        dist = manhattan(robot.position, coord)
        if best is None or dist < best_dist:
            best = robot
            best_dist = dist
    return best


def _reassign_orphans(work: _WorkingGrid) -> int:
    """Hand every orphaned dirty cell to the nearest idle robot, else the nearest robot."""
    dirty_cells = [
        (x, y) for y in range(work.rows) for x in range(work.cols) if work.dirty[y][x]
    ]
    orphans = _find_orphans(work.robots, dirty_cells)
    for orphan in orphans:
        idle = [r for r in work.robots if not r.targets]
        owner = _closest(idle, orphan) or _closest(work.robots, orphan)
        if owner is not None:
            owner.targets.append(orphan)
    return len(orphans)


def advance(grid: Grid, stats: RunningStats, rng: Random) -> Grid:
    """Return the snapshot one tick after ``grid``; ``stats`` is updated in place."""
    if not grid.robots:
        return grid

    work = _WorkingGrid(grid)
    for index in range(len(work.robots)):
        _act(work, index, stats, rng)

    n_orphans = _reassign_orphans(work)
    if n_orphans:
        logger.debug("Reassigned %d orphaned dirty cells", n_orphans)
    return work.freeze()


def is_complete(grid: Grid) -> bool:
    """True once no cell in ``grid`` is dirty."""
    return grid.dirty_count() == 0
