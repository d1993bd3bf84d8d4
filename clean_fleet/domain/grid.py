"""Immutable grid world of cells and cleaning robots.

Snapshot invariant: a ``Grid`` is never mutated after construction. The tick
orchestrator builds each new snapshot from working copies, so readers holding
an older snapshot never observe a half-applied tick.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]
"""Grid coordinate ``(x, y)``; doubles as cell identity."""

NEIGHBOR_OFFSETS: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
"""Von Neumann neighbor offsets in fallback priority order."""


def manhattan(a: Coord, b: Coord) -> int:
    """Manhattan distance ``|dx| + |dy|`` between two coordinates."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class Cell:
    """A single grid cell and the colors of robots that passed through it."""

    x: int
    y: int
    dirty: bool = False
    trail_colors: tuple[str, ...] = ()

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Robot:
    """A cleaning robot with its ordered queue of dirty-cell targets."""

    robot_id: str
    x: int
    y: int
    color: str
    targets: tuple[Coord, ...] = ()

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    @property
    def idle(self) -> bool:
        return not self.targets


@dataclass(frozen=True)
class Grid:
    """Rectangular grid snapshot: ``cells[y][x]`` plus robots in fixed order."""

    cols: int
    rows: int
    cells: tuple[tuple[Cell, ...], ...]
    robots: tuple[Robot, ...] = ()

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError("grid dimensions must be >= 1")
        if len(self.cells) != self.rows:
            raise ValueError(f"cells must have {self.rows} rows, got {len(self.cells)}")
        for y, row in enumerate(self.cells):
            if len(row) != self.cols:
                raise ValueError(f"row {y} must have {self.cols} cells, got {len(row)}")
            for x, cell in enumerate(row):
                if (cell.x, cell.y) != (x, y):
                    raise ValueError(f"cell at index ({x}, {y}) reports ({cell.x}, {cell.y})")

        seen_ids: set[str] = set()
        seen_colors: set[str] = set()
        seen_positions: set[Coord] = set()
        for robot in self.robots:
            if robot.robot_id in seen_ids:
                raise ValueError(f"duplicate robot id: {robot.robot_id}")
            if robot.color in seen_colors:
                raise ValueError(f"duplicate robot color: {robot.color}")
            if not self.in_bounds(robot.x, robot.y):
                raise ValueError(f"robot {robot.robot_id} out of bounds at {robot.position}")
            if robot.position in seen_positions:
                raise ValueError(f"two robots share cell {robot.position}")
            for target in robot.targets:
                if not self.in_bounds(*target):
                    raise ValueError(f"robot {robot.robot_id} target out of bounds: {target}")
            seen_ids.add(robot.robot_id)
            seen_colors.add(robot.color)
            seen_positions.add(robot.position)

    @classmethod
    def create(
        cls,
        cols: int,
        rows: int,
        dirty: Iterable[Coord] = (),
        robots: Iterable[Robot] = (),
    ) -> Grid:
        """Build an idle grid from dirty coordinates and robot placements.

        Robots must start on clean cells.
        """
        dirty_set = set(dirty)
        for x, y in dirty_set:
            if not (0 <= x < cols and 0 <= y < rows):
                raise ValueError(f"dirty cell out of bounds: {(x, y)}")
        robot_tuple = tuple(robots)
        for robot in robot_tuple:
            if robot.position in dirty_set:
                raise ValueError(f"robot {robot.robot_id} placed on dirty cell {robot.position}")
        cells = tuple(
            tuple(Cell(x=x, y=y, dirty=(x, y) in dirty_set) for x in range(cols))
            for y in range(rows)
        )
        return cls(cols=cols, rows=rows, cells=cells, robots=robot_tuple)

    # -- queries -------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise ValueError(f"coordinate out of bounds: {(x, y)}")
        return self.cells[y][x]

    def is_dirty(self, x: int, y: int) -> bool:
        return self.cell(x, y).dirty

    def trail_at(self, x: int, y: int) -> tuple[str, ...]:
        return self.cell(x, y).trail_colors

    def robot_at(self, x: int, y: int) -> Robot | None:
        for robot in self.robots:
            if robot.x == x and robot.y == y:
                return robot
        return None

    def iter_cells(self) -> Iterator[Cell]:
        """Yield cells in row-major order (y outer, x inner)."""
        for row in self.cells:
            yield from row

    def dirty_cells(self) -> list[Coord]:
        """Dirty coordinates in row-major order."""
        return [cell.coord for cell in self.iter_cells() if cell.dirty]

    def dirty_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.dirty)

    def occupied(self) -> set[Coord]:
        return {robot.position for robot in self.robots}

    # -- builders ------------------------------------------------------------

    def with_robots(self, robots: Iterable[Robot]) -> Grid:
        """Return a copy of this grid carrying a different robot tuple."""
        return replace(self, robots=tuple(robots))

    def cleared_targets(self) -> Grid:
        """Return a copy with every robot's target queue emptied."""
        return self.with_robots(replace(robot, targets=()) for robot in self.robots)
