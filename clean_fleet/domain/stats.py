"""Per-robot running counters and the frozen completion report."""

from __future__ import annotations

from dataclasses import dataclass, field

from clean_fleet.domain.grid import Coord, Robot


@dataclass(frozen=True)
class RobotReport:
    """Final tallies for one robot, emitted when a run completes."""

    robot_id: str
    color: str
    cells_traversed: int
    trash_collected: int
    visited_cells: tuple[Coord, ...]
    cleaned_cells: tuple[Coord, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "robot_id": self.robot_id,
            "color": self.color,
            "cells_traversed": self.cells_traversed,
            "trash_collected": self.trash_collected,
            "visited_cells": [list(c) for c in self.visited_cells],
            "cleaned_cells": [list(c) for c in self.cleaned_cells],
        }


@dataclass
class RobotCounters:
    """Mutable counters accumulated while a run is active."""

    cells_traversed: int = 0
    trash_collected: int = 0
    visited_cells: list[Coord] = field(default_factory=list)
    cleaned_cells: list[Coord] = field(default_factory=list)


class RunningStats:
    """Per-robot counters keyed by robot id, reset at every run start."""

    def __init__(self, robots: tuple[Robot, ...] | list[Robot] = ()) -> None:
        self._counters: dict[str, RobotCounters] = {}
        self.reset(robots)

    def reset(self, robots: tuple[Robot, ...] | list[Robot]) -> None:
        """Start fresh counters; each robot's starting coordinate is its first visit."""
        self._counters = {
            robot.robot_id: RobotCounters(visited_cells=[robot.position]) for robot in robots
        }

    def counters(self, robot_id: str) -> RobotCounters:
        if robot_id not in self._counters:
            self._counters[robot_id] = RobotCounters()
        return self._counters[robot_id]

    def record_move(self, robot_id: str, destination: Coord) -> None:
        counters = self.counters(robot_id)
        counters.cells_traversed += 1
        counters.visited_cells.append(destination)

    def record_clean(self, robot_id: str, coord: Coord) -> None:
        counters = self.counters(robot_id)
        counters.trash_collected += 1
        counters.cleaned_cells.append(coord)

    def total_collected(self) -> int:
        return sum(c.trash_collected for c in self._counters.values())

    def total_traversed(self) -> int:
        return sum(c.cells_traversed for c in self._counters.values())

    def freeze(self, robots: tuple[Robot, ...]) -> tuple[RobotReport, ...]:
        """Materialize reports in robot enumeration order."""
        reports: list[RobotReport] = []
        for robot in robots:
            counters = self._counters.get(robot.robot_id, RobotCounters())
            reports.append(
                RobotReport(
                    robot_id=robot.robot_id,
                    color=robot.color,
                    cells_traversed=counters.cells_traversed,
                    trash_collected=counters.trash_collected,
                    visited_cells=tuple(counters.visited_cells),
                    cleaned_cells=tuple(counters.cleaned_cells),
                )
            )
        return tuple(reports)
