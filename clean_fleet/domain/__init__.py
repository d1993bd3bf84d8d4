"""Domain layer: grid model, run statistics, and initial-state generation."""

from clean_fleet.domain.generator import generate_grid, robot_color
from clean_fleet.domain.grid import NEIGHBOR_OFFSETS, Cell, Coord, Grid, Robot, manhattan
from clean_fleet.domain.stats import RobotCounters, RobotReport, RunningStats

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "NEIGHBOR_OFFSETS",
    "Robot",
    "RobotCounters",
    "RobotReport",
    "RunningStats",
    "generate_grid",
    "manhattan",
    "robot_color",
]
