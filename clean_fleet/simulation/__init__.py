"""Simulation engine: assignment, movement, ticks, lifecycle, and batch runs."""

from clean_fleet.simulation.assignment import assign_targets, with_assigned_targets
from clean_fleet.simulation.controller import RunState, SimulationController
from clean_fleet.simulation.engine import RunOutcome, run_batch, run_to_completion
from clean_fleet.simulation.movement import (
    candidate_moves,
    free_neighbors,
    step_toward,
    wander_step,
)
from clean_fleet.simulation.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from clean_fleet.simulation.tick import advance, is_complete

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "RunOutcome",
    "RunState",
    "Scheduler",
    "SimulationController",
    "advance",
    "assign_targets",
    "candidate_moves",
    "free_neighbors",
    "is_complete",
    "run_batch",
    "run_to_completion",
    "step_toward",
    "wander_step",
    "with_assigned_targets",
]
