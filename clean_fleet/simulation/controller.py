"""Play/pause/reset lifecycle around the tick orchestrator.

State machine per run::

    IDLE --play--> ASSIGNING --> RUNNING --(no dirty cells)--> COMPLETE
    RUNNING --pause--> IDLE (targets and stats kept; play resumes)
    any --reset(grid)--> IDLE (targets, stats and reports discarded)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from enum import Enum
from random import Random

from clean_fleet.config.types import SimulationConfig
from clean_fleet.domain.grid import Grid
from clean_fleet.domain.stats import RobotReport, RunningStats
from clean_fleet.simulation.assignment import with_assigned_targets
from clean_fleet.simulation.scheduler import AsyncioScheduler, Scheduler
from clean_fleet.simulation.tick import advance, is_complete

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Lifecycle state of the active run."""

    IDLE = "idle"
    ASSIGNING = "assigning"
    RUNNING = "running"
    COMPLETE = "complete"


class SimulationController:
    """Owns the current grid snapshot and the timer that advances it.

    Without an explicit ``scheduler`` the controller uses an
    ``AsyncioScheduler``, so ``play()`` must then be called from code running
    on an asyncio event loop. Headless callers pass a ``ManualScheduler``.
    """

    def __init__(
        self,
        grid: Grid,
        config: SimulationConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: Random | None = None,
        on_complete: Callable[[tuple[RobotReport, ...]], None] | None = None,
    ) -> None:
        self._config = config or SimulationConfig()
        self._scheduler: Scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._rng = rng if rng is not None else Random()
        self._on_complete = on_complete
        self._grid = grid
        self._stats = RunningStats()
        self._state = RunState.IDLE
        self._assigned = False
        self._reports: tuple[RobotReport, ...] = ()
        self._ticks = 0

    # -- observation -----------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def playing(self) -> bool:
        return self._state == RunState.RUNNING

    @property
    def complete(self) -> bool:
        return self._state == RunState.COMPLETE

    @property
    def reports(self) -> tuple[RobotReport, ...]:
        """Per-robot reports; empty until the run completes."""
        return self._reports

    @property
    def stats(self) -> RunningStats:
        return self._stats

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def tick_interval_ms(self) -> int:
        return self._config.tick_interval_ms

    # -- control surface -------------------------------------------------------

    def play(self) -> None:
        """Start a new run, or resume a paused one without reassigning."""
        if self.playing:
            return
        if not self._assigned:
            if self._grid.dirty_count() > 0 and not self._grid.robots:
                raise ValueError("grid has dirty cells but no robots")
            self._state = RunState.ASSIGNING
            self._grid = with_assigned_targets(self._grid)
            self._stats.reset(self._grid.robots)
            self._reports = ()
            self._ticks = 0
            self._assigned = True
            logger.info(
                "Run started: %dx%d grid, %d robots, %d dirty cells",
                self._grid.cols,
                self._grid.rows,
                len(self._grid.robots),
                self._grid.dirty_count(),
            )
            if is_complete(self._grid):
                self._finish()
                return
        try:
            self._scheduler.start(self._on_timer, self._config.tick_interval_s)
        except RuntimeError:
            # Assigned but not running: a later play() resumes like after pause()
            self._state = RunState.IDLE
            raise
        self._state = RunState.RUNNING

    def pause(self) -> None:
        """Stop the timer; the grid, target queues and counters are kept."""
        self._scheduler.stop()
        if self._state == RunState.RUNNING:
            self._state = RunState.IDLE

    def reset(self, grid: Grid) -> None:
        """Pause and install ``grid`` as a fresh, unassigned run."""
        self.pause()
        self._grid = grid
        self._stats = RunningStats()
        self._reports = ()
        self._ticks = 0
        self._assigned = False
        self._state = RunState.IDLE

    def set_tick_interval(self, ms: int) -> None:
        """Change the tick cadence; restarts the timer when playing."""
        self._config = replace(self._config, tick_interval_ms=ms)
        if self.playing:
            self._scheduler.start(self._on_timer, self._config.tick_interval_s)

    def tick(self) -> Grid:
        """Advance a playing run by one step and return the new snapshot.

        No-op while idle, paused or complete.
        """
        if not self.playing:
            return self._grid
        self._grid = advance(self._grid, self._stats, self._rng)
        self._ticks += 1
        logger.debug("Tick %d: %d dirty cells left", self._ticks, self._grid.dirty_count())
        if is_complete(self._grid):
            self._finish()
        return self._grid

    # -- internals -------------------------------------------------------------

    def _on_timer(self) -> None:
        self.tick()

    def _finish(self) -> None:
        self._scheduler.stop()
        self._state = RunState.COMPLETE
        self._assigned = False
        self._reports = self._stats.freeze(self._grid.robots)
        logger.info(
            "Run complete after %d ticks: %d cells cleaned",
            self._ticks,
            self._stats.total_collected(),
        )
        if self._on_complete is not None:
            self._on_complete(self._reports)
