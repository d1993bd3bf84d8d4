"""Tests for the play/pause/reset controller and its timer sources."""

from __future__ import annotations

import asyncio
from random import Random

import pytest

from clean_fleet.config.types import SimulationConfig
from clean_fleet.domain.grid import Grid, Robot
from clean_fleet.domain.stats import RobotReport
from clean_fleet.simulation.controller import RunState, SimulationController
from clean_fleet.simulation.scheduler import AsyncioScheduler, ManualScheduler


def _corridor() -> Grid:
    return Grid.create(
        cols=4, rows=1, dirty=[(3, 0)], robots=[Robot("r0", 0, 0, "#ff0000")]
    )


def _pair() -> Grid:
    return Grid.create(
        cols=5,
        rows=1,
        dirty=[(1, 0), (3, 0)],
        robots=[Robot("r0", 0, 0, "#ff0000"), Robot("r1", 4, 0, "#00ff00")],
    )


def _controller(grid: Grid, **kwargs) -> tuple[SimulationController, ManualScheduler]:
    scheduler = ManualScheduler()
    controller = SimulationController(grid, scheduler=scheduler, rng=Random(0), **kwargs)
    return controller, scheduler


class TestPlay:
    def test_initial_state_idle(self) -> None:
        controller, scheduler = _controller(_corridor())
        assert controller.state == RunState.IDLE
        assert not controller.playing
        assert not scheduler.running
        assert controller.reports == ()

    def test_play_assigns_and_starts_timer(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        assert controller.state == RunState.RUNNING
        assert scheduler.running
        assert scheduler.interval_s == pytest.approx(0.5)
        assert controller.grid.robots[0].targets == ((3, 0),)

    def test_runs_to_completion_on_timer(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        fired = 0
        while scheduler.fire():
            fired += 1
        assert fired == 3
        assert controller.complete
        assert controller.ticks == 3
        assert not scheduler.running
        (report,) = controller.reports
        assert report.robot_id == "r0"
        assert report.cells_traversed == 3
        assert report.trash_collected == 1
        assert report.visited_cells == ((0, 0), (1, 0), (2, 0), (3, 0))
        assert report.cleaned_cells == ((3, 0),)

    def test_two_robots_complete_after_one_tick(self) -> None:
        controller, scheduler = _controller(_pair())
        controller.play()
        scheduler.fire()
        assert controller.complete
        assert [r.trash_collected for r in controller.reports] == [1, 1]

    def test_play_while_playing_is_noop(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        scheduler.fire()
        controller.play()
        assert controller.grid.robots[0].position == (1, 0)
        assert controller.stats.counters("r0").cells_traversed == 1

    def test_dirty_cells_without_robots_rejected(self) -> None:
        controller, scheduler = _controller(Grid.create(cols=3, rows=3, dirty=[(1, 1)]))
        with pytest.raises(ValueError, match="no robots"):
            controller.play()
        assert not scheduler.running

    def test_clean_grid_completes_immediately(self) -> None:
        grid = Grid.create(cols=3, rows=3, robots=[Robot("r0", 0, 0, "#ff0000")])
        controller, scheduler = _controller(grid)
        controller.play()
        assert controller.complete
        assert not scheduler.running
        assert controller.reports[0].cells_traversed == 0


class TestPauseResume:
    def test_pause_stops_ticks(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        scheduler.fire()
        controller.pause()
        assert controller.state == RunState.IDLE
        assert not scheduler.fire()
        assert controller.grid.robots[0].position == (1, 0)

    def test_resume_keeps_targets_and_stats(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        scheduler.fire()
        controller.pause()
        controller.play()
        while scheduler.fire():
            pass
        assert controller.complete
        assert controller.ticks == 3
        assert controller.reports[0].cells_traversed == 3

    def test_stale_timer_callback_ignored_after_pause(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        controller.pause()
        controller._on_timer()
        assert controller.ticks == 0

    def test_manual_tick_before_play_is_noop(self) -> None:
        controller, _ = _controller(_corridor())
        grid = controller.tick()
        assert grid is controller.grid
        assert controller.ticks == 0

    def test_manual_tick_while_paused_is_noop(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        scheduler.fire()
        controller.pause()
        controller.tick()
        assert controller.ticks == 1
        assert controller.grid.robots[0].position == (1, 0)
        assert controller.stats.counters("r0").cells_traversed == 1


class TestDefaultScheduler:
    def test_play_outside_event_loop_leaves_controller_stopped(self) -> None:
        controller = SimulationController(_corridor(), rng=Random(0))
        with pytest.raises(RuntimeError, match="running event loop"):
            controller.play()
        assert not controller.playing
        assert controller.state == RunState.IDLE
        controller.tick()
        assert controller.ticks == 0

    def test_play_inside_event_loop_after_failed_start(self) -> None:
        controller = SimulationController(
            _pair(), config=SimulationConfig(tick_interval_ms=150), rng=Random(0)
        )
        with pytest.raises(RuntimeError):
            controller.play()

        async def scenario() -> None:
            controller.play()
            assert controller.playing
            for _ in range(40):
                if controller.complete:
                    break
                await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert controller.complete
        assert [r.trash_collected for r in controller.reports] == [1, 1]


class TestReset:
    def test_reset_discards_run(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        scheduler.fire()
        fresh = _pair()
        controller.reset(fresh)
        assert controller.grid is fresh
        assert controller.state == RunState.IDLE
        assert controller.ticks == 0
        assert controller.reports == ()
        assert not scheduler.running

    def test_reset_after_complete_allows_new_run(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        while scheduler.fire():
            pass
        controller.reset(_pair())
        controller.play()
        scheduler.fire()
        assert controller.complete
        assert [r.robot_id for r in controller.reports] == ["r0", "r1"]

    def test_play_after_complete_starts_fresh_counters(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        while scheduler.fire():
            pass
        controller.play()
        assert controller.complete
        assert controller.ticks == 0
        assert controller.reports[0].cells_traversed == 0
        assert controller.reports[0].visited_cells == ((3, 0),)


class TestTickInterval:
    def test_bounds(self) -> None:
        controller, _ = _controller(_corridor())
        with pytest.raises(ValueError):
            controller.set_tick_interval(149)
        with pytest.raises(ValueError, match="tick_interval_ms"):
            controller.set_tick_interval(1201)
        assert controller.tick_interval_ms == 500
        controller.set_tick_interval(150)
        assert controller.tick_interval_ms == 150

    def test_restarts_timer_when_playing(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.play()
        controller.set_tick_interval(200)
        assert scheduler.running
        assert scheduler.interval_s == pytest.approx(0.2)

    def test_does_not_start_timer_when_idle(self) -> None:
        controller, scheduler = _controller(_corridor())
        controller.set_tick_interval(800)
        assert not scheduler.running
        controller.play()
        assert scheduler.interval_s == pytest.approx(0.8)

    def test_config_sets_initial_interval(self) -> None:
        controller, _ = _controller(_corridor(), config=SimulationConfig(tick_interval_ms=300))
        assert controller.tick_interval_ms == 300


class TestCompletionCallback:
    def test_called_once_with_reports(self) -> None:
        seen: list[tuple[RobotReport, ...]] = []
        controller, scheduler = _controller(_pair(), on_complete=seen.append)
        controller.play()
        while scheduler.fire():
            pass
        controller.tick()
        assert len(seen) == 1
        assert seen[0] == controller.reports


class TestAsyncioScheduler:
    def test_drives_run_to_completion(self) -> None:
        async def scenario() -> SimulationController:
            controller = SimulationController(
                _pair(),
                config=SimulationConfig(tick_interval_ms=150),
                scheduler=AsyncioScheduler(),
                rng=Random(0),
            )
            controller.play()
            for _ in range(40):
                if controller.complete:
                    break
                await asyncio.sleep(0.05)
            return controller

        controller = asyncio.run(scenario())
        assert controller.complete
        assert controller.ticks == 1

    def test_stop_prevents_callbacks(self) -> None:
        calls: list[int] = []

        async def scenario() -> None:
            scheduler = AsyncioScheduler()
            scheduler.start(lambda: calls.append(1), 0.01)
            assert scheduler.running
            scheduler.stop()
            assert not scheduler.running
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert calls == []

    def test_fires_repeatedly_until_stopped(self) -> None:
        calls: list[int] = []

        async def scenario() -> None:
            scheduler = AsyncioScheduler()

            def callback() -> None:
                calls.append(1)
                if len(calls) == 3:
                    scheduler.stop()

            scheduler.start(callback, 0.005)
            await asyncio.sleep(0.2)

        asyncio.run(scenario())
        assert len(calls) == 3
