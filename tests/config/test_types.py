"""Tests for clean_fleet.config.types validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from clean_fleet.config.types import (
    BatchConfig,
    GridConfig,
    SimulationConfig,
    max_dirty_for,
)


class TestGridConfig:
    def test_defaults_valid(self) -> None:
        config = GridConfig()
        assert config.dirty_count is None

    @pytest.mark.parametrize(("cols", "rows"), [(2, 5), (5, 2), (17, 5), (5, 17)])
    def test_dimension_bounds(self, cols: int, rows: int) -> None:
        with pytest.raises(ValueError):
            GridConfig(cols=cols, rows=rows)

    def test_dirty_count_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="dirty_count"):
            GridConfig(dirty_count=0)

    def test_dirty_count_above_half_rejected(self) -> None:
        GridConfig(cols=8, rows=8, dirty_count=31)
        with pytest.raises(ValueError, match="dirty_count must be <= 31"):
            GridConfig(cols=8, rows=8, dirty_count=32)
        with pytest.raises(ValueError, match="dirty_count"):
            GridConfig(cols=8, rows=8, dirty_count=100)

    def test_max_dirty(self) -> None:
        assert GridConfig(cols=3, rows=3).max_dirty == 3
        assert GridConfig(cols=16, rows=16).max_dirty == 127
        assert max_dirty_for(4, 4) == 7


class TestSimulationConfig:
    def test_tick_interval_bounds(self) -> None:
        SimulationConfig(tick_interval_ms=150)
        SimulationConfig(tick_interval_ms=1200)
        with pytest.raises(ValueError, match="tick_interval_ms"):
            SimulationConfig(tick_interval_ms=149)
        with pytest.raises(ValueError, match="tick_interval_ms"):
            SimulationConfig(tick_interval_ms=1201)

    def test_max_ticks_positive(self) -> None:
        with pytest.raises(ValueError, match="max_ticks"):
            SimulationConfig(max_ticks=0)

    def test_tick_interval_seconds(self) -> None:
        assert SimulationConfig(tick_interval_ms=250).tick_interval_s == pytest.approx(0.25)


class TestBatchConfig:
    def test_n_runs_positive(self) -> None:
        with pytest.raises(ValueError, match="n_runs"):
            BatchConfig(n_runs=0)

    def test_defaults(self) -> None:
        config = BatchConfig()
        assert config.out_dir == Path("data")
        assert config.grid == GridConfig()
        assert config.simulation == SimulationConfig()
