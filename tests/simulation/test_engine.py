"""Tests for the simulation driver (run_simulation / run_batch)."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from toroidal_life.config.types import GridConfig, RunConfig
from toroidal_life.io.schemas import GENERATION_LOG_SCHEMA
from toroidal_life.simulation.engine import GenerationLog, run_batch, run_simulation
from toroidal_life.simulation.step import compute_generation_metrics


def _no_sleep(_: float) -> None:
    raise AssertionError("unpaced runs must not sleep")


class TestRunSimulation:
    def test_writes_generation_log_and_payload(self, tmp_path: Path) -> None:
        result = run_simulation(
            GridConfig(cols=12, rows=12, live_probability=0.3, seed=4),
            RunConfig(generations=5, enable_termination_filters=False),
            tmp_path,
            sleep=_no_sleep,
        )
        assert result.run_id == "s4_c12_r12"
        assert result.generations_run == 5

        table = pq.read_table(tmp_path / "logs" / "generation_log.parquet")
        assert set(table.column_names) == {f.name for f in GENERATION_LOG_SCHEMA}
        assert table.column("generation").to_pylist() == [0, 1, 2, 3, 4, 5]
        assert table.column("population").to_pylist()[-1] == result.final_population

        payload = json.loads((tmp_path / "runs" / "s4_c12_r12.json").read_text())
        assert payload["metadata"]["seed"] == 4
        assert payload["termination_reason"] is None

    def test_block_terminates_as_still_life(self, tmp_path: Path) -> None:
        result = run_simulation(
            GridConfig(cols=10, rows=10),
            RunConfig(generations=50, halt_window=3),
            tmp_path,
            pattern="block",
            sleep=_no_sleep,
        )
        assert result.run_id == "c10_r10_pblock"
        assert result.termination_reason == "still_life"
        assert result.terminated_at == 3
        assert result.final_population == 4

    def test_blinker_terminates_as_oscillation(self, tmp_path: Path) -> None:
        result = run_simulation(
            GridConfig(cols=9, rows=9),
            RunConfig(generations=50),
            tmp_path,
            pattern="blinker",
            sleep=_no_sleep,
        )
        assert result.termination_reason == "oscillation"
        assert result.terminated_at == 3

    def test_empty_board_terminates_as_extinction(self, tmp_path: Path) -> None:
        result = run_simulation(
            GridConfig(cols=5, rows=5, live_probability=0.0),
            RunConfig(generations=10),
            tmp_path,
            sleep=_no_sleep,
        )
        assert result.termination_reason == "extinction"
        assert result.terminated_at == 0
        assert result.generations_run == 0
        assert result.final_population == 0
        table = pq.read_table(tmp_path / "logs" / "generation_log.parquet")
        assert table.column("generation").to_pylist() == [0]

    def test_births_and_deaths_logged_for_blinker(self, tmp_path: Path) -> None:
        run_simulation(
            GridConfig(cols=9, rows=9),
            RunConfig(generations=2, enable_termination_filters=False),
            tmp_path,
            pattern="blinker",
            sleep=_no_sleep,
        )
        table = pq.read_table(tmp_path / "logs" / "generation_log.parquet")
        assert table.column("births").to_pylist() == [0, 2, 2]
        assert table.column("deaths").to_pylist() == [0, 2, 2]
        assert table.column("population").to_pylist() == [3, 3, 3]

    def test_pacing_sleeps_remaining_interval(self, tmp_path: Path) -> None:
        sleeps: list[float] = []
        run_simulation(
            GridConfig(cols=6, rows=6, seed=1),
            RunConfig(generations=3, generations_per_second=10, enable_termination_filters=False),
            tmp_path,
            sleep=sleeps.append,
            clock=lambda: 0.0,
        )
        assert sleeps == pytest.approx([0.1, 0.1, 0.1])

    def test_parallel_run_matches_serial(self, tmp_path: Path) -> None:
        grid_config = GridConfig(cols=16, rows=16, live_probability=0.3, seed=2)
        serial = run_simulation(
            grid_config,
            RunConfig(generations=8, enable_termination_filters=False),
            tmp_path / "serial",
        )
        parallel = run_simulation(
            grid_config,
            RunConfig(generations=8, workers=4, enable_termination_filters=False),
            tmp_path / "parallel",
        )
        serial_log = pq.read_table(tmp_path / "serial" / "logs" / "generation_log.parquet")
        parallel_log = pq.read_table(tmp_path / "parallel" / "logs" / "generation_log.parquet")
        assert serial.final_population == parallel.final_population
        assert (
            serial_log.column("population").to_pylist()
            == parallel_log.column("population").to_pylist()
        )

    def test_unknown_pattern_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="pattern"):
            run_simulation(
                GridConfig(cols=5, rows=5), RunConfig(generations=1), tmp_path, pattern="x"
            )


    def test_pattern_payload_has_no_seed(self, tmp_path: Path) -> None:
        run_simulation(
            GridConfig(cols=10, rows=10, seed=5),
            RunConfig(generations=4, enable_termination_filters=False),
            tmp_path,
            pattern="glider",
            sleep=_no_sleep,
        )
        payload = json.loads((tmp_path / "runs" / "c10_r10_pglider.json").read_text())
        assert payload["metadata"]["seed"] is None
        assert payload["metadata"]["pattern"] == "glider"

    def test_mid_run_flushes_append_to_one_log(self, tmp_path: Path) -> None:
        run_simulation(
            GridConfig(cols=8, rows=8, live_probability=0.4, seed=3),
            RunConfig(generations=10, enable_termination_filters=False),
            tmp_path,
            sleep=_no_sleep,
            flush_threshold=4,
        )
        table = pq.read_table(tmp_path / "logs" / "generation_log.parquet")
        assert table.num_rows == 11
        assert table.column("generation").to_pylist() == list(range(11))


class TestRunBatch:
    def test_sequential_seeds_share_one_log(self, tmp_path: Path) -> None:
        results = run_batch(
            3,
            GridConfig(cols=8, rows=8, live_probability=0.4, seed=5),
            RunConfig(generations=4, enable_termination_filters=False),
            tmp_path,
        )
        run_ids = [r.run_id for r in results]
        assert run_ids == ["s5_c8_r8", "s6_c8_r8", "s7_c8_r8"]

        table = pq.read_table(tmp_path / "logs" / "generation_log.parquet")
        assert sorted(set(table.column("run_id").to_pylist())) == run_ids
        assert table.num_rows == 3 * 5
        assert sorted(p.stem for p in (tmp_path / "runs").glob("*.json")) == run_ids

    def test_pattern_batch_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="n_runs"):
            run_batch(
                3,
                GridConfig(cols=10, rows=10, seed=5),
                RunConfig(generations=4),
                tmp_path,
                pattern="glider",
            )
        assert not (tmp_path / "runs").exists()

    def test_zero_runs_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="n_runs"):
            run_batch(0, GridConfig(), RunConfig(), tmp_path)


def test_compute_generation_metrics() -> None:
    previous = frozenset({(0, 0), (1, 0)})
    current = frozenset({(1, 0), (2, 0), (3, 0)})
    metrics = compute_generation_metrics(previous=previous, current=current, cols=4, rows=2)
    assert metrics == {"population": 3, "density": 0.375, "births": 2, "deaths": 1}


class TestGenerationLog:
    def test_flushes_at_threshold(self, tmp_path: Path) -> None:
        path = tmp_path / "log.parquet"
        log = GenerationLog(path, flush_threshold=2)
        metrics = {"population": 1, "density": 0.5, "births": 0, "deaths": 0}
        log.append("run", 0, metrics, 0.0)
        assert not path.exists()
        log.append("run", 1, metrics, 0.0)
        log.append("run", 2, metrics, 0.0)
        log.close()
        assert pq.read_table(path).column("generation").to_pylist() == [0, 1, 2]

    def test_close_without_rows_writes_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "log.parquet"
        GenerationLog(path).close()
        assert not path.exists()

    def test_rejects_zero_threshold(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="flush_threshold"):
            GenerationLog(tmp_path / "log.parquet", flush_threshold=0)
