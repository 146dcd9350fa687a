"""Driver loop: paced generation stepping with termination filters and persistence."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from toroidal_life.config.constants import FLUSH_THRESHOLD
from toroidal_life.config.types import GridConfig, RunConfig, SimulationResult
from toroidal_life.domain.filters import (
    ExtinctionDetector,
    HaltDetector,
    ShortPeriodDetector,
    TerminationReason,
)
from toroidal_life.domain.grid import Grid
from toroidal_life.domain.patterns import get_pattern, place_centered
from toroidal_life.io.paths import generation_log_path, logs_dir, run_payload_path, runs_dir
from toroidal_life.io.schemas import GENERATION_LOG_SCHEMA, RUN_PAYLOAD_SCHEMA_VERSION
from toroidal_life.simulation.step import compute_generation_metrics

logger = logging.getLogger(__name__)


class GenerationLog:
    """Buffered generation-log rows written to one Parquet file in batches.

    Rows are held in memory until `flush_threshold` of them accumulate; the
    Parquet writer is opened on the first non-empty flush and every later
    flush appends to the same file.
    """

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = path
        self.flush_threshold = flush_threshold
        self._writer: pq.ParquetWriter | None = None
        self._columns: dict[str, list[int | float | str]] = {
            field.name: [] for field in GENERATION_LOG_SCHEMA
        }

    def append(
        self, run_id: str, generation: int, metrics: dict[str, float | int], elapsed_ms: float
    ) -> None:
        self._columns["run_id"].append(run_id)
        self._columns["generation"].append(generation)
        for key, value in metrics.items():
            self._columns[key].append(value)
        self._columns["elapsed_ms"].append(elapsed_ms)
        if len(self._columns["run_id"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        if not self._columns["run_id"]:
            return
        if self._writer is None:
            self._writer = pq.ParquetWriter(self.path, GENERATION_LOG_SCHEMA)
        self._writer.write_table(pa.Table.from_pydict(self._columns, schema=GENERATION_LOG_SCHEMA))
        for values in self._columns.values():
            values.clear()

    def close(self) -> None:
        """Flush remaining rows and close the writer, if one was opened."""
        try:
            self.flush()
        finally:
            if self._writer is not None:
                self._writer.close()
                self._writer = None


def _deterministic_run_id(grid_config: GridConfig, pattern: str | None) -> str:
    """Build reproducible run ID stable across runs for identical configs.

    Pattern runs ignore the seed, so their IDs carry the pattern instead.
    """
    if pattern is not None:
        return f"c{grid_config.cols}_r{grid_config.rows}_p{pattern}"
    return f"s{grid_config.seed}_c{grid_config.cols}_r{grid_config.rows}"


def _build_grid(grid_config: GridConfig, run_config: RunConfig, pattern: str | None) -> Grid:
    if pattern is None:
        return Grid.from_config(grid_config, workers=run_config.workers)
    grid = Grid.empty(grid_config.cols, grid_config.rows, workers=run_config.workers)
    place_centered(grid, get_pattern(pattern))
    return grid


def _run_one(
    grid_config: GridConfig,
    run_config: RunConfig,
    out_dir: Path,
    pattern: str | None,
    log: GenerationLog,
    sleep: Callable[[float], None],
    clock: Callable[[], float],
) -> SimulationResult:
    """Simulate one run, appending its rows to `log`."""
    run_id = _deterministic_run_id(grid_config, pattern)
    halt_detector = HaltDetector(window=run_config.halt_window)
    period_detector = ShortPeriodDetector(
        max_period=run_config.max_period, history_size=run_config.period_history_size
    )
    extinction_detector = ExtinctionDetector()
    interval = (
        1.0 / run_config.generations_per_second
        if run_config.generations_per_second is not None
        else None
    )

    terminated_at: int | None = None
    termination_reason: str | None = None
    logger.info("Starting run %s (%d generations)", run_id, run_config.generations)

    with _build_grid(grid_config, run_config, pattern) as grid:
        cols, rows = grid.dimensions()
        previous = grid.live_cells()
        halt_detector.observe(previous)
        period_detector.observe(previous)
        log.append(
            run_id,
            grid.generation,
            compute_generation_metrics(previous=previous, current=previous, cols=cols, rows=rows),
            0.0,
        )
        # An empty starting board never changes, so it ends before the first tick
        if run_config.enable_termination_filters and extinction_detector.observe(len(previous)):
            terminated_at = grid.generation
            termination_reason = TerminationReason.EXTINCTION.value

        while termination_reason is None and grid.generation < run_config.generations:
            started = clock()
            grid.advance()
            elapsed = clock() - started

            current = grid.live_cells()
            log.append(
                run_id,
                grid.generation,
                compute_generation_metrics(
                    previous=previous, current=current, cols=cols, rows=rows
                ),
                elapsed * 1000.0,
            )

            extinct = extinction_detector.observe(len(current))
            halted = halt_detector.observe(current)
            oscillating = period_detector.observe(current)
            if run_config.enable_termination_filters:
                if extinct:
                    termination_reason = TerminationReason.EXTINCTION.value
                elif halted:
                    termination_reason = TerminationReason.STILL_LIFE.value
                elif oscillating:
                    termination_reason = TerminationReason.OSCILLATION.value
                if termination_reason is not None:
                    terminated_at = grid.generation
                    break

            previous = current
            if interval is not None:
                delay = interval - (clock() - started)
                if delay > 0:
                    sleep(delay)

        generations_run = grid.generation
        final_population = grid.population()

    if termination_reason is not None:
        logger.info(
            "Run %s terminated at generation %d: %s", run_id, terminated_at, termination_reason
        )

    payload = {
        "run_id": run_id,
        "generations_run": generations_run,
        "final_population": final_population,
        "terminated_at": terminated_at,
        "termination_reason": termination_reason,
        "metadata": {
            "cols": grid_config.cols,
            "rows": grid_config.rows,
            "live_probability": None if pattern is not None else grid_config.live_probability,
            "seed": None if pattern is not None else grid_config.seed,
            "pattern": pattern,
            "generations": run_config.generations,
            "generations_per_second": run_config.generations_per_second,
            "workers": run_config.workers,
            "halt_window": run_config.halt_window,
            "max_period": run_config.max_period,
            "enable_termination_filters": run_config.enable_termination_filters,
            "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
        },
    }
    run_payload_path(out_dir, run_id).write_text(json.dumps(payload, ensure_ascii=False, indent=2))

    return SimulationResult(
        run_id=run_id,
        generations_run=generations_run,
        terminated_at=terminated_at,
        termination_reason=termination_reason,
        final_population=final_population,
    )


def run_batch(
    n_runs: int,
    grid_config: GridConfig,
    run_config: RunConfig,
    out_dir: Path,
    *,
    pattern: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.perf_counter,
    flush_threshold: int = FLUSH_THRESHOLD,
) -> list[SimulationResult]:
    """Run seeds `grid_config.seed .. grid_config.seed + n_runs - 1` into one output directory.

    Pattern runs are deterministic and ignore the seed, so they are limited
    to a single run.
    """
    if n_runs < 1:
        raise ValueError("n_runs must be >= 1")
    if pattern is not None:
        get_pattern(pattern)
        if n_runs > 1:
            raise ValueError("n_runs must be 1 when a pattern is seeded")

    out_dir = Path(out_dir)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    log = GenerationLog(generation_log_path(out_dir), flush_threshold=flush_threshold)
    results: list[SimulationResult] = []
    try:
        for i in range(n_runs):
            run_grid_config = GridConfig(
                cols=grid_config.cols,
                rows=grid_config.rows,
                live_probability=grid_config.live_probability,
                seed=grid_config.seed + i,
            )
            results.append(
                _run_one(run_grid_config, run_config, out_dir, pattern, log, sleep, clock)
            )
    finally:
        log.close()

    logger.info("Completed %d run(s) into %s", len(results), out_dir)
    return results


def run_simulation(
    grid_config: GridConfig,
    run_config: RunConfig,
    out_dir: Path,
    *,
    pattern: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.perf_counter,
    flush_threshold: int = FLUSH_THRESHOLD,
) -> SimulationResult:
    """Run a single simulation and persist its generation log and payload."""
    return run_batch(
        1,
        grid_config,
        run_config,
        out_dir,
        pattern=pattern,
        sleep=sleep,
        clock=clock,
        flush_threshold=flush_threshold,
    )[0]
