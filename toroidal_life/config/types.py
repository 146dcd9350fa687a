"""Configuration dataclasses for grid construction and simulation runs."""

from __future__ import annotations

from dataclasses import dataclass

from toroidal_life.config.constants import (
    GRID_COLS,
    GRID_ROWS,
    HALT_WINDOW,
    LIVE_PROBABILITY,
    MAX_PERIOD,
    NUM_GENERATIONS,
    PERIOD_HISTORY_SIZE,
)

__all__ = [
    "GridConfig",
    "RunConfig",
    "SimulationResult",
]

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Top-level result for one simulated run."""

    run_id: str
    generations_run: int
    terminated_at: int | None
    termination_reason: str | None
    final_population: int


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridConfig:
    """Board dimensions and seeding parameters."""

    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    live_probability: float = LIVE_PROBABILITY
    seed: int = 0

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError("grid dimensions must be >= 1")
        if not 0.0 <= self.live_probability <= 1.0:
            raise ValueError("live_probability must be in [0.0, 1.0]")


@dataclass(frozen=True)
class RunConfig:
    """Driver-loop knobs: run length, pacing, parallelism and termination filters."""

    generations: int = NUM_GENERATIONS
    generations_per_second: float | None = None
    """Target cadence; None runs unpaced."""
    workers: int = 1
    halt_window: int = HALT_WINDOW
    max_period: int = MAX_PERIOD
    period_history_size: int = PERIOD_HISTORY_SIZE
    enable_termination_filters: bool = True

    def __post_init__(self) -> None:
        if self.generations < 1:
            raise ValueError("generations must be >= 1")
        if self.generations_per_second is not None and self.generations_per_second <= 0:
            raise ValueError("generations_per_second must be > 0")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.halt_window < 1:
            raise ValueError("halt_window must be >= 1")
        if self.max_period < 2:
            raise ValueError("max_period must be >= 2")
        if self.period_history_size < self.max_period * 2:
            raise ValueError("period_history_size must be >= 2 * max_period")
