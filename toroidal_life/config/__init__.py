"""Configuration layer: constants and typed config dataclasses."""

from toroidal_life.config.constants import (
    FLUSH_THRESHOLD,
    GENERATIONS_PER_SECOND,
    GRID_COLS,
    GRID_ROWS,
    HALT_WINDOW,
    LIVE_PROBABILITY,
    MAX_PERIOD,
    MOORE_OFFSETS,
    NUM_GENERATIONS,
    PERIOD_HISTORY_SIZE,
)
from toroidal_life.config.types import GridConfig, RunConfig, SimulationResult

__all__ = [
    "FLUSH_THRESHOLD",
    "GENERATIONS_PER_SECOND",
    "GRID_COLS",
    "GRID_ROWS",
    "GridConfig",
    "HALT_WINDOW",
    "LIVE_PROBABILITY",
    "MAX_PERIOD",
    "MOORE_OFFSETS",
    "NUM_GENERATIONS",
    "PERIOD_HISTORY_SIZE",
    "RunConfig",
    "SimulationResult",
]
