"""Centralized defaults for grid construction and simulation runs.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_COLS = 100
"""Default grid width in cells."""

GRID_ROWS = 100
"""Default grid height in cells."""

LIVE_PROBABILITY = 0.15
"""Probability that a cell starts alive when the grid is seeded."""

GENERATIONS_PER_SECOND = 60
"""Default driver cadence in generations per second."""

NUM_GENERATIONS = 200
"""Default number of generations per run."""

HALT_WINDOW = 10
"""Consecutive unchanged snapshots before a run is declared a still life."""

MAX_PERIOD = 2
"""Longest oscillator period the short-period detector looks for."""

PERIOD_HISTORY_SIZE = 8
"""Number of snapshots retained by the short-period detector."""

FLUSH_THRESHOLD = 8_192
"""Flush generation log rows to Parquet once this in-memory row count is reached."""

MOORE_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)
"""The 8 (dx, dy) offsets of the Moore neighborhood."""
