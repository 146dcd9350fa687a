"""Per-generation metric computation for the driver loop."""

from __future__ import annotations

from toroidal_life.domain.filters import Snapshot


def compute_generation_metrics(
    *,
    previous: Snapshot,
    current: Snapshot,
    cols: int,
    rows: int,
) -> dict[str, float | int]:
    """Population, density, births and deaths between two consecutive snapshots."""
    population = len(current)
    return {
        "population": population,
        "density": population / (cols * rows),
        "births": len(current - previous),
        "deaths": len(previous - current),
    }
