"""Simulation driver: paced runs, per-generation metrics, and Parquet persistence."""

from toroidal_life.simulation.engine import GenerationLog, run_batch, run_simulation
from toroidal_life.simulation.step import compute_generation_metrics

__all__ = [
    "GenerationLog",
    "compute_generation_metrics",
    "run_batch",
    "run_simulation",
]
