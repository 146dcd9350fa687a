"""Conway's Game of Life on a fixed-size toroidal grid."""

from toroidal_life.config.types import GridConfig, RunConfig, SimulationResult
from toroidal_life.domain.grid import Grid

__all__ = ["Grid", "GridConfig", "RunConfig", "SimulationResult"]
