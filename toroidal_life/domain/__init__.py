"""Domain layer: cells, the toroidal grid, patterns, and termination detectors."""

from toroidal_life.domain.cell import Cell, next_alive
from toroidal_life.domain.filters import (
    ExtinctionDetector,
    HaltDetector,
    ShortPeriodDetector,
    TerminationReason,
)
from toroidal_life.domain.grid import Grid
from toroidal_life.domain.patterns import PATTERNS, get_pattern, place_centered, place_pattern

__all__ = [
    "Cell",
    "ExtinctionDetector",
    "Grid",
    "HaltDetector",
    "PATTERNS",
    "ShortPeriodDetector",
    "TerminationReason",
    "get_pattern",
    "next_alive",
    "place_centered",
    "place_pattern",
]
