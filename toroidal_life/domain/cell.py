"""Single-cell state and the Game of Life transition rule."""

from __future__ import annotations

from dataclasses import dataclass


def next_alive(alive: bool, live_count: int) -> bool:
    """Return the next-generation state for a cell with `live_count` live neighbors.

    A live cell survives with 2 or 3 live neighbors and dies otherwise
    (underpopulation below 2, overpopulation above 3). A dead cell is born
    with exactly 3 live neighbors.
    """
    if alive:
        return live_count == 2 or live_count == 3
    return live_count == 3


@dataclass
class Cell:
    """One grid position with double-buffered state.

    `alive` holds the committed generation that neighbors read; `pending_alive`
    holds the next generation until the grid commits it.
    """

    x: int
    y: int
    alive: bool = False
    pending_alive: bool = False

    def compute(self, live_count: int) -> None:
        """Write the next-generation state without touching `alive`."""
        self.pending_alive = next_alive(self.alive, live_count)

    def commit(self) -> None:
        self.alive = self.pending_alive
