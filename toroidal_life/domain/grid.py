"""Fixed-size toroidal grid of cells advanced by a two-phase compute/commit step.

Barrier invariant: every cell's `pending_alive` for a generation is computed
from committed `alive` states only. The commit pass starts after all compute
work has joined, and `advance()` returns only after the commit pass has
joined, so no tick ever observes a partially-updated board.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from random import Random
from typing import TYPE_CHECKING

import numpy as np

from toroidal_life.config.constants import LIVE_PROBABILITY, MOORE_OFFSETS
from toroidal_life.domain.cell import Cell

if TYPE_CHECKING:
    from types import TracebackType

    from toroidal_life.config.types import GridConfig

logger = logging.getLogger(__name__)


class Grid:
    """Toroidal Game of Life board owning a column-major `[x][y]` array of cells."""

    def __init__(
        self,
        cols: int,
        rows: int,
        live_probability: float = LIVE_PROBABILITY,
        seed: int = 0,
        *,
        workers: int = 1,
    ) -> None:
        if cols < 1 or rows < 1:
            raise ValueError(f"grid dimensions must be >= 1, got {cols}x{rows}")
        if not 0.0 <= live_probability <= 1.0:
            raise ValueError("live_probability must be in [0.0, 1.0]")
        if workers < 1:
            raise ValueError("workers must be >= 1")

        self._cols = cols
        self._rows = rows
        self._workers = workers
        self._executor: ThreadPoolExecutor | None = None
        self.generation = 0

        rng = Random(seed)
        self._cells: list[list[Cell]] = []
        for x in range(cols):
            column: list[Cell] = []
            for y in range(rows):
                alive = rng.random() < live_probability
                column.append(Cell(x=x, y=y, alive=alive, pending_alive=alive))
            self._cells.append(column)

        # Contiguous column ranges, one unit of work per worker
        chunk_size = -(-cols // workers)
        self._chunks = [range(x, min(x + chunk_size, cols)) for x in range(0, cols, chunk_size)]

        logger.info(
            "Built %dx%d grid (seed=%s, live_probability=%s, workers=%d, population=%d)",
            cols,
            rows,
            seed,
            live_probability,
            workers,
            self.population(),
        )

    @classmethod
    def from_config(cls, config: GridConfig, *, workers: int = 1) -> Grid:
        """Build a randomly seeded grid from a validated GridConfig."""
        return cls(
            config.cols,
            config.rows,
            live_probability=config.live_probability,
            seed=config.seed,
            workers=workers,
        )

    @classmethod
    def empty(cls, cols: int, rows: int, *, workers: int = 1) -> Grid:
        """Build an all-dead grid, typically for seeding a known pattern."""
        return cls(cols, rows, live_probability=0.0, seed=0, workers=workers)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def dimensions(self) -> tuple[int, int]:
        """Return `(cols, rows)`."""
        return self._cols, self._rows

    def is_alive(self, x: int, y: int) -> bool:
        """Return the committed state of the cell at `(x, y)`."""
        return self._cell_at(x, y).alive

    def neighbor_alive(self, x: int, y: int, dx: int, dy: int) -> bool:
        """Return the committed state of the neighbor at offset `(dx, dy)`, wrapping at edges."""
        if dx not in (-1, 0, 1) or dy not in (-1, 0, 1) or (dx == 0 and dy == 0):
            raise ValueError(f"invalid neighbor offset ({dx}, {dy})")
        return self._cells[(x + dx) % self._cols][(y + dy) % self._rows].alive

    def live_neighbor_count(self, x: int, y: int) -> int:
        """Count live cells among the 8 Moore neighbors of `(x, y)`."""
        cols, rows, cells = self._cols, self._rows, self._cells
        count = 0
        for dx, dy in MOORE_OFFSETS:
            if cells[(x + dx) % cols][(y + dy) % rows].alive:
                count += 1
        return count

    def population(self) -> int:
        return sum(cell.alive for column in self._cells for cell in column)

    def live_cells(self) -> frozenset[tuple[int, int]]:
        """Return the coordinates of all live cells as a hashable snapshot."""
        return frozenset((cell.x, cell.y) for column in self._cells for cell in column if cell.alive)

    def alive_array(self) -> np.ndarray:
        """Return a `(rows, cols)` boolean array indexed `[y, x]` for renderers."""
        arr = np.zeros((self._rows, self._cols), dtype=bool)
        for x, column in enumerate(self._cells):
            arr[:, x] = [cell.alive for cell in column]
        return arr

    def cells(self) -> Iterator[Cell]:
        """Iterate cells in column-major order."""
        for column in self._cells:
            yield from column

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_alive(self, x: int, y: int, alive: bool = True) -> None:
        """Commit a state directly; not for use while `advance()` is running."""
        cell = self._cell_at(x, y)
        cell.alive = alive
        cell.pending_alive = alive

    def advance(self) -> None:
        """Advance every cell by exactly one generation."""
        if self._workers == 1:
            for chunk in self._chunks:
                self._compute_columns(chunk)
            for chunk in self._chunks:
                self._commit_columns(chunk)
        else:
            executor = self._get_executor()
            # Consuming each map() result joins its phase before the next begins
            list(executor.map(self._compute_columns, self._chunks))
            list(executor.map(self._commit_columns, self._chunks))
        self.generation += 1
        logger.debug("Advanced to generation %d", self.generation)

    def _compute_columns(self, columns: range) -> None:
        for x in columns:
            for cell in self._cells[x]:
                cell.compute(self.live_neighbor_count(cell.x, cell.y))

    def _commit_columns(self, columns: range) -> None:
        for x in columns:
            for cell in self._cells[x]:
                cell.commit()

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._workers, thread_name_prefix="grid-advance"
            )
        return self._executor

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> Grid:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _cell_at(self, x: int, y: int) -> Cell:
        if not (0 <= x < self._cols and 0 <= y < self._rows):
            raise IndexError(f"({x}, {y}) is outside a {self._cols}x{self._rows} grid")
        return self._cells[x][y]
