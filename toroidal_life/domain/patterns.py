"""Named Game of Life patterns as sets of (dx, dy) offsets from an origin."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toroidal_life.domain.grid import Grid

Pattern = frozenset[tuple[int, int]]


def _parse(*lines: str) -> Pattern:
    """Build a pattern from rows of '#' (alive) and '.' (dead), top row at dy=0."""
    return frozenset(
        (dx, dy) for dy, line in enumerate(lines) for dx, char in enumerate(line) if char == "#"
    )


# Still lifes (period 1)
BLOCK = _parse("##", "##")
BEEHIVE = _parse(".##.", "#..#", ".##.")
BOAT = _parse("##.", "#.#", ".#.")
LOAF = _parse(".##.", "#..#", ".#.#", "..#.")

# Oscillators (period 2)
BLINKER = _parse("###")
TOAD = _parse(".###", "###.")
BEACON = _parse("##..", "##..", "..##", "..##")

# Spaceships
GLIDER = _parse(".#.", "..#", "###")

PATTERNS: dict[str, Pattern] = {
    "block": BLOCK,
    "beehive": BEEHIVE,
    "boat": BOAT,
    "loaf": LOAF,
    "blinker": BLINKER,
    "toad": TOAD,
    "beacon": BEACON,
    "glider": GLIDER,
}


def get_pattern(name: str) -> Pattern:
    """Look up a named pattern."""
    try:
        return PATTERNS[name]
    except KeyError as exc:
        valid = ", ".join(sorted(PATTERNS))
        raise ValueError(f"pattern must be one of {valid}") from exc


def pattern_extent(pattern: Pattern) -> tuple[int, int]:
    """Return the bounding-box `(width, height)` of a pattern."""
    if not pattern:
        return 0, 0
    return (
        max(dx for dx, _ in pattern) + 1,
        max(dy for _, dy in pattern) + 1,
    )


def place_pattern(grid: Grid, pattern: Pattern, x: int, y: int) -> None:
    """Set the pattern's cells alive with its top-left corner at `(x, y)`, wrapping at edges."""
    cols, rows = grid.dimensions()
    for dx, dy in pattern:
        grid.set_alive((x + dx) % cols, (y + dy) % rows)


def place_centered(grid: Grid, pattern: Pattern) -> None:
    """Place a pattern so its bounding box sits in the middle of the grid."""
    cols, rows = grid.dimensions()
    width, height = pattern_extent(pattern)
    place_pattern(grid, pattern, (cols - width) // 2, (rows - height) // 2)
