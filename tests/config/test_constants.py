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


def test_grid_dimensions_are_positive_ints() -> None:
    assert isinstance(GRID_COLS, int) and GRID_COLS > 0
    assert isinstance(GRID_ROWS, int) and GRID_ROWS > 0


def test_live_probability_in_unit_interval() -> None:
    assert 0.0 <= LIVE_PROBABILITY <= 1.0


def test_cadence_and_run_length_positive() -> None:
    assert GENERATIONS_PER_SECOND > 0
    assert isinstance(NUM_GENERATIONS, int) and NUM_GENERATIONS > 0


def test_halt_window_less_than_num_generations() -> None:
    assert isinstance(HALT_WINDOW, int) and HALT_WINDOW > 0
    assert HALT_WINDOW < NUM_GENERATIONS


def test_period_history_covers_two_cycles() -> None:
    assert MAX_PERIOD >= 2
    assert PERIOD_HISTORY_SIZE >= MAX_PERIOD * 2


def test_flush_threshold_is_positive() -> None:
    assert isinstance(FLUSH_THRESHOLD, int) and FLUSH_THRESHOLD > 0


def test_moore_offsets_are_the_eight_neighbors() -> None:
    assert len(MOORE_OFFSETS) == 8
    assert len(set(MOORE_OFFSETS)) == 8
    assert (0, 0) not in MOORE_OFFSETS
    assert all(dx in (-1, 0, 1) and dy in (-1, 0, 1) for dx, dy in MOORE_OFFSETS)
