"""CLI entrypoint: run one or more seeded Game of Life simulations.

Supports ``--config path/to/config.json`` for reproducible runs. CLI
arguments override config-file values; config-file values override
built-in defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from toroidal_life.config.constants import (
    GENERATIONS_PER_SECOND,
    GRID_COLS,
    GRID_ROWS,
    HALT_WINDOW,
    LIVE_PROBABILITY,
    MAX_PERIOD,
    NUM_GENERATIONS,
    PERIOD_HISTORY_SIZE,
)
from toroidal_life.config.types import GridConfig, RunConfig
from toroidal_life.domain.patterns import PATTERNS
from toroidal_life.simulation.engine import run_batch

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _parse_pattern(raw_pattern: str | None) -> str | None:
    """Validate an optional pattern name from CLI/config."""
    if raw_pattern is None or raw_pattern == "":
        return None
    if raw_pattern not in PATTERNS:
        valid = ", ".join(sorted(PATTERNS))
        raise ValueError(f"pattern must be one of {valid}")
    return raw_pattern


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run Conway's Game of Life on a toroidal grid")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--cols", type=int, default=None)
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--live-probability", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument(
        "--generations-per-second",
        type=float,
        default=None,
        help="Target cadence; 0 runs unpaced",
    )
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument("--pattern", type=str, choices=sorted(PATTERNS), default=None)
    parser.add_argument("--halt-window", type=int, default=None)
    parser.add_argument("--max-period", type=int, default=None)
    parser.add_argument(
        "--enable-termination-filters",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for simulation runs."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    log_level = _get_str(args.log_level, "log_level", file_cfg, "WARNING")
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cols = _get_int(args.cols, "cols", file_cfg, GRID_COLS)
    rows = _get_int(args.rows, "rows", file_cfg, GRID_ROWS)
    live_probability = _get_float(
        args.live_probability, "live_probability", file_cfg, LIVE_PROBABILITY
    )
    seed = _get_int(args.seed, "seed", file_cfg, 0)
    generations = _get_int(args.generations, "generations", file_cfg, NUM_GENERATIONS)
    generations_per_second = _get_float(
        args.generations_per_second,
        "generations_per_second",
        file_cfg,
        GENERATIONS_PER_SECOND,
    )
    workers = _get_int(args.workers, "workers", file_cfg, 1)
    n_runs = _get_int(args.n_runs, "n_runs", file_cfg, 1)
    pattern_val = _get_val(args.pattern, "pattern", file_cfg, None)
    pattern = _parse_pattern(None if pattern_val is None else _coerce_str(pattern_val, "pattern"))
    if pattern is not None and n_runs > 1:
        raise ValueError("n_runs must be 1 when a pattern is seeded")
    halt_window = _get_int(args.halt_window, "halt_window", file_cfg, HALT_WINDOW)
    max_period = _get_int(args.max_period, "max_period", file_cfg, MAX_PERIOD)
    enable_termination_filters = _get_bool(
        args.enable_termination_filters, "enable_termination_filters", file_cfg, True
    )
    out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))

    grid_config = GridConfig(
        cols=cols,
        rows=rows,
        live_probability=live_probability,
        seed=seed,
    )
    run_config = RunConfig(
        generations=generations,
        generations_per_second=generations_per_second if generations_per_second > 0 else None,
        workers=workers,
        halt_window=halt_window,
        max_period=max_period,
        period_history_size=max(PERIOD_HISTORY_SIZE, max_period * 2),
        enable_termination_filters=enable_termination_filters,
    )
    logger.info("Running %d simulation(s) into %s", n_runs, out_dir)
    results = run_batch(n_runs, grid_config, run_config, out_dir, pattern=pattern)

    summary = {
        "cols": cols,
        "rows": rows,
        "pattern": pattern,
        "total_runs": len(results),
        "terminated": sum(1 for r in results if r.termination_reason is not None),
        "runs": [
            {
                "run_id": r.run_id,
                "generations_run": r.generations_run,
                "termination_reason": r.termination_reason,
                "final_population": r.final_population,
            }
            for r in results
        ],
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
