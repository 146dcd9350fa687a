"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run JSON payload subdirectory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def generation_log_path(out_dir: Path) -> Path:
    """Return path to the generation log Parquet file."""
    return logs_dir(out_dir) / "generation_log.parquet"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    return runs_dir(out_dir) / f"{run_id}.json"
