"""Parquet schema definitions for simulation artifacts.

Every module that writes or reads the generation log works against the
column contract defined here.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

GENERATION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("generation", pa.int64()),
        ("population", pa.int64()),
        ("density", pa.float64()),
        ("births", pa.int64()),
        ("deaths", pa.int64()),
        ("elapsed_ms", pa.float64()),
    ]
)
