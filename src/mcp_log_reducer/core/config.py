"""Reducer tunables and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

CHUNK_SIZE_ENV = "LOG_REDUCER_CHUNK_SIZE"
MAX_LINE_LENGTH_ENV = "LOG_REDUCER_MAX_LINE_LENGTH"
SCAN_TOP_ENV = "LOG_REDUCER_SCAN_TOP"


@dataclass(frozen=True, slots=True)
class ReducerConfig:
    chunk_size: int = 4096
    max_line_length: int = 4096
    # Rows shown in the scan summary.
    scan_top: int = 10


def _positive_int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_config(cfg: ReducerConfig | None = None) -> ReducerConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = ReducerConfig()

    overrides: dict[str, int] = {}
    for field_name, env in (
        ("chunk_size", CHUNK_SIZE_ENV),
        ("max_line_length", MAX_LINE_LENGTH_ENV),
        ("scan_top", SCAN_TOP_ENV),
    ):
        value = _positive_int_env(env)
        if value is not None:
            overrides[field_name] = value

    if not overrides:
        return cfg
    return replace(cfg, **overrides)
