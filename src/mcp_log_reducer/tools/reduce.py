"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures. Progress is never written here since
stdout carries the stdio transport.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from mcp_log_reducer.core.config import resolve_config
from mcp_log_reducer.core.models import Mode
from mcp_log_reducer.core.pipeline import run_filter, run_scan
from mcp_log_reducer.core.session import build_session

from .models import FilterReport, ScanReport

HARD_TOP = 100


def filter_log_impl(*, log_path: str, patterns: Sequence[str]) -> dict[str, Any]:
    """Implementation for the `filter_log` MCP tool."""
    cleaned = [p for p in patterns if p]
    if not cleaned:
        raise ValueError("At least one pattern must be provided")
    session = build_session(Mode.RULE_FILTER, log_path, cleaned)
    return FilterReport.from_result(run_filter(session)).model_dump()


def default_filter_log_impl(*, log_path: str) -> dict[str, Any]:
    """Implementation for the `default_filter_log` MCP tool."""
    session = build_session(Mode.DEFAULT_FILTER, log_path)
    return FilterReport.from_result(run_filter(session)).model_dump()


def reuse_filters_log_impl(*, log_path: str) -> dict[str, Any]:
    """Implementation for the `reuse_filters_log` MCP tool."""
    session = build_session(Mode.REUSE_FILTERS, log_path)
    return FilterReport.from_result(run_filter(session)).model_dump()


def scan_log_impl(*, log_path: str, top: int | None = None) -> dict[str, Any]:
    """Implementation for the `scan_log` MCP tool."""
    config = resolve_config()
    if top is not None:
        if top <= 0:
            raise ValueError("top must be > 0")
        config = replace(config, scan_top=min(top, HARD_TOP))
    session = build_session(Mode.SCAN, log_path)
    return ScanReport.from_result(run_scan(session, config=config)).model_dump()
