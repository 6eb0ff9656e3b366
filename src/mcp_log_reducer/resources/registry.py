"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
The side-file resources expose the saved filters and size-reduction history of a
log under ``LOG_REDUCER_BASE_DIR``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import aiofiles
from mcp.server.fastmcp import FastMCP

from mcp_log_reducer.core.paths import filters_used_path, size_reductions_path
from mcp_log_reducer.tools.models import FilterReport, ScanReport

BASE_DIR_ENV = "LOG_REDUCER_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


async def read_side_file(side_file: Path) -> str:
    """Read a side file; a missing file reads as empty history."""
    if not side_file.is_file():
        return ""
    async with aiofiles.open(side_file, encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
        return await f.read()


async def read_filters_used(log_path: str) -> str:
    return await read_side_file(filters_used_path(_safe_resolve(log_path)))


async def read_size_reductions(log_path: str) -> str:
    return await read_side_file(size_reductions_path(_safe_resolve(log_path)))


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-reducer/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        base = _base_dir()
        return (
            "Resources:\n"
            "- app://log-reducer/help\n"
            "- app://log-reducer/schemas/filter-report\n"
            "- app://log-reducer/schemas/scan-report\n"
            f"- filters://{{path}} (saved filters of a log under {BASE_DIR_ENV})\n"
            f"- reductions://{{path}} (size-reduction history of a log under {BASE_DIR_ENV})\n"
            f"\nBase directory: {base}\n"
        )

    @mcp.resource("app://log-reducer/schemas/filter-report")
    def filter_report_schema() -> dict[str, Any]:
        """Return the JSON schema for filter tool responses."""
        return FilterReport.model_json_schema()

    @mcp.resource("app://log-reducer/schemas/scan-report")
    def scan_report_schema() -> dict[str, Any]:
        """Return the JSON schema for scan tool responses."""
        return ScanReport.model_json_schema()

    @mcp.resource("filters://{path}")
    async def filters_used(path: str) -> str:
        """Return the saved-filters file of a log."""
        return await read_filters_used(path)

    @mcp.resource("reductions://{path}")
    async def size_reductions(path: str) -> str:
        """Return the size-reduction log of a log."""
        return await read_size_reductions(path)
