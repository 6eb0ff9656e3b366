"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (filter, default-filter, reuse filters, scan)
- Resources: addressable data blobs (saved filters, size-reduction history)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m mcp_log_reducer.server.reducer_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_reducer.prompts.registry import register_prompts
from mcp_log_reducer.resources.registry import register_resources
from mcp_log_reducer.tools.reduce import (
    default_filter_log_impl,
    filter_log_impl,
    reuse_filters_log_impl,
    scan_log_impl,
)

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_REDUCER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-reducer", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def filter_log(log_path: str, patterns: list[str]) -> dict[str, Any]:
    """Drop every line matching any of the patterns.

    Parameters
    ----------
    log_path:
        Path to a local log file. When filtered-<name> already exists it is
        filtered again instead of the original.
    patterns:
        Regex rules. Bare text is wrapped in /.../ delimiters, /.../flags is kept
        as given and $ip$ matches an IPv4 address.

    Returns
    -------
    dict:
        FilterReport (see app://log-reducer/schemas/filter-report)
    """
    return filter_log_impl(log_path=log_path, patterns=patterns)


@mcp.tool()
def default_filter_log(log_path: str) -> dict[str, Any]:
    """Strip NUL/CR bytes and collapse runs of whitespace and blank lines."""
    return default_filter_log_impl(log_path=log_path)


@mcp.tool()
def reuse_filters_log(log_path: str) -> dict[str, Any]:
    """Filter again with every rule saved from earlier runs on this log."""
    return reuse_filters_log_impl(log_path=log_path)


@mcp.tool()
def scan_log(log_path: str, top: int | None = None) -> dict[str, Any]:
    """Report the most frequent line shapes (lines with spaces at the same offsets).

    Nothing is written. ``top`` defaults to 10 and is capped at 100.
    """
    return scan_log_impl(log_path=log_path, top=top)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
