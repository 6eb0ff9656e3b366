"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def reduce_log_file(log_path: str, top: int = 10) -> list[dict[str, Any]]:
        """Build a prompt that walks through scanning and filtering a noisy log."""
        return [
            {
                "role": "system",
                "content": (
                    "You help operators shrink noisy log files before analysis. Each filter "
                    "run writes filtered-<name> next to the log and later runs build on it. "
                    "Never propose a rule that would drop error or warning lines."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"1) Call scan_log with log_path={log_path!r} and top={top}.\n"
                    "2) Pick the repetitive, low-value line shapes from the report.\n"
                    "3) For each, propose a regex rule (bare text is wrapped in /.../; "
                    "$ip$ matches an IPv4 address) and call filter_log with those patterns.\n"
                    "4) If the log still has NUL bytes or blank-line runs, call default_filter_log.\n"
                    "5) Report the bytes removed by each step."
                ),
            },
        ]
