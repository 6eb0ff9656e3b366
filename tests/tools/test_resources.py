from __future__ import annotations

from pathlib import Path

import pytest

from mcp_log_reducer.resources.registry import read_filters_used, read_size_reductions
from mcp_log_reducer.tools.reduce import filter_log_impl


@pytest.mark.asyncio
async def test_side_file_resources(tmp_path: Path, monkeypatch, write_mixed_log) -> None:
    monkeypatch.setenv("LOG_REDUCER_BASE_DIR", str(tmp_path))
    log = tmp_path / "app.log"
    write_mixed_log(log)

    out = filter_log_impl(log_path=str(log), patterns=["ERROR"])

    assert await read_filters_used("app.log") == "Filters used:\n/ERROR/\n\n"
    assert await read_size_reductions("app.log") == f"Filtered out {out['bytes_removed']} bytes.\n"


@pytest.mark.asyncio
async def test_side_file_resource_without_history(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_REDUCER_BASE_DIR", str(tmp_path))
    assert await read_filters_used("never-filtered.log") == ""


@pytest.mark.asyncio
async def test_side_file_resource_rejects_escape(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_REDUCER_BASE_DIR", str(tmp_path / "logs"))
    (tmp_path / "logs").mkdir()
    with pytest.raises(ValueError):
        await read_filters_used("../outside.log")


def test_server_registers_tools() -> None:
    from mcp_log_reducer.server import reducer_server

    assert reducer_server.mcp.name == "log-reducer"
