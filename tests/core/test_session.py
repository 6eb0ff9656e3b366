from __future__ import annotations

from pathlib import Path

import pytest

from mcp_log_reducer.core.errors import ConfigurationError, EmptyInputError, NotFoundError
from mcp_log_reducer.core.models import (
    DefaultFilterSession,
    Mode,
    ReuseFiltersSession,
    RuleFilterSession,
    ScanSession,
)
from mcp_log_reducer.core.pipeline import run_filter
from mcp_log_reducer.core.session import build_session
from mcp_log_reducer.core.side_files import parse_saved_filters, record_filters_used


def test_session_variants(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    assert isinstance(build_session("default", log), DefaultFilterSession)
    assert isinstance(build_session(Mode.SCAN, log), ScanSession)
    rule_session = build_session(Mode.RULE_FILTER, log, ["ERROR"])
    assert isinstance(rule_session, RuleFilterSession)
    assert [r.text for r in rule_session.rules] == ["/ERROR/"]
    assert rule_session.source == log.resolve()
    assert rule_session.mode is Mode.RULE_FILTER


def test_session_is_immutable(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)
    session = build_session(Mode.DEFAULT_FILTER, log)
    with pytest.raises(AttributeError):
        session.source = tmp_path  # type: ignore[misc]


def test_missing_source(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        build_session(Mode.SCAN, tmp_path / "missing.log")
    with pytest.raises(NotFoundError):
        build_session(Mode.SCAN, tmp_path / "no-such-dir" / "app.log")


def test_bad_rule_fails_before_any_io(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    with pytest.raises(ConfigurationError):
        build_session(Mode.RULE_FILTER, log, ["(unclosed"])
    assert not (tmp_path / "filtered-app.log").exists()


def test_reuse_requires_saved_filters(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)

    with pytest.raises(NotFoundError):
        build_session(Mode.REUSE_FILTERS, log)

    (tmp_path / "app.log-filters-used.txt").write_text("\n\n")
    with pytest.raises(EmptyInputError):
        build_session(Mode.REUSE_FILTERS, log)


def test_parse_saved_filters_skips_markers_and_repeats() -> None:
    text = "Filters used:\n/ERROR/\n\nFilters used:\nDefault filters\n\nFilters used:\n/ERROR/\nDEBUG\n\n"
    assert parse_saved_filters(text) == ["/ERROR/", "DEBUG"]


def test_reuse_filters_applies_every_saved_rule(tmp_path: Path, write_log) -> None:
    log = tmp_path / "app.log"
    write_log(log)
    source = log.resolve()
    record_filters_used(source, ["/ERROR/"])
    record_filters_used(source, ["/warning/i"])

    session = build_session(Mode.REUSE_FILTERS, log)
    assert isinstance(session, ReuseFiltersSession)
    assert [r.text for r in session.rules] == ["/ERROR/", "/warning/i"]

    result = run_filter(session)

    kept = (tmp_path / "filtered-app.log").read_text().splitlines()
    assert [line.split()[1] for line in kept] == ["[INFO]", "[CRITICAL]"]
    assert result.filters_used == ("/ERROR/", "/warning/i")


def test_filters_used_write_failure_is_a_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    source = tmp_path / "app.log"
    # A directory where the side file should be makes the append fail.
    (tmp_path / "app.log-filters-used.txt").mkdir()

    assert record_filters_used(source, ["/x/"]) is False
    assert "could not add filters" in caplog.text
