from __future__ import annotations

from mcp_log_reducer.core.models import ScanRow
from mcp_log_reducer.core.scan import ScanAggregator, line_signature, render_summary


def test_line_signature() -> None:
    assert line_signature("a b c\n") == "1-3-"
    assert line_signature(b"a b c\n") == "1-3-"
    assert line_signature("abc   d") == "3-4-5-"
    assert line_signature("nospaces\n") == ""


def test_same_shape_groups_different_text() -> None:
    agg = ScanAggregator()
    agg.add(b"user 17 logged in\n")
    agg.add(b"user 42 logged in\n")
    agg.add(b"disk full\n")

    rows = agg.top()
    assert agg.lines_read == 3
    assert len(agg) == 2
    assert rows[0] == ScanRow(count=2, example=b"user 17 logged in\n")
    assert rows[1].count == 1


def test_top_orders_by_count_and_limits() -> None:
    agg = ScanAggregator()
    for i in range(12):
        line = b"x" * (i + 1) + b" end\n"  # one shape per length
        for _ in range(i + 1):
            agg.add(line)

    rows = agg.top(10)
    counts = [row.count for row in rows]
    assert len(rows) == 10
    assert counts == sorted(counts, reverse=True)
    assert counts[0] == 12


def test_render_summary_columns() -> None:
    rows = [
        ScanRow(count=120, example=b"GET /health 200\n"),
        ScanRow(count=7, example=b"worker restarted"),
    ]
    assert render_summary(rows) == (
        "  # Example line\n"
        "120 GET /health 200\n"
        "  7 worker restarted\n"
    )


def test_render_summary_no_rows() -> None:
    assert render_summary([]) == "No lines found.\n"
