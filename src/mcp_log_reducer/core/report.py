"""Human-readable summaries of reduction results."""

from __future__ import annotations

from .models import FilterResult, ScanResult
from .scan import render_summary


def filter_summary(result: FilterResult) -> str:
    return f"Complete. {result.bytes_removed} bytes removed."


def scan_summary(result: ScanResult) -> str:
    if result.empty_file:
        return f"File is empty: {result.source}\n"
    return render_summary(result.rows)
