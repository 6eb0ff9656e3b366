"""Response models returned by the MCP tools."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mcp_log_reducer.core.models import FilterResult, ScanResult
from mcp_log_reducer.core.report import filter_summary, scan_summary


class FilterReport(BaseModel):
    input_path: str = Field(description="File that was read (the filtered file when chaining).")
    output_path: str = Field(description="Committed filtered file.")
    initial_size: int = Field(ge=0, description="Input size in bytes.")
    final_size: int = Field(ge=0, description="Output size in bytes.")
    bytes_removed: int = Field(description="initial_size - final_size.")
    filters_used: list[str] = Field(default_factory=list, description="Normalized rules, or 'Default filters'.")
    incomplete: bool = Field(default=False, description="True when the input was not read to the end.")
    summary: str

    @classmethod
    def from_result(cls, result: FilterResult) -> FilterReport:
        return cls(
            input_path=str(result.input_path),
            output_path=str(result.output_path),
            initial_size=result.initial_size,
            final_size=result.final_size,
            bytes_removed=result.bytes_removed,
            filters_used=list(result.filters_used),
            incomplete=result.incomplete,
            summary=filter_summary(result),
        )


class ScanRowReport(BaseModel):
    count: int = Field(ge=1, description="Lines sharing this shape.")
    example: str = Field(description="First line seen with this shape.")


class ScanReport(BaseModel):
    source: str = Field(description="File that was scanned.")
    lines_read: int = Field(ge=0)
    empty_file: bool = False
    incomplete: bool = False
    rows: list[ScanRowReport] = Field(default_factory=list)
    summary: str

    @classmethod
    def from_result(cls, result: ScanResult) -> ScanReport:
        return cls(
            source=str(result.source),
            lines_read=result.lines_read,
            empty_file=result.empty_file,
            incomplete=result.incomplete,
            rows=[
                ScanRowReport(
                    count=row.count,
                    example=row.example.decode("utf-8", errors="replace").rstrip("\r\n"),
                )
                for row in result.rows
            ],
            summary=scan_summary(result),
        )
