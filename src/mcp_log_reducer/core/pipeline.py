"""Reduction driver.

Every mode shares one shape: read a unit, transform it, write or accumulate it,
report progress, finalize. Filter modes stream into a temp artifact that is
atomically renamed onto the filtered file only after the source handle is
closed; scan mode only accumulates and reports.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from .byte_filter import DEFAULT_FILTERS_LABEL, DefaultByteFilter
from .config import ReducerConfig, resolve_config
from .errors import EmptyInputError, WriteError
from .line_filter import build_predicate, filter_lines
from .models import (
    DefaultFilterSession,
    FilterResult,
    FilterSession,
    ScanResult,
    ScanSession,
    Session,
)
from .paths import ReducerPaths, prepare_temp, resolve_paths
from .progress import NullProgress, ProgressSink
from .reader import ChunkReader
from .scan import ScanAggregator
from .side_files import record_filters_used, record_size_reduction

LOGGER = logging.getLogger(__name__)

Transform = Callable[[ChunkReader], Iterable[bytes]]


def _default_transform(reader: ChunkReader) -> Iterable[bytes]:
    return DefaultByteFilter().transform_all(reader.iter_chunks())


def _transform_for(session: FilterSession) -> tuple[Transform, tuple[str, ...]]:
    """Return the stream transform and the filter labels to record."""
    if isinstance(session, DefaultFilterSession):
        return _default_transform, (DEFAULT_FILTERS_LABEL,)

    predicate = build_predicate(session.rules)

    def _line_transform(reader: ChunkReader) -> Iterable[bytes]:
        return filter_lines(reader.iter_lines(), predicate)

    return _line_transform, tuple(rule.text for rule in session.rules)


def _write_temp(
    paths: ReducerPaths,
    transform: Transform,
    *,
    config: ReducerConfig,
    progress: ProgressSink,
) -> tuple[int, bool]:
    """Stream the transformed input into the temp file; return (input size, incomplete)."""
    with ChunkReader(
        paths.input,
        chunk_size=config.chunk_size,
        max_line_length=config.max_line_length,
        progress=progress,
    ) as reader:
        try:
            out = paths.temp.open("xb")
        except OSError as exc:
            raise WriteError(f"Could not create temp file: {paths.temp}") from exc

        try:
            with out:
                for piece in transform(reader):
                    out.write(piece)
        except OSError as exc:
            raise WriteError(f"Could not write temp file: {paths.temp}") from exc
        return reader.size, reader.incomplete


def run_filter(
    session: FilterSession,
    *,
    config: ReducerConfig | None = None,
    progress: ProgressSink | None = None,
) -> FilterResult:
    """Filter the session's log into ``filtered-<name>``."""
    config = config or resolve_config()
    progress = progress or NullProgress()
    transform, labels = _transform_for(session)

    paths = resolve_paths(session.source)
    if paths.chained:
        LOGGER.info("Filtering previously filtered file %s", paths.input)
    prepare_temp(paths.temp)

    try:
        initial_size, incomplete = _write_temp(paths, transform, config=config, progress=progress)
        progress.finish()
        final_size = paths.temp.stat().st_size
        os.replace(paths.temp, paths.filtered)
    except BaseException:
        paths.temp.unlink(missing_ok=True)
        raise

    result = FilterResult(
        input_path=paths.input,
        output_path=paths.filtered,
        initial_size=initial_size,
        final_size=final_size,
        filters_used=labels,
        incomplete=incomplete,
    )
    record_size_reduction(session.source, result.bytes_removed)
    record_filters_used(session.source, labels)
    LOGGER.info(
        "Filtered %s -> %s (%d bytes removed)",
        result.input_path,
        result.output_path,
        result.bytes_removed,
    )
    return result


def run_scan(
    session: ScanSession,
    *,
    config: ReducerConfig | None = None,
    progress: ProgressSink | None = None,
) -> ScanResult:
    """Count line shapes without writing anything."""
    config = config or resolve_config()
    progress = progress or NullProgress()
    input_path: Path = resolve_paths(session.source).input

    aggregator = ScanAggregator()
    try:
        with ChunkReader(
            input_path,
            chunk_size=config.chunk_size,
            max_line_length=config.max_line_length,
            progress=progress,
        ) as reader:
            aggregator.add_all(reader.iter_lines())
            incomplete = reader.incomplete
    except EmptyInputError:
        LOGGER.info("Skipping scan of empty file %s", input_path)
        return ScanResult(source=input_path, lines_read=0, rows=(), empty_file=True)
    progress.finish()

    return ScanResult(
        source=input_path,
        lines_read=aggregator.lines_read,
        rows=tuple(aggregator.top(config.scan_top)),
        incomplete=incomplete,
    )


def run(
    session: Session,
    *,
    config: ReducerConfig | None = None,
    progress: ProgressSink | None = None,
) -> FilterResult | ScanResult:
    if isinstance(session, ScanSession):
        return run_scan(session, config=config, progress=progress)
    return run_filter(session, config=config, progress=progress)
