"""Bounded-memory reading of log files.

``ChunkReader`` is a context manager over a binary handle. It yields either raw
chunks (byte-level modes) or newline-delimited lines capped at a maximum length
(line-oriented modes), reports progress after every unit and flags reads that
stop short of the size observed when the file was opened.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from .errors import EmptyInputError, NotFoundError, OpenError
from .progress import NullProgress, ProgressSink

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096
DEFAULT_MAX_LINE_LENGTH = 4096


class ChunkReader:
    def __init__(
        self,
        path: str | Path,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        progress: ProgressSink | None = None,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        if max_line_length < 1:
            raise ValueError("max_line_length must be >= 1")
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.max_line_length = max_line_length
        self.progress = progress or NullProgress()
        self.size = 0
        self.consumed = 0
        self.incomplete = False
        self._handle: BinaryIO | None = None

    def __enter__(self) -> ChunkReader:
        try:
            handle = self.path.open("rb")
        except FileNotFoundError as exc:
            raise NotFoundError(f"Could not find file {self.path}") from exc
        except OSError as exc:
            raise OpenError(f"Could not open {self.path}: {exc.strerror or exc}") from exc

        size = os.fstat(handle.fileno()).st_size
        if size < 1:
            handle.close()
            raise EmptyInputError(f"File is empty: {self.path}")

        self._handle = handle
        self.size = size
        self.consumed = 0
        self.incomplete = False
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _require_handle(self) -> BinaryIO:
        if self._handle is None:
            raise RuntimeError("ChunkReader used outside of its context")
        return self._handle

    def _advance(self, unit: bytes) -> None:
        self.consumed += len(unit)
        self.progress.update(self.consumed, self.size)

    def _check_complete(self) -> None:
        if self.consumed < self.size:
            self.incomplete = True
            LOGGER.warning("file was not completely scanned: %s", self.path)

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield raw chunks of at most ``chunk_size`` bytes."""
        handle = self._require_handle()
        while True:
            chunk = handle.read(self.chunk_size)
            if not chunk:
                break
            self._advance(chunk)
            yield chunk
        self._check_complete()

    def iter_lines(self) -> Iterator[bytes]:
        """Yield lines (terminator included); over-long lines come in pieces."""
        handle = self._require_handle()
        while True:
            line = handle.readline(self.max_line_length)
            if not line:
                break
            self._advance(line)
            yield line
        self._check_complete()
