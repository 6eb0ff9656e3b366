"""Path derivation for filtered output, temp artifacts and side files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import NotFoundError, ResourceConflictError

FILTERED_PREFIX = "filtered-"
TEMP_PREFIX = "."
FILTERS_USED_SUFFIX = "-filters-used.txt"
SIZE_REDUCTIONS_SUFFIX = "-size-reductions.txt"


def add_prefix(path: Path, prefix: str) -> Path:
    return path.parent / f"{prefix}{path.name}"


def canonical_path(path: str | Path) -> Path:
    """Resolve an existing file to its canonical absolute form."""
    p = Path(path).expanduser()
    if not p.parent.exists():
        raise NotFoundError(f"Could not determine the directory of: {path}. The directory must exist.")
    if not p.is_file():
        raise NotFoundError(f"Could not find file {path}")
    return p.resolve(strict=True)


def filters_used_path(source: Path) -> Path:
    return source.with_name(source.name + FILTERS_USED_SUFFIX)


def size_reductions_path(source: Path) -> Path:
    return source.with_name(source.name + SIZE_REDUCTIONS_SUFFIX)


@dataclass(frozen=True, slots=True)
class ReducerPaths:
    """Files touched by one pass over ``source``."""

    source: Path
    input: Path  # the filtered file when it already exists (chained filtering)
    filtered: Path
    temp: Path

    @property
    def chained(self) -> bool:
        return self.input != self.source


def resolve_paths(source: Path) -> ReducerPaths:
    filtered = add_prefix(source, FILTERED_PREFIX)
    input_path = filtered if filtered.is_file() else source
    return ReducerPaths(
        source=source,
        input=input_path,
        filtered=filtered,
        temp=add_prefix(filtered, TEMP_PREFIX),
    )


def prepare_temp(temp: Path) -> None:
    """Remove a stale temp file; refuse to touch anything else at that path."""
    if temp.is_file() or temp.is_symlink():
        temp.unlink()
    if temp.exists():
        raise ResourceConflictError(
            f"Tried to write temp file {temp} but it appears to be a directory."
        )
