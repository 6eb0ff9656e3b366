"""Error taxonomy for the reducer.

All fatal conditions derive from :class:`ReducerError`. Where a builtin
exception already describes the condition the error also derives from it, so
callers that only know about ``FileNotFoundError``/``ValueError`` keep working.
"""

from __future__ import annotations


class ReducerError(Exception):
    """Base class for every fatal reducer condition."""


class ConfigurationError(ReducerError, ValueError):
    """A filter rule could not be normalized or compiled."""


class NotFoundError(ReducerError, FileNotFoundError):
    """The source log or the saved-filters file does not exist."""


class EmptyInputError(ReducerError):
    """The source file (or saved-filters file) holds nothing to work on."""


class ResourceConflictError(ReducerError):
    """The temp artifact path is occupied by something that is not a file."""


class OpenError(ReducerError, OSError):
    """A handle could not be acquired for reading."""


class WriteError(ReducerError, OSError):
    """A handle could not be acquired for writing, or a write failed."""
