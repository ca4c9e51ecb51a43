"""Typed exceptions for breakdown parsing and I/O formats.

The clustering and ranking algorithms themselves are total and never raise;
these exceptions only describe problems at the input boundary.
"""


class BreakdownError(ValueError):
    """Base class for scene breakdown related errors."""


class BreakdownFormatError(BreakdownError):
    """Raised when a document is neither a scene list nor a breakdown mapping."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader or writer is registered for a file format."""
