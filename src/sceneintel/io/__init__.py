"""Extension based registry for breakdown input and result output.

Readers are registered for ``.json``, ``.yml`` and ``.yaml`` and return decoded
plain data; the only writer is ``.json``.  The registry dispatches on the file
extension and performs no validation of the decoded content; use
:func:`sceneintel.breakdown.parse_breakdown` for that.

``UnsupportedFormatError`` is raised when attempting to read or write a file
whose extension has no registered handler.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from ..utils.errors import UnsupportedFormatError
from .readers.json_reader import read_json
from .readers.yaml_reader import read_yaml
from .writers.json_writer import write_json

ReaderFunc = Callable[..., Any]
WriterFunc = Callable[..., None]

_READERS: dict[str, ReaderFunc] = {}
_WRITERS: dict[str, WriterFunc] = {}


def register_reader(ext: str, func: ReaderFunc) -> None:
    """Register a reader for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".json"``).  Matching is
        case-insensitive.
    func:
        Callable that reads a file and returns decoded data.
    """

    _READERS[ext.lower()] = func


def register_writer(ext: str, func: WriterFunc) -> None:
    """Register a writer for files ending with ``ext``."""

    _WRITERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot).

    Returns an empty string when the path has no extension.
    """

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_document(path: str | os.PathLike[str], **kwargs: Any) -> Any:
    """Read ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_document(path: str | os.PathLike[str], data: Any, **kwargs: Any) -> None:
    """Write ``data`` to ``path`` using the registered writer for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for the file extension.
    """

    ext = get_extension(path)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    writer(path, data, **kwargs)


register_reader(".json", read_json)
register_reader(".yml", read_yaml)
register_reader(".yaml", read_yaml)
register_writer(".json", write_json)

__all__ = [
    "ReaderFunc",
    "WriterFunc",
    "register_reader",
    "register_writer",
    "get_extension",
    "read_document",
    "write_document",
]
