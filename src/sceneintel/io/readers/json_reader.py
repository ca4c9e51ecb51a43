"""JSON breakdown reader.

:func:`read_json` decodes a breakdown file into plain Python objects.  UTF-8
byte-order marks are consumed by the default ``"utf-8-sig"`` codec.
``FileNotFoundError`` and :class:`json.JSONDecodeError` propagate to the caller.
"""

from __future__ import annotations

import json
import os
from typing import Any

PathLikeStr = os.PathLike[str]


def read_json(path: str | PathLikeStr, *, encoding: str = "utf-8-sig") -> Any:
    """Return the decoded JSON document stored at ``path``."""

    with open(path, "r", encoding=encoding) as f:
        return json.load(f)


__all__ = ["read_json"]
