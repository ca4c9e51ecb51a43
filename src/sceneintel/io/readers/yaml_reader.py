"""YAML breakdown reader.

Hand-maintained fixtures are often easier to write as YAML.  Documents are
loaded with ``yaml.safe_load`` so only plain data types are produced; an empty
file decodes to ``None``.
"""

from __future__ import annotations

import os
from typing import Any

import yaml

PathLikeStr = os.PathLike[str]


def read_yaml(path: str | PathLikeStr, *, encoding: str = "utf-8-sig") -> Any:
    """Return the decoded YAML document stored at ``path``."""

    with open(path, "r", encoding=encoding) as f:
        return yaml.safe_load(f)


__all__ = ["read_yaml"]
