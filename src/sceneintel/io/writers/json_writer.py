"""JSON result writer.

:func:`write_json` serializes plain data (as produced by the ``to_dict``
helpers) with stable indentation and a trailing newline.  Parent directories
are created automatically and non-ASCII characters are written as-is.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

PathLikeStr = os.PathLike[str]


def write_json(
    path: str | PathLikeStr,
    data: Any,
    *,
    encoding: str = "utf-8",
    indent: int | None = 2,
) -> None:
    """Write ``data`` to ``path`` as JSON."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding=encoding) as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")


__all__ = ["write_json"]
