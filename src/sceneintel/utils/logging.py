"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide a helper to obtain loggers under the ``sceneintel`` namespace.
    - Allow an optional verbose/debug mode for command line runs.

Notes/Edge cases:
    - Library modules never configure handlers themselves; the root package
      logger carries a ``NullHandler`` so imports stay silent.
    - :func:`configure_logging` is idempotent.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging"]

ROOT_LOGGER_NAME = "sceneintel"
_HANDLER_NAME = "sceneintel-stderr"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` nested under the package namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this repeatedly re-targets the current ``sys.stderr``; no
    duplicate handlers are added.
    """

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for existing in list(root.handlers):
        # sys.stderr may have been swapped since the last call
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    return root
