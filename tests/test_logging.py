from __future__ import annotations

import logging

from sceneintel.utils.logging import ROOT_LOGGER_NAME, configure_logging, get_logger


def test_get_logger_nests_under_package() -> None:
    assert get_logger("sceneintel.link.locations").name == "sceneintel.link.locations"
    assert get_logger("tools").name == "sceneintel.tools"
    assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


def test_configure_logging_idempotent() -> None:
    root = configure_logging(verbose=True)
    count = len(root.handlers)
    configure_logging(verbose=False)
    assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == count
    assert root.level == logging.WARNING
