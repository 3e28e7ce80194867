"""Shared fixtures for diagnostics tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from orchid_diagnostics.observability.metrics import get_metrics_recorder, set_metrics_recorder


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    logger = logging.getLogger("orchid_diagnostics")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    try:
        yield
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = propagate
        logger.setLevel(level)


@pytest.fixture(autouse=True)
def _restore_metrics_recorder() -> Iterator[None]:
    previous = get_metrics_recorder()
    try:
        yield
    finally:
        set_metrics_recorder(previous)
