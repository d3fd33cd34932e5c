"""Pytest configuration for the adapter test suite.

``log_capture`` collects records from the shared ``llm_adapters`` logger,
which does not propagate to the root logger. Transport and SSE helpers live
in ``llm_adapters.tests.helpers``.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from llm_adapters.base.logging import BASE_LOGGER_NAME


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    logger = logging.getLogger(BASE_LOGGER_NAME)
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
