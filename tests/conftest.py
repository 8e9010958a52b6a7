"""Pytest configuration and shared fixtures for klaw-gen tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
import structlog
from klaw_gen.runtime import LOGGER_NAMESPACE, reset

if TYPE_CHECKING:
    from collections.abc import Generator


def _reset_logging() -> None:
    structlog.reset_defaults()
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test from default configuration and logging."""
    monkeypatch.delenv('KLAW_GEN_SEED', raising=False)
    reset()
    _reset_logging()
    yield
    reset()
    _reset_logging()
