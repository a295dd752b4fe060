"""Shared pytest fixtures and configuration for the argreflect test suite.

Guidelines
----------
* No network or filesystem access in any test.
* Core tests must be pure, with no side effects.
* Tests that touch the ``argreflect`` logger leave it as they found it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _restore_argreflect_logger() -> Iterator[None]:
    """Undo handlers/levels installed by ``--verbose`` runs."""
    logger = logging.getLogger("argreflect")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
