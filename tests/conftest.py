"""Pytest configuration and shared fixtures for fallible tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from fallible import Failure, Nothing, Some, Success
from fallible._config import reset
from fallible._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def fresh_config() -> Generator[None]:
    """Start and end every test with the default configuration and no log hooks."""
    reset()
    clear_log_hooks()
    yield
    reset()
    clear_log_hooks()


@pytest.fixture
def restore_root_logger() -> Generator[None]:
    """Undo configure_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_success() -> Success[int]:
    """Sample Success value for testing."""
    return Success(42)


@pytest.fixture
def sample_failure() -> Failure[ValueError]:
    """Sample Failure value for testing."""
    return Failure(ValueError('test error'))


@pytest.fixture
def sample_some() -> Some[str]:
    """Sample Some value for testing."""
    return Some('hello')


@pytest.fixture
def sample_nothing() -> Nothing:
    """Sample Nothing value for testing."""
    return Nothing()
