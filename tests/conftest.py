"""Pytest configuration and shared fixtures for async-extra tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

from async_extra import _config
from async_extra._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test with no active config, no env overrides and no log hooks."""
    for name in ('ASYNC_EXTRA_LOG_LEVEL', 'ASYNC_EXTRA_LOG_JSON', 'ASYNC_EXTRA_CONCURRENCY_LIMIT'):
        monkeypatch.delenv(name, raising=False)
    _config.reset()
    clear_log_hooks()
    yield
    _config.reset()
    clear_log_hooks()


@pytest.fixture
def calls() -> list[Any]:
    """Record of side effects observed by probe callbacks."""
    return []

