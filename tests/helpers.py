"""Helpers shared by async-extra tests."""

from __future__ import annotations

import asyncio
from typing import Any

from async_extra import AsyncResult, Ok
from async_extra.result import Result


def run[T, E](async_result: AsyncResult[T, E]) -> Result[T, E]:
    """Drive an AsyncResult to completion from sync (e.g. hypothesis) tests."""
    return asyncio.run(async_result.run())


class Probe:
    """Callable that records every value it is called with."""

    def __init__(self, returns: Any = None) -> None:
        self.calls: list[Any] = []
        self._returns = returns

    def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        return value if self._returns is None else self._returns

    @property
    def count(self) -> int:
        return len(self.calls)


def delayed_ok[T](value: T, delay: float, log: list[Any] | None = None) -> AsyncResult[T, Any]:
    """AsyncResult that sleeps, records ``value`` in ``log`` and resolves to Ok(value)."""

    async def _run() -> Result[T, Any]:
        await asyncio.sleep(delay)
        if log is not None:
            log.append(value)
        return Ok(value)

    return AsyncResult(_run)
