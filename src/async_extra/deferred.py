"""Deferred: a re-runnable description of asynchronous work.

A Deferred wraps a zero-argument callable that produces an awaitable. Nothing
runs when a Deferred is built; every ``await`` invokes the callable afresh,
so the same Deferred can be executed any number of times.

Example:
    ```python
    async def fetch() -> int:
        return 41

    answer = Deferred(fetch).map(lambda x: x + 1)
    assert await answer == 42
    assert await answer == 42  # runs fetch() again
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from typing import Any

import anyio

__all__ = ['Deferred', 'bind', 'both', 'map', 'singleton']


class Deferred[T]:
    """Lazy, re-executable awaitable producing a value of type T."""

    __slots__ = ('_thunk',)

    def __init__(self, thunk: Callable[[], Awaitable[T]]) -> None:
        """Create a Deferred from a zero-argument awaitable factory.

        Args:
            thunk: Callable invoked once per execution to start the work.
        """
        self._thunk = thunk

    def __await__(self) -> Generator[Any, Any, T]:
        return self.run().__await__()

    async def run(self) -> T:
        """Execute the description once and return its value."""
        return await self._thunk()

    @classmethod
    def singleton(cls, value: T) -> Deferred[T]:
        """Create a Deferred that resolves to ``value`` without suspending."""

        async def _value() -> T:
            return value

        return cls(_value)

    def bind[U](self, f: Callable[[T], Awaitable[U]]) -> Deferred[U]:
        """Sequence another computation after this one.

        ``f`` receives this computation's value and returns the next
        awaitable (usually another Deferred). ``f`` is never called before
        this computation has resolved.
        """

        async def _bound() -> U:
            return await f(await self._thunk())

        return Deferred(_bound)

    def map[U](self, f: Callable[[T], U]) -> Deferred[U]:
        """Transform the value with a synchronous function."""
        return self.bind(lambda x: Deferred.singleton(f(x)))

    def __repr__(self) -> str:
        return f'Deferred({self._thunk!r})'


def singleton[T](value: T) -> Deferred[T]:
    """Lift a plain value into a Deferred."""
    return Deferred.singleton(value)


def bind[T, U](f: Callable[[T], Awaitable[U]], deferred: Deferred[T]) -> Deferred[U]:
    """Function-first form of ``Deferred.bind``."""
    return deferred.bind(f)


def map[T, U](f: Callable[[T], U], deferred: Deferred[T]) -> Deferred[U]:  # noqa: A001
    """Function-first form of ``Deferred.map``."""
    return deferred.map(f)


def both[A, B](first: Awaitable[A], second: Awaitable[B]) -> Deferred[tuple[A, B]]:
    """Run two awaitables as concurrent children and wait for both.

    Both are started in one anyio task group before either is awaited, so
    their latencies overlap. If one raises, the task group cancels the other
    and re-raises the exception wrapped in an ``ExceptionGroup``. Every
    fan-out combinator inherits this.

    Args:
        first: First awaitable. Re-executed on each run if it is a Deferred.
        second: Second awaitable.

    Returns:
        Deferred producing ``(first_value, second_value)``.
    """

    async def _both() -> tuple[A, B]:
        results: dict[int, Any] = {}

        async def run(index: int, aw: Awaitable[Any]) -> None:
            results[index] = await aw

        async with anyio.create_task_group() as tg:
            tg.start_soon(run, 0, first)
            tg.start_soon(run, 1, second)

        return results[0], results[1]

    return Deferred(_both)

