"""AsyncResult type: a deferred computation producing Ok or Err.

AsyncResult wraps a Deferred[Result[T, E]] and provides transformation
methods that compose without running anything. Work starts only when the
AsyncResult is awaited, and starts again on every await.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, str]:
        ...

    user_name = (
        AsyncResult(lambda: fetch_user(1))
        .bind(validate_user)
        .map(lambda user: user.name)
    )
    result = await user_name
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import TYPE_CHECKING, Any

from async_extra.async_.boundary import capture, lift_option
from async_extra.deferred import Deferred, both
from async_extra.result import Err, Ok, Result

if TYPE_CHECKING:
    from async_extra.option import NothingType, Option, Some

__all__ = ['AsyncResult']


class AsyncResult[T, E]:
    """Deferred, re-executable computation that yields Ok[T] or Err[E].

    Each ``await`` runs the whole description once and produces exactly one
    outcome. Success-path functions (``map``, ``bind`` and the applicative
    combinators) never run once an Err exists; error-path functions
    (``map_error``, ``bind_error``) never run on Ok.

    Sequential combinators (``bind``, ``apply``, ``and_map``) run their
    operands one after another in argument order. Fan-out combinators
    (``apply_concurrent``, ``and_map_concurrent``, ``zip``) start both
    operands concurrently in an anyio task group. Either way, when both
    operands fail, the error of the first positional operand wins.

    Attributes:
        _deferred: The underlying Deferred that produces a Result.
    """

    __slots__ = ('_deferred',)

    def __init__(
        self, source: Deferred[Result[T, E]] | Callable[[], Awaitable[Result[T, E]]]
    ) -> None:
        """Create an AsyncResult.

        Args:
            source: A Deferred, or a zero-argument callable returning an
                awaitable of Result (e.g. an ``async def`` with no parameters).
        """
        self._deferred = source if isinstance(source, Deferred) else Deferred(source)

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self._deferred.__await__()

    def run(self) -> Coroutine[Any, Any, Result[T, E]]:
        """Return a fresh coroutine executing this AsyncResult once.

        Useful wherever a coroutine object is required:

            asyncio.run(AsyncResult.from_ok(1).run())
        """
        return self._deferred.run()

    # --- Construction ---

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an AsyncResult that resolves to Ok(value) without suspending."""
        return cls(Deferred.singleton(Ok(value)))

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        """Create an AsyncResult that resolves to Err(error) without suspending."""
        return cls(Deferred.singleton(Err(error)))

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Lift a synchronous Result."""
        return cls(Deferred.singleton(result))

    @classmethod
    def from_option(
        cls, err_if_none: E, option: Some[T] | NothingType | T | None
    ) -> AsyncResult[T, E]:
        """Lift an optional value, using ``err_if_none`` when it is absent.

        Example:
            ```python
            assert await AsyncResult.from_option('missing', Some(1)) == Ok(1)
            assert await AsyncResult.from_option('missing', None) == Err('missing')
            ```
        """
        return cls.from_result(lift_option(err_if_none, option))

    @classmethod
    def from_async(
        cls, deferred: Deferred[T] | Callable[[], Awaitable[T]]
    ) -> AsyncResult[T, str]:
        """Run a computation that has no failure channel of its own.

        Exceptions raised while it runs become ``Err(description)``.

        Args:
            deferred: A Deferred or zero-argument async callable.
        """
        source = deferred if isinstance(deferred, Deferred) else Deferred(deferred)

        async def _run() -> Result[T, str]:
            return await capture('from_async', source.run)

        return cls(_run)

    @classmethod
    def from_task(cls, producer: Callable[[], Awaitable[T]]) -> AsyncResult[T, str]:
        """Adapt a lazily started future, task or coroutine.

        ``producer`` is not called here. Each execution calls it once and
        awaits what it returns. A raised exception or a cancelled future
        becomes ``Err(description)``.

        Example:
            ```python
            greeting = AsyncResult.from_task(
                lambda: asyncio.ensure_future(fetch_greeting())
            )
            assert await greeting == Ok('Hello')
            ```
        """

        async def _run() -> Result[T, str]:
            return await capture('from_task', producer)

        return cls(_run)

    @classmethod
    def from_unit_task(cls, producer: Callable[[], Awaitable[Any]]) -> AsyncResult[None, str]:
        """Like ``from_task`` but discards the value, yielding ``Ok(None)``."""
        return cls.from_task(producer).map(lambda _: None)

    # --- Transformation ---

    def map[U](self, f: Callable[[T], U]) -> AsyncResult[U, E]:
        """Apply a sync function to the Ok value; Err passes through.

        Example:
            ```python
            assert await AsyncResult.from_ok(5).map(lambda x: x * 2) == Ok(10)
            ```
        """
        return AsyncResult(self._deferred.map(lambda result: result.map(f)))

    def map_error[F](self, f: Callable[[E], F]) -> AsyncResult[T, F]:
        """Apply a sync function to the Err value; Ok passes through."""
        return AsyncResult(self._deferred.map(lambda result: result.map_err(f)))

    def bind[U](self, f: Callable[[T], AsyncResult[U, E]]) -> AsyncResult[U, E]:
        """Chain a function returning another AsyncResult.

        On Ok(value) runs ``f(value)`` and flattens. On Err returns the error
        without calling ``f``.
        """

        def _next(result: Result[T, E]) -> Awaitable[Result[U, E]]:
            if isinstance(result, Ok):
                return f(result.value)
            return Deferred.singleton(result)

        return AsyncResult(self._deferred.bind(_next))

    def bind_error[F](self, f: Callable[[E], AsyncResult[T, F]]) -> AsyncResult[T, F]:
        """Recover from an Err with a function returning another AsyncResult.

        On Err(error) runs ``f(error)`` and flattens. On Ok returns the value
        without calling ``f``.
        """

        def _next(result: Result[T, E]) -> Awaitable[Result[T, F]]:
            if isinstance(result, Err):
                return f(result.error)
            return Deferred.singleton(result)

        return AsyncResult(self._deferred.bind(_next))

    def tap(self, f: Callable[[T], Any]) -> AsyncResult[T, E]:
        """Run a side effect on the Ok value and pass the outcome through."""

        def _tapped(value: T) -> T:
            f(value)
            return value

        return self.map(_tapped)

    def tap_error(self, f: Callable[[E], Any]) -> AsyncResult[T, E]:
        """Run a side effect on the Err value and pass the outcome through."""

        def _tapped(error: E) -> E:
            f(error)
            return error

        return self.map_error(_tapped)

    # --- Applicative combination ---

    def apply[A, B](
        self: AsyncResult[Callable[[A], B], E], other: AsyncResult[A, E]
    ) -> AsyncResult[B, E]:
        """Apply the wrapped function to another AsyncResult's value, sequentially.

        Runs ``self`` first. If it failed, its error is returned and ``other``
        is never run. Otherwise runs ``other`` and returns ``Ok(f(x))`` or
        ``other``'s error.
        """
        return self.bind(other.map)

    def and_map[B](self, f_result: AsyncResult[Callable[[T], B], E]) -> AsyncResult[B, E]:
        """``f_result.apply(self)``: value first, for left-to-right pipelines.

        Example:
            ```python
            add = AsyncResult.from_ok(lambda a: lambda b: a + b)
            total = AsyncResult.from_ok(2).and_map(
                AsyncResult.from_ok(1).and_map(add)
            )
            assert await total == Ok(3)
            ```
        """
        return f_result.apply(self)

    def apply_concurrent[A, B](
        self: AsyncResult[Callable[[A], B], E], other: AsyncResult[A, E]
    ) -> AsyncResult[B, E]:
        """Fan-out variant of ``apply``: both operands run concurrently.

        The function is applied once both have resolved. If both fail,
        ``self``'s error wins. An exception raised while running either
        operand escapes wrapped in an ``ExceptionGroup``.
        """
        return _combine_concurrent(self, other, lambda f, x: f(x))

    def and_map_concurrent[B](
        self, f_result: AsyncResult[Callable[[T], B], E]
    ) -> AsyncResult[B, E]:
        """Fan-out variant of ``and_map``; ``f_result``'s error wins on double failure."""
        return f_result.apply_concurrent(self)

    def zip[U](self, other: AsyncResult[U, E]) -> AsyncResult[tuple[T, U], E]:
        """Run both AsyncResults concurrently and pair their values.

        If both are Ok, returns Ok((self.value, other.value)). If either is
        Err, returns the first Err by position: self first, then other.
        """
        return _combine_concurrent(self, other, lambda a, b: (a, b))

    # --- Extraction ---

    def unwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        """Return a coroutine producing the Ok value or ``default``."""

        async def _unwrap() -> T:
            result = await self
            if isinstance(result, Ok):
                return result.value
            return default

        return _unwrap()

    def unwrap_or_else(self, f: Callable[[E], T]) -> Coroutine[Any, Any, T]:
        """Return a coroutine producing the Ok value or ``f(error)``."""

        async def _unwrap() -> T:
            result = await self
            if isinstance(result, Ok):
                return result.value
            return f(result.error)

        return _unwrap()

    def ok(self) -> Coroutine[Any, Any, Option[T]]:
        """Return a coroutine producing Some(value) for Ok, Nothing for Err."""

        async def _ok() -> Option[T]:
            return (await self).ok()

        return _ok()

    def err(self) -> Coroutine[Any, Any, Option[E]]:
        """Return a coroutine producing Some(error) for Err, Nothing for Ok."""

        async def _err() -> Option[E]:
            return (await self).err()

        return _err()

    def __repr__(self) -> str:
        return f'AsyncResult({self._deferred!r})'


def _combine_concurrent[A, B, C, E](
    first: AsyncResult[A, E],
    second: AsyncResult[B, E],
    f: Callable[[A, B], C],
) -> AsyncResult[C, E]:
    """Run two AsyncResults concurrently and combine their Ok values with ``f``."""

    def _combine(outcomes: tuple[Result[A, E], Result[B, E]]) -> Result[C, E]:
        result1, result2 = outcomes
        if isinstance(result1, Err):
            return result1
        if isinstance(result2, Err):
            return result2
        return Ok(f(result1.value, result2.value))

    return AsyncResult(both(first, second).map(_combine))
