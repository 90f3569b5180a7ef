"""Function-first AsyncResult combinators.

Every operation takes the function (or error) first and the AsyncResult
last, which reads well with ``functools.partial`` and in pipelines:

    from async_extra.async_ import functions as ar

    names = ar.traverse(lambda user: user.name, [fetch(1), fetch(2)])
    total = ar.map2(operator.add, fetch_count('a'), fetch_count('b'))

Execution discipline is fixed per operation:

- Sequential: ``map``, ``bind``, ``apply``, ``and_map``, ``map2``-``map5``,
  ``bind2``-``bind5``, ``traverse``, ``sequence``. Operands run one after
  another in argument/list order; the first Err stops the chain and later
  operands are never run.
- Fan-out: ``apply_concurrent``, ``and_map_concurrent``, ``zip``,
  ``traverse_concurrent``, ``sequence_concurrent``. All operands start
  concurrently and every one is awaited.

In both disciplines, when several operands fail, the error of the operand
that comes first by position is returned.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any

import aiologic
import anyio

from async_extra._config import get_config
from async_extra.async_.result import AsyncResult
from async_extra.result import Err, Ok, Result, collect

if TYPE_CHECKING:
    from async_extra.deferred import Deferred
    from async_extra.option import NothingType, Some

__all__ = [
    'and_map',
    'and_map_concurrent',
    'apply',
    'apply_concurrent',
    'bind',
    'bind2',
    'bind3',
    'bind4',
    'bind5',
    'bind_error',
    'from_async',
    'from_option',
    'from_result',
    'from_task',
    'from_unit_task',
    'map',
    'map2',
    'map3',
    'map4',
    'map5',
    'map_error',
    'sequence',
    'sequence_concurrent',
    'singleton',
    'traverse',
    'traverse_concurrent',
    'zip',
]


# --- Construction ---


def singleton[T, E](value: T) -> AsyncResult[T, E]:
    """Lift a plain value into an immediately-resolving Ok."""
    return AsyncResult.from_ok(value)


def from_result[T, E](result: Result[T, E]) -> AsyncResult[T, E]:
    return AsyncResult.from_result(result)


def from_option[T, E](err_if_none: E, option: Some[T] | NothingType | T | None) -> AsyncResult[T, E]:
    return AsyncResult.from_option(err_if_none, option)


def from_async[T](deferred: Deferred[T] | Callable[[], Awaitable[T]]) -> AsyncResult[T, str]:
    return AsyncResult.from_async(deferred)


def from_task[T](producer: Callable[[], Awaitable[T]]) -> AsyncResult[T, str]:
    return AsyncResult.from_task(producer)


def from_unit_task(producer: Callable[[], Awaitable[Any]]) -> AsyncResult[None, str]:
    return AsyncResult.from_unit_task(producer)


# --- Transformation ---


def map[T, U, E](f: Callable[[T], U], async_result: AsyncResult[T, E]) -> AsyncResult[U, E]:  # noqa: A001
    return async_result.map(f)


def map_error[T, E, F](f: Callable[[E], F], async_result: AsyncResult[T, E]) -> AsyncResult[T, F]:
    return async_result.map_error(f)


def bind[T, U, E](
    f: Callable[[T], AsyncResult[U, E]], async_result: AsyncResult[T, E]
) -> AsyncResult[U, E]:
    return async_result.bind(f)


def bind_error[T, E, F](
    f: Callable[[E], AsyncResult[T, F]], async_result: AsyncResult[T, E]
) -> AsyncResult[T, F]:
    return async_result.bind_error(f)


# --- Applicative combination ---


def apply[A, B, E](
    f_result: AsyncResult[Callable[[A], B], E], x_result: AsyncResult[A, E]
) -> AsyncResult[B, E]:
    """Sequential apply; ``f_result``'s error wins and skips ``x_result``."""
    return f_result.apply(x_result)


def and_map[A, B, E](
    x_result: AsyncResult[A, E], f_result: AsyncResult[Callable[[A], B], E]
) -> AsyncResult[B, E]:
    """``apply`` with the arguments swapped."""
    return x_result.and_map(f_result)


def apply_concurrent[A, B, E](
    f_result: AsyncResult[Callable[[A], B], E], x_result: AsyncResult[A, E]
) -> AsyncResult[B, E]:
    """Fan-out apply; both run, ``f_result``'s error wins on double failure."""
    return f_result.apply_concurrent(x_result)


def and_map_concurrent[A, B, E](
    x_result: AsyncResult[A, E], f_result: AsyncResult[Callable[[A], B], E]
) -> AsyncResult[B, E]:
    return x_result.and_map_concurrent(f_result)


def zip[A, B, E](first: AsyncResult[A, E], second: AsyncResult[B, E]) -> AsyncResult[tuple[A, B], E]:  # noqa: A001
    """Fan-out pairing of two AsyncResults."""
    return first.zip(second)


def _arguments[E](results: tuple[AsyncResult[Any, E], ...]) -> AsyncResult[tuple[Any, ...], E]:
    """Run ``results`` sequentially and collect their values as a tuple."""
    return sequence(results).map(tuple)


def map2[A1, A2, R, E](
    f: Callable[[A1, A2], R],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
) -> AsyncResult[R, E]:
    """Apply a 2-ary function across two AsyncResults, left to right.

    Example:
        ```python
        total = map2(operator.add, AsyncResult.from_ok(1), AsyncResult.from_ok(2))
        assert await total == Ok(3)
        ```
    """
    return _arguments((a1, a2)).map(lambda args: f(*args))


def map3[A1, A2, A3, R, E](
    f: Callable[[A1, A2, A3], R],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3)).map(lambda args: f(*args))


def map4[A1, A2, A3, A4, R, E](
    f: Callable[[A1, A2, A3, A4], R],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
    a4: AsyncResult[A4, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3, a4)).map(lambda args: f(*args))


def map5[A1, A2, A3, A4, A5, R, E](
    f: Callable[[A1, A2, A3, A4, A5], R],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
    a4: AsyncResult[A4, E],
    a5: AsyncResult[A5, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3, a4, a5)).map(lambda args: f(*args))


def bind2[A1, A2, R, E](
    f: Callable[[A1, A2], AsyncResult[R, E]],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
) -> AsyncResult[R, E]:
    """Like ``map2`` but ``f`` returns an AsyncResult, which is flattened."""
    return _arguments((a1, a2)).bind(lambda args: f(*args))


def bind3[A1, A2, A3, R, E](
    f: Callable[[A1, A2, A3], AsyncResult[R, E]],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3)).bind(lambda args: f(*args))


def bind4[A1, A2, A3, A4, R, E](
    f: Callable[[A1, A2, A3, A4], AsyncResult[R, E]],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
    a4: AsyncResult[A4, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3, a4)).bind(lambda args: f(*args))


def bind5[A1, A2, A3, A4, A5, R, E](
    f: Callable[[A1, A2, A3, A4, A5], AsyncResult[R, E]],
    a1: AsyncResult[A1, E],
    a2: AsyncResult[A2, E],
    a3: AsyncResult[A3, E],
    a4: AsyncResult[A4, E],
    a5: AsyncResult[A5, E],
) -> AsyncResult[R, E]:
    return _arguments((a1, a2, a3, a4, a5)).bind(lambda args: f(*args))


# --- List aggregation ---


def traverse[A, B, E](
    f: Callable[[A], B], items: Iterable[AsyncResult[A, E]]
) -> AsyncResult[list[B], E]:
    """Run each AsyncResult in order and map ``f`` over the success values.

    Element N+1 is not started until element N has resolved. The first Err
    is returned immediately: later elements are never executed and ``f``
    never sees them.

    Args:
        f: Sync function applied to each Ok value as soon as it resolves.
        items: AsyncResults to run. Materialized at construction time so
            the returned AsyncResult can be executed more than once.

    Returns:
        AsyncResult of the mapped values in input order, or the first Err.

    Examples:
        ```python
        seen = []
        items = [AsyncResult.from_ok(1), AsyncResult.from_err('skip'), AsyncResult.from_ok(3)]
        assert await traverse(seen.append, items) == Err('skip')
        assert seen == [1]
        ```
    """
    pending = list(items)

    async def _traversed() -> Result[list[B], E]:
        values: list[B] = []
        for item in pending:
            result = await item
            if isinstance(result, Err):
                return result
            values.append(f(result.value))
        return Ok(values)

    return AsyncResult(_traversed)


def sequence[T, E](items: Iterable[AsyncResult[T, E]]) -> AsyncResult[list[T], E]:
    """``traverse`` with the identity function."""
    return traverse(lambda value: value, items)


def traverse_concurrent[A, B, E](
    f: Callable[[A], B],
    items: Iterable[AsyncResult[A, E]],
    *,
    limit: int | None = None,
) -> AsyncResult[list[B], E]:
    """Run all AsyncResults concurrently and map ``f`` over the success values.

    Unlike ``traverse`` nothing is short-circuited: every element runs to
    completion. The output keeps input order regardless of completion order,
    and the first Err by list position wins.

    Args:
        f: Sync function applied to the Ok values.
        items: AsyncResults to run.
        limit: Maximum number of elements running at once. None falls back
            to ``Config.concurrency_limit`` (unbounded if that is None too).

    Raises:
        ValueError: If ``limit`` is not positive. Raised at construction.
        ExceptionGroup: At execution time, if running an element raises
            (e.g. a ``map`` callback inside it). Elements run as children
            of an anyio task group, so the exception surfaces wrapped in a
            group (use ``except*``) rather than bare as from ``traverse``.
            ``f`` itself runs after the group has finished.
    """
    if limit is not None and limit < 1:
        msg = f'limit must be positive, got {limit}'
        raise ValueError(msg)
    pending = list(items)

    async def _traversed() -> Result[list[B], E]:
        bound = limit if limit is not None else get_config().concurrency_limit
        limiter = aiologic.CapacityLimiter(bound) if bound is not None else None
        outcomes: list[Result[A, E] | None] = [None] * len(pending)

        async def run_one(index: int, item: AsyncResult[A, E]) -> None:
            if limiter is None:
                outcomes[index] = await item
                return
            async with limiter:
                outcomes[index] = await item

        async with anyio.create_task_group() as tg:
            for index, item in enumerate(pending):
                tg.start_soon(run_one, index, item)

        return collect(outcome.map(f) for outcome in outcomes)  # type: ignore[union-attr]

    return AsyncResult(_traversed)


def sequence_concurrent[T, E](
    items: Iterable[AsyncResult[T, E]], *, limit: int | None = None
) -> AsyncResult[list[T], E]:
    """``traverse_concurrent`` with the identity function."""
    return traverse_concurrent(lambda value: value, items, limit=limit)
