"""@async_result decorator for generator-based do-notation over AsyncResult."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any, ParamSpec, TypeVar

import wrapt

from async_extra.async_.result import AsyncResult
from async_extra.errors import InvalidYieldError
from async_extra.result import Err, Ok, Result

__all__ = ['async_result', 'do_async_result']

P = ParamSpec('P')
T = TypeVar('T')


def async_result(
    func: Callable[P, Generator[Any, Any, T]],
) -> Callable[P, AsyncResult[Any, Any]]:
    """Decorator for generator-based do-notation with AsyncResult.

    Calling the decorated function does not run anything: it returns an
    AsyncResult. Each execution of that AsyncResult starts a fresh
    generator and drives it:

    - ``x = yield some_async_result`` awaits it and sends back the Ok value.
      An Err ends the computation immediately with that Err.
    - ``x = yield Ok(1)`` / ``yield Err(e)`` works the same for plain Results.
    - ``a, b = yield (ar1, ar2)`` runs the AsyncResults concurrently and sends
      back a tuple of values. If several fail, the first by position wins.
    - ``return value`` produces ``Ok(value)``. Returning an AsyncResult or a
      Result flattens it. Falling off the end produces ``Ok(None)``.

    Steps run strictly in the order they are yielded.

    Args:
        func: A generator function that yields AsyncResults and returns T.

    Returns:
        A function with the same parameters returning AsyncResult[T, E].

    Raises:
        InvalidYieldError: At execution time, if the body yields anything else.

    Example:
        ```python
        @async_result
        def order_total(order_id: int):
            order = yield fetch_order(order_id)
            prices, rates = yield (fetch_prices(order.items), fetch_rates())
            return sum(prices) * rates[order.currency]

        assert await order_total(7) == Ok(...)
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Generator[Any, Any, T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> AsyncResult[T, Any]:
        async def _drive() -> Result[T, Any]:
            gen = wrapped(*args, **kwargs)
            try:
                step = next(gen)
                while True:
                    outcome = await _await_step(step)
                    if isinstance(outcome, Err):
                        return outcome
                    step = gen.send(outcome.value)
            except StopIteration as e:
                return await _lift_return(e.value)
            finally:
                gen.close()

        return AsyncResult(_drive)

    return wrapper(func)  # type: ignore[return-value]


do_async_result = async_result


async def _await_step(step: Any) -> Result[Any, Any]:
    """Execute one yielded step and return its Result."""
    if isinstance(step, AsyncResult):
        return await step
    if isinstance(step, Ok | Err):
        return step
    if isinstance(step, tuple) and step and all(isinstance(s, AsyncResult) for s in step):
        return await _merge_sources(step)
    raise InvalidYieldError(step)


async def _merge_sources(sources: tuple[AsyncResult[Any, Any], ...]) -> Result[tuple[Any, ...], Any]:
    """Run all sources concurrently; first error by position wins."""
    merged: AsyncResult[tuple[Any, ...], Any] = sources[0].map(lambda value: (value,))
    for source in sources[1:]:
        merged = merged.zip(source).map(lambda pair: (*pair[0], pair[1]))
    return await merged


async def _lift_return(value: Any) -> Result[Any, Any]:
    if isinstance(value, AsyncResult):
        return await value
    if isinstance(value, Ok | Err):
        return value
    return Ok(value)
