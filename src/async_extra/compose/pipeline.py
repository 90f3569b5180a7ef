"""Pipeline builder for chaining AsyncResult steps without nesting."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Generator
from typing import Any

from async_extra.async_.result import AsyncResult
from async_extra.result import Err, Ok, Result

__all__ = ['Pipeline', 'pipe']


def _is_result(value: object) -> bool:
    """Check if a value is already an Ok or Err."""
    return isinstance(value, Ok | Err)


def _lift_source[T, E](source: AsyncResult[T, E] | Result[T, E] | T) -> AsyncResult[T, E]:
    """Wrap a pipeline source in an AsyncResult."""
    if isinstance(source, AsyncResult):
        return source
    if _is_result(source):
        return AsyncResult.from_result(source)  # type: ignore[arg-type]
    if inspect.isawaitable(source):
        msg = (
            'Pipeline sources must be re-runnable; wrap the awaitable factory in '
            'AsyncResult(...) or AsyncResult.from_task(...) instead'
        )
        raise TypeError(msg)
    return AsyncResult.from_ok(source)


def _lift_step(value: Any) -> AsyncResult[Any, Any]:
    """Wrap the return value of a step in an AsyncResult.

    AsyncResults are used directly, Ok/Err are lifted, awaitables returned
    by async steps are awaited and their value lifted in turn, and anything
    else becomes Ok(value).
    """
    if isinstance(value, AsyncResult):
        return value
    if _is_result(value):
        return AsyncResult.from_result(value)
    if inspect.isawaitable(value):

        async def _awaited() -> Result[Any, Any]:
            return await _lift_step(await value)

        return AsyncResult(_awaited)
    return AsyncResult.from_ok(value)


class Pipeline[T, E]:
    """Builder exposing chained ``then`` steps over an AsyncResult.

    Every step is sequential: it starts only after the previous one resolved
    to Ok, and Err skips all remaining success steps. A Pipeline is
    immutable; each method returns a new one. It can be awaited directly or
    turned into an AsyncResult with ``build()``.

    Example:
        ```python
        user = await (
            Pipeline(user_id)
            .then(fetch_user)            # returns AsyncResult
            .then(validate)              # returns Ok/Err
            .then_map(lambda u: u.name)
            .recover(lambda e: 'anonymous')
        )
        ```
    """

    __slots__ = ('_source',)

    def __init__(self, source: AsyncResult[T, E] | Result[T, E] | T) -> None:
        """Start a pipeline.

        Args:
            source: An AsyncResult, an Ok/Err, or a plain value (lifted to Ok).

        Raises:
            TypeError: If ``source`` is a bare awaitable, which could only run once.
        """
        self._source: AsyncResult[T, E] = _lift_source(source)

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self._source.__await__()

    def then[U](self, f: Callable[[T], Any]) -> Pipeline[U, E]:
        """Bind a step; its return value is lifted like a pipeline source.

        ``f`` may return an AsyncResult, an Ok/Err, an awaitable (async
        step) or a plain value.
        """
        return Pipeline(self._source.bind(lambda value: _lift_step(f(value))))

    def then_map[U](self, f: Callable[[T], U]) -> Pipeline[U, E]:
        """Map the Ok value with a plain function; the result is not lifted."""
        return Pipeline(self._source.map(f))

    def map_error[F](self, f: Callable[[E], F]) -> Pipeline[T, F]:
        """Map the Err value."""
        return Pipeline(self._source.map_error(f))

    def recover[F](self, f: Callable[[E], Any]) -> Pipeline[T, F]:
        """Bind an error-path step; its return value is lifted like ``then``."""
        return Pipeline(self._source.bind_error(lambda error: _lift_step(f(error))))

    def build(self) -> AsyncResult[T, E]:
        """Return the AsyncResult described by this pipeline."""
        return self._source

    def __repr__(self) -> str:
        return f'Pipeline({self._source!r})'


def pipe(source: Any, *fns: Callable[[Any], Any]) -> AsyncResult[Any, Any]:
    """Thread a source through ``Pipeline.then`` steps.

    Example:
        ```python
        assert await pipe(5, lambda x: x + 1, lambda x: Ok(x * 2)) == Ok(12)
        assert await pipe(5, lambda x: Err('fail'), lambda x: x + 1) == Err('fail')
        ```
    """
    pipeline: Pipeline[Any, Any] = Pipeline(source)
    for fn in fns:
        pipeline = pipeline.then(fn)
    return pipeline.build()
