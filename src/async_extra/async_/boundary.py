"""Conversion boundary from foreign async primitives to Results.

This is the only place where exceptions raised by foreign work are caught
and turned into ``Err(description)``. Everything built on top of it treats
failure as ordinary data.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from async_extra._config import get_config
from async_extra._logging import get_logger
from async_extra.errors import describe_failure
from async_extra.option import NothingType, Some
from async_extra.result import Err, Ok, Result

__all__ = ['capture', 'lift_option']


def lift_option[T, E](err_if_none: E, option: Some[T] | NothingType | T | None) -> Result[T, E]:
    """Convert an optional value to a Result.

    ``Some(v)`` and plain values become ``Ok``; ``Nothing`` and ``None``
    become ``Err(err_if_none)``. ``Some(None)`` is present and becomes
    ``Ok(None)``.
    """
    if isinstance(option, Some):
        return Ok(option.value)
    if option is None or isinstance(option, NothingType):
        return Err(err_if_none)
    return Ok(option)


async def capture[T](operation: str, produce: Callable[[], Awaitable[T]]) -> Result[T, str]:
    """Invoke ``produce``, await its awaitable and capture any failure.

    Args:
        operation: Name of the conversion, used in log events.
        produce: Zero-argument callable starting the foreign work. It is
            called here, at execution time, exactly once.

    Returns:
        ``Ok(value)`` on success, ``Err(description)`` if the work raised
        or the awaited future was cancelled.

    Raises:
        asyncio.CancelledError: If the task running this coroutine is itself
            being cancelled. Only the foreign work's cancellation is data.
    """
    try:
        value = await produce()
    except asyncio.CancelledError as exc:
        if _current_task_cancelling():
            raise
        return _failure(operation, exc)
    except Exception as exc:
        return _failure(operation, exc)
    return Ok(value)


def _current_task_cancelling() -> bool:
    """Return True if the running asyncio task has a pending cancellation."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        return False
    return task is not None and task.cancelling() > 0


def _failure(operation: str, exc: BaseException) -> Err[str]:
    description = describe_failure(exc)
    if get_config().log_level is not None:
        get_logger(__name__).debug(
            'foreign_failure_captured',
            operation=operation,
            exc_type=type(exc).__name__,
            description=description,
        )
    return Err(description)
