"""Error helpers for the foreign-failure boundary and misuse exceptions."""

from __future__ import annotations

import asyncio

__all__ = [
    'CANCELLED_MESSAGE',
    'InvalidYieldError',
    'describe_failure',
]

CANCELLED_MESSAGE = 'A task was cancelled.'


def describe_failure(exc: BaseException) -> str:
    """Return a human-readable, non-empty description of a foreign failure.

    The text is best-effort: callers should not match on exact wording.

    Examples:
        >>> describe_failure(ValueError('boom'))
        'boom'
        >>> describe_failure(KeyError())
        'KeyError'
        >>> describe_failure(ExceptionGroup('many', [ValueError('a'), OSError('b')]))
        'many (a; b)'
    """
    if isinstance(exc, asyncio.CancelledError):
        return str(exc) or CANCELLED_MESSAGE
    if isinstance(exc, BaseExceptionGroup):
        inner = '; '.join(describe_failure(e) for e in exc.exceptions)
        return f'{exc.message or type(exc).__name__} ({inner})'
    return str(exc) or type(exc).__name__


class InvalidYieldError(TypeError):
    """A do-notation body yielded something that cannot be awaited as a Result."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f'async_result bodies must yield an AsyncResult, an Ok/Err or a tuple of '
            f'AsyncResults, got {type(value).__name__}'
        )
