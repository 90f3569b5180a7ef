"""Ok/Err: the synchronous outcome an AsyncResult resolves to.

An executed AsyncResult always produces exactly one of these two frozen
structs. Foreign failures arrive here as ``Err(str)``; domain errors can be
any type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

if TYPE_CHECKING:
    from async_extra.option import Option

__all__ = ['Err', 'Ok', 'Result', 'collect']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """A successful outcome.

    Examples:
        >>> Ok(2).map(lambda x: x + 1)
        Ok(value=3)
        >>> Ok('ready').unwrap_or('fallback')
        'ready'
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[object], T]) -> T:  # noqa: ARG002
        return self.value

    def expect(self, _msg: str) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the success value."""
        return Ok(f(self.value))

    def map_err[F](self, _f: Callable[[object], F]) -> Ok[T]:
        return self

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Continue with a step that may itself fail."""
        return f(self.value)

    def or_else[F](self, _f: Callable[[object], Ok[T] | Err[F]]) -> Ok[T]:
        return self

    def ok(self) -> Option[T]:
        """The success value as ``Some``."""
        from async_extra.option import Some

        return Some(self.value)

    def err(self) -> Option[object]:
        from async_extra.option import Nothing

        return Nothing


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """A failed outcome carrying an error value.

    Errors captured at the foreign boundary are human-readable strings;
    domain code is free to use richer types.

    Examples:
        >>> Err('timeout').map(lambda x: x + 1)
        Err(error='timeout')
        >>> Err('timeout').unwrap_or_else(len)
        7
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[object]]:
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        return True

    def unwrap(self) -> NoReturn:
        """Fail loudly: there is no success value.

        Raises:
            RuntimeError: Always.
        """
        msg = f'Called unwrap on Err: {self.error!r}'
        raise RuntimeError(msg)

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Build a fallback from the error."""
        return f(self.error)

    def expect(self, msg: str) -> NoReturn:
        """Like ``unwrap``, prefixing the error with ``msg``.

        Raises:
            RuntimeError: Always.
        """
        text = f'{msg}: {self.error!r}'
        raise RuntimeError(text)

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error, leaving the failure in place."""
        return Err(f(self.error))

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        return self

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Attempt recovery from the error."""
        return f(self.error)

    def ok(self) -> Option[object]:
        from async_extra.option import Nothing

        return Nothing

    def err(self) -> Option[E]:
        """The error as ``Some``."""
        from async_extra.option import Some

        return Some(self.error)


type Result[T, E = str] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Gather outcomes in order into one ``Ok(list)``, or the first Err.

    Iteration stops at the first Err, so later items are never pulled.

    Examples:
        >>> collect([Ok(1), Ok(2)])
        Ok(value=[1, 2])
        >>> collect([Ok(1), Err('a'), Err('b')])
        Err(error='a')
    """
    values: list[T] = []
    for outcome in results:
        if isinstance(outcome, Err):
            return outcome
        values.append(outcome.value)
    return Ok(values)
