"""Some/Nothing: optional values accepted by ``from_option`` and returned by ``ok()``/``err()``."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

if TYPE_CHECKING:
    from async_extra.result import Err, Ok

__all__ = ['Nothing', 'NothingType', 'Option', 'Some']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """A present value. ``Some(None)`` is present too.

    Examples:
        >>> Some(3).map(str)
        Some(value='3')
        >>> Some(3).ok_or('missing')
        Ok(value=3)
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        return True

    def is_none(self) -> TypeIs[NothingType]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        return Some(f(self.value))

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        return f(self.value)

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Promote to a successful Result."""
        from async_extra.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """An absent value. Use the ``Nothing`` singleton."""

    def is_some(self) -> TypeIs[Some[object]]:
        return False

    def is_none(self) -> TypeIs[NothingType]:
        return True

    def unwrap(self) -> NoReturn:
        """Raise RuntimeError: there is nothing to unwrap."""
        msg = 'Called unwrap on Nothing'
        raise RuntimeError(msg)

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        return self

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        return self

    def ok_or[E](self, err: E) -> Err[E]:
        """Promote absence to ``Err(err)``."""
        from async_extra.result import Err

        return Err(err)


Nothing: NothingType = NothingType()

type Option[T] = Some[T] | NothingType
