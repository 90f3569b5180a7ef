"""Decorators: @async_result do-notation."""

from async_extra.decorators.do import async_result, do_async_result

__all__ = [
    'async_result',
    'do_async_result',
]
