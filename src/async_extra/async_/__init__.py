"""Async utilities: AsyncResult and its function-first combinators.

Examples:
    >>> from async_extra.async_ import AsyncResult, functions as ar
    >>>
    >>> async def fetch(id: int) -> Result[dict, str]:
    ...     return Ok({'id': id})
    >>>
    >>> async def main():
    ...     ids = ar.traverse(lambda d: d['id'], [AsyncResult(lambda: fetch(1))])
    ...     assert await ids == Ok([1])
"""

from async_extra.async_ import functions
from async_extra.async_.result import AsyncResult

__all__ = ['AsyncResult', 'functions']
