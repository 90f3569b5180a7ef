"""Tests for the foreign conversion boundary: from_async, from_task, from_unit_task."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from async_extra import AsyncResult, Deferred, Err, Ok, describe_failure, get_config, init
from async_extra import functions as ar
from async_extra._logging import add_log_hook
from async_extra.errors import CANCELLED_MESSAGE


async def _hello() -> str:
    await asyncio.sleep(0)
    return 'Hello'


async def _boom() -> str:
    await asyncio.sleep(0)
    raise ValueError('boom')


class TestFromTask:
    """Tests for from_task."""

    async def test_completed_task_becomes_ok(self) -> None:
        result = await ar.from_task(lambda: asyncio.ensure_future(_hello()))
        assert result == Ok('Hello')

    async def test_coroutine_producer_becomes_ok(self) -> None:
        assert await AsyncResult.from_task(_hello) == Ok('Hello')

    async def test_failing_task_becomes_err_with_message(self) -> None:
        result = await AsyncResult.from_task(lambda: asyncio.ensure_future(_boom()))
        assert result == Err('boom')

    async def test_producer_raising_synchronously_becomes_err(self) -> None:
        def producer() -> Any:
            raise RuntimeError('could not start')

        assert await AsyncResult.from_task(producer) == Err('could not start')

    async def test_cancelled_task_becomes_err(self) -> None:
        task = asyncio.ensure_future(asyncio.sleep(10))
        task.cancel()

        result = await AsyncResult.from_task(lambda: task)

        assert isinstance(result, Err)
        assert result.error == CANCELLED_MESSAGE

    async def test_cancelled_future_with_message_keeps_message(self) -> None:
        fut = asyncio.get_running_loop().create_future()
        fut.cancel('shutting down')

        result = await AsyncResult.from_task(lambda: fut)

        assert result == Err('shutting down')

    async def test_outer_cancellation_is_not_captured(self) -> None:
        started = asyncio.Event()

        async def slow() -> str:
            started.set()
            await asyncio.sleep(10)
            return 'never'

        outer = asyncio.ensure_future(AsyncResult.from_task(slow).run())
        await started.wait()
        outer.cancel()

        with pytest.raises(asyncio.CancelledError):
            await outer

    async def test_keyboard_interrupt_is_not_captured(self) -> None:
        async def interrupted() -> str:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            await AsyncResult.from_task(interrupted)


class TestLaziness:
    """The producer runs only when the AsyncResult is executed."""

    async def test_construction_does_not_invoke_producer(self, calls: list[str]) -> None:
        def producer() -> asyncio.Future[str]:
            calls.append('started')
            return asyncio.ensure_future(_hello())

        described = AsyncResult.from_task(producer)
        assert calls == []

        assert await described == Ok('Hello')
        assert calls == ['started']

    async def test_producer_invoked_once_per_execution(self, calls: list[str]) -> None:
        def producer() -> Any:
            calls.append('started')
            return _hello()

        described = ar.from_task(producer).map(str.upper)
        assert await described == Ok('HELLO')
        assert await described == Ok('HELLO')
        assert calls == ['started', 'started']

    async def test_skipped_by_short_circuit(self, calls: list[str]) -> None:
        def producer() -> Any:
            calls.append('started')
            return _hello()

        result = await AsyncResult.from_err('earlier').bind(lambda _: AsyncResult.from_task(producer))
        assert result == Err('earlier')
        assert calls == []


class TestFromUnitTask:
    """Tests for from_unit_task."""

    async def test_completed_task_becomes_ok_none(self) -> None:
        assert await ar.from_unit_task(lambda: asyncio.sleep(0)) == Ok(None)

    async def test_discards_value(self) -> None:
        assert await AsyncResult.from_unit_task(_hello) == Ok(None)

    async def test_cancelled_task_becomes_err(self) -> None:
        task = asyncio.ensure_future(asyncio.sleep(1))
        task.cancel()

        assert await AsyncResult.from_unit_task(lambda: task) == Err(CANCELLED_MESSAGE)


class TestFromAsync:
    """Tests for from_async."""

    async def test_deferred_becomes_ok(self) -> None:
        assert await ar.from_async(Deferred.singleton(3)) == Ok(3)

    async def test_async_callable_becomes_ok(self) -> None:
        assert await AsyncResult.from_async(_hello) == Ok('Hello')

    async def test_fault_becomes_err(self) -> None:
        assert await AsyncResult.from_async(Deferred(_boom)) == Err('boom')

    async def test_rerunnable(self, calls: list[str]) -> None:
        async def work() -> int:
            calls.append('ran')
            return len(calls)

        described = AsyncResult.from_async(work)
        assert await described == Ok(1)
        assert await described == Ok(2)


class TestDescribeFailure:
    """Tests for describe_failure."""

    def test_uses_exception_text(self) -> None:
        assert describe_failure(ValueError('boom')) == 'boom'

    def test_falls_back_to_type_name(self) -> None:
        assert describe_failure(KeyError()) == 'KeyError'

    def test_cancelled_is_non_empty(self) -> None:
        assert describe_failure(asyncio.CancelledError()) == CANCELLED_MESSAGE

    def test_exception_group_lists_children(self) -> None:
        group = ExceptionGroup('One or more errors occurred.', [ValueError('boom')])
        assert describe_failure(group) == 'One or more errors occurred. (boom)'

    def test_exception_group_without_message_uses_type_name(self) -> None:
        group = ExceptionGroup('', [ValueError('a'), OSError('b')])
        assert describe_failure(group) == 'ExceptionGroup (a; b)'


class TestBoundaryLogging:
    """Captured failures are logged only when logging is enabled."""

    async def test_logs_captured_failure_when_enabled(self) -> None:
        received: list[dict[str, Any]] = []
        init(log_level='DEBUG')
        add_log_hook(received.append)

        await AsyncResult.from_task(_boom)

        events = [e for e in received if e.get('event') == 'foreign_failure_captured']
        assert len(events) == 1
        assert events[0]['operation'] == 'from_task'
        assert events[0]['exc_type'] == 'ValueError'
        assert events[0]['description'] == 'boom'

    async def test_silent_by_default(self) -> None:
        received: list[dict[str, Any]] = []
        add_log_hook(received.append)

        assert await AsyncResult.from_task(_boom) == Err('boom')

        assert [e for e in received if e.get('event') == 'foreign_failure_captured'] == []

    async def test_lazy_config_keeps_application_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        monkeypatch.setenv('ASYNC_EXTRA_LOG_LEVEL', 'INFO')
        try:
            assert await AsyncResult.from_task(_boom) == Err('boom')
            assert get_config().log_level == 'INFO'
            assert handler in root.handlers
        finally:
            root.removeHandler(handler)
