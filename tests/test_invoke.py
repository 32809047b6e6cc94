"""Tests for rip._internal.invoke — sync and async handlers."""

import threading

from rip._internal.invoke import invoke


class TestInvoke:
    async def test_async_handler_runs_on_loop(self) -> None:
        async def handler(value: int) -> int:
            return value * 2

        assert await invoke(handler, 21) == 42

    async def test_sync_handler_runs_in_thread(self) -> None:
        main_thread = threading.get_ident()

        def handler(value: int, *, offset: int = 0) -> tuple[int, int]:
            return value + offset, threading.get_ident()

        result, thread_id = await invoke(handler, 40, offset=2)
        assert result == 42
        assert thread_id != main_thread

    async def test_sync_handler_returning_awaitable(self) -> None:
        async def inner() -> str:
            return "done"

        def handler() -> object:
            return inner()

        assert await invoke(handler) == "done"
