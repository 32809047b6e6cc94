"""Invoke helpers — call sync or async resource entry points uniformly.

``execute`` can be ``def`` or ``async def``. Coroutine functions are
awaited on the event loop; plain functions run in a worker thread so a
blocking resource never stalls other requests.

Usage::

    from rip._internal.invoke import invoke

    result = await invoke(instance.execute, context)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if needed."""
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)

    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
