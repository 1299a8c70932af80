"""Bridge between synchronous callers and the async submission path."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from schemaforms.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Coroutine


def _run_on_worker_loop[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion on a private loop in a worker thread.

    Args:
        coro: The coroutine to run.

    Raises:
        AsyncExecutionError: If the coroutine raises an exception.

    Returns:
        The result of the coroutine.
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="schemaforms-async") as executor:
        future = executor.submit(asyncio.run, coro)
        try:
            return future.result()
        except Exception as exc:
            raise AsyncExecutionError(result=exc) from exc


def run_async[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine such as `FormSession.on_submit` from sync or async callers.

    Without a running loop the coroutine runs on a fresh loop and its errors
    propagate unchanged. Inside a running loop it runs on a worker thread so the
    caller does not need to await, and errors arrive as `AsyncExecutionError`.

    Args:
        coro: The coroutine to run.

    Returns:
        The result of the coroutine.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    return _run_on_worker_loop(coro)
