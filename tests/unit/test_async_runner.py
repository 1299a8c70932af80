from __future__ import annotations

import asyncio

import pytest

from schemaforms.async_runner import run_async
from schemaforms.exceptions import AsyncExecutionError


async def _identity(value: int) -> int:
    await asyncio.sleep(0)
    return value


async def _fail() -> None:
    await asyncio.sleep(0)
    raise KeyError("lost")


def test_run_async_from_sync_context() -> None:
    assert run_async(_identity(7)) == 7


def test_run_async_with_running_loop() -> None:
    async def _nested() -> int:
        await asyncio.sleep(0)
        return run_async(_identity(11))

    assert asyncio.run(_nested()) == 11


def test_run_async_propagates_errors() -> None:
    with pytest.raises(KeyError):
        run_async(_fail())


def test_run_async_wraps_errors_inside_running_loop() -> None:
    async def _nested() -> None:
        run_async(_fail())

    with pytest.raises(AsyncExecutionError) as exc_info:
        asyncio.run(_nested())
    assert isinstance(exc_info.value.result, KeyError)
