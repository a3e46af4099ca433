"""Wrappers for collector actions that need a time bound or a worker thread."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from .models import Action


def with_timeout(action: Action, seconds: float) -> Callable[[], Awaitable[Any]]:
    """Fail with ``TimeoutError`` if ``action`` takes longer than ``seconds``."""

    async def _bounded() -> Any:
        async def _call() -> Any:
            value = action()
            if inspect.isawaitable(value):
                value = await value
            return value

        try:
            return await asyncio.wait_for(_call(), timeout=seconds)
        except asyncio.TimeoutError:
            raise TimeoutError(f"Collector action timed out after {seconds}s") from None

    return _bounded


def in_thread(func: Callable[[], Any]) -> Callable[[], Awaitable[Any]]:
    """Run a blocking callable in the default executor."""

    async def _threaded() -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    return _threaded
