"""Collector execution engine: concurrent fan-out with per-collector isolation.

Every selected collector runs on the current event loop. A collector that
raises (synchronously or while awaiting) produces a failed Envelope instead
of propagating, so one broken check never hides the others.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from .models import Action, Collector, Envelope, Status

logger = logging.getLogger(__name__)


# ── Settled outcome ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Failed:
    error: BaseException


Settled = Union[Ok, Failed]


async def settle(action: Action) -> Settled:
    """Call ``action`` and await its result if needed, capturing any failure."""
    try:
        value = action()
        if inspect.isawaitable(value):
            value = await value
    except asyncio.CancelledError as e:
        # Propagate only when this task itself is being cancelled
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            raise
        return Failed(e)
    except Exception as e:
        return Failed(e)
    return Ok(value)


def to_envelope(name: str, settled: Settled) -> Envelope:
    if isinstance(settled, Failed):
        return Envelope(name=name, success=False, error=settled.error)

    value = settled.value
    success = value.success if isinstance(value, Status) else True
    return Envelope(name=name, success=bool(success), results=value)


# ── Public API ───────────────────────────────────────────────────────────────


async def invoke(collector: Collector) -> Envelope:
    """Run a single collector and normalize its outcome."""
    settled = await settle(collector.action)
    if isinstance(settled, Failed):
        logger.warning(
            "Collector %s failed: %s: %s",
            collector.name, type(settled.error).__name__, settled.error,
        )
    return to_envelope(collector.name, settled)


async def run(collectors: Iterable[Collector]) -> list[Envelope]:
    """Invoke all collectors concurrently and wait for every one to settle.

    Envelopes are returned in the same order as ``collectors`` regardless of
    completion order.
    """
    collectors = list(collectors)
    for c in collectors:
        if not isinstance(c, Collector):
            raise TypeError(f"Expected Collector, got {type(c).__name__}")

    if not collectors:
        return []

    envelopes = await asyncio.gather(*(invoke(c) for c in collectors))
    logger.debug(
        "Ran %d collectors: %d failed",
        len(envelopes), sum(1 for e in envelopes if not e.success),
    )
    return list(envelopes)
