"""Collector registry: named status collectors selectable by glob pattern.

Names are free-form strings, conventionally ``.``-separated
(``db.primary.latency``). Patterns are shell globs matched against the whole
name, so ``db.*`` selects every collector under ``db``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from fnmatch import fnmatchcase

from .engine import run
from .models import Action, Collector, Envelope

logger = logging.getLogger(__name__)


class CollectorRegistry:
    """Holds at most one collector per name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._collectors: dict[str, Collector] = {}

    def register(self, name: str, action: Action) -> Collector:
        """Store ``action`` under ``name``, replacing any previous collector.

        Raises ``ValueError`` for an empty name and ``TypeError`` when
        ``action`` is not callable.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Collector name must be a non-empty string")
        if not callable(action):
            raise TypeError(f"Collector '{name}' action must be callable, got {type(action).__name__}")

        collector = Collector(name=name, action=action)
        with self._lock:
            replaced = name in self._collectors
            self._collectors[name] = collector
        if replaced:
            logger.debug("Replaced collector %s", name)
        return collector

    def collector(self, name: str) -> Callable[[Action], Action]:
        """Decorator form of :meth:`register`."""

        def decorator(fn: Action) -> Action:
            self.register(name, fn)
            return fn

        return decorator

    def list_names(self) -> list[str]:
        with self._lock:
            return sorted(self._collectors)

    def select(self, pattern: str | None = None) -> list[Collector]:
        """Return collectors whose name matches ``pattern``, in registration order.

        No pattern selects everything.
        """
        with self._lock:
            collectors = list(self._collectors.values())
        if not pattern:
            return collectors
        return [c for c in collectors if fnmatchcase(c.name, pattern)]

    def reset(self) -> None:
        with self._lock:
            self._collectors.clear()

    async def execute(self, pattern: str | None = None) -> list[Envelope]:
        """Run every collector matching ``pattern``."""
        return await run(self.select(pattern))

    def __len__(self) -> int:
        with self._lock:
            return len(self._collectors)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._collectors

    def __repr__(self) -> str:
        return f"<CollectorRegistry collectors=[{', '.join(self.list_names())}]>"
