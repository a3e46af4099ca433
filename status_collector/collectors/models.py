"""Collector data models: registered collectors, declared statuses, envelopes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

Action = Callable[[], Any]


@dataclass(frozen=True)
class Collector:
    """A named zero-argument action registered in a CollectorRegistry."""

    name: str
    action: Action


@dataclass(frozen=True)
class Status:
    """Structured outcome a collector returns to declare success explicitly.

    Any value that is not a ``Status`` is treated as a plain payload and
    counts as a success.
    """

    success: bool
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, **self.data}


@dataclass(frozen=True)
class Envelope:
    """Normalized result of one collector invocation."""

    name: str
    success: bool
    results: Any = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "success": self.success}
        if self.failed:
            out["error"] = self.error
        else:
            out["results"] = self.results
        return out
