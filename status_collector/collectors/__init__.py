"""Collectors: registry, execution engine, built-in checks, file loader."""

from .actions import in_thread, with_timeout
from .engine import invoke, run
from .loader import CheckDef, load_registry
from .models import Collector, Envelope, Status
from .registry import CollectorRegistry

__all__ = [
    "CheckDef",
    "Collector",
    "CollectorRegistry",
    "Envelope",
    "Status",
    "in_thread",
    "invoke",
    "load_registry",
    "run",
    "with_timeout",
]
