"""Status collector: named health probes run concurrently into one report."""

from status_collector.collectors import (
    Collector,
    CollectorRegistry,
    Envelope,
    Status,
    in_thread,
    invoke,
    load_registry,
    run,
    with_timeout,
)

__version__ = "0.1.0"

__all__ = [
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
