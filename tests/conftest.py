"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from status_collector.collectors.models import Status
from status_collector.collectors.registry import CollectorRegistry


@pytest.fixture
def registry() -> CollectorRegistry:
    """A fresh, empty registry per test."""
    return CollectorRegistry()


@pytest.fixture
def populated(registry: CollectorRegistry) -> CollectorRegistry:
    """Registry with a mix of sync, async, failing and declared-failure collectors."""

    async def db_latency():
        return Status(True, {"latency_ms": 3})

    def db_replica():
        return Status(False, {"message": "replica lagging"})

    def cache_ping():
        return "PONG"

    def queue_depth():
        raise RuntimeError("broker unreachable")

    registry.register("db.primary.latency", db_latency)
    registry.register("db.replica", db_replica)
    registry.register("cache.ping", cache_ping)
    registry.register("queue.depth", queue_depth)
    return registry


@pytest.fixture
def collectors_yaml(tmp_path: Path) -> Path:
    """Create a minimal collectors.yaml for testing."""
    data = {
        "collectors": [
            {
                "name": "web.api.health",
                "type": "http",
                "url": "https://api.test.example.com/health",
                "expected_status": 200,
                "timeout_ms": 5000,
            },
            {
                "name": "web.api.tls",
                "type": "tls",
                "hostname": "test.example.com",
                "warn_days_before": 14,
            },
            {"name": "infra.dns", "type": "dns", "hostname": "localhost"},
            {"name": "infra.db", "type": "tcp", "hostname": "localhost", "port": 5432},
        ]
    }
    yml_path = tmp_path / "collectors.yaml"
    yml_path.write_text(yaml.dump(data))
    return yml_path
