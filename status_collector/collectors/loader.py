"""Collector file loader: registers built-in checks declared in collectors.yaml.

Example file::

    collectors:
      - name: web.api.health
        type: http
        url: https://api.example.com/health
        expected_status: 200
        timeout_ms: 5000
      - name: web.api.tls
        type: tls
        hostname: api.example.com
        warn_days_before: 14
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .checks import CHECK_TYPES, CheckAction, dns_check, http_check, tcp_check, tls_check
from .registry import CollectorRegistry

logger = logging.getLogger(__name__)


@dataclass
class CheckDef:
    """Definition of a single built-in check from the collectors file."""

    name: str
    type: str  # http | tls | dns | tcp
    url: str = ""
    hostname: str = ""
    port: int = 443
    method: str = "GET"
    expected_status: int = 200
    timeout_ms: int = 10_000
    warn_days_before: int = 14  # for TLS checks


def parse_check(raw: dict[str, Any]) -> CheckDef:
    """Build a CheckDef from one YAML entry, raising ValueError when invalid."""
    name = str(raw.get("name") or "").strip()
    if not name:
        raise ValueError("Collector 'name' is required")

    check_type = raw.get("type", "http")
    if check_type not in CHECK_TYPES:
        raise ValueError(f"Unknown check type for {name}: {check_type}")

    check = CheckDef(
        name=name,
        type=check_type,
        url=raw.get("url", ""),
        hostname=raw.get("hostname", ""),
        port=int(raw.get("port", 443)),
        method=raw.get("method", "GET"),
        expected_status=int(raw.get("expected_status", 200)),
        timeout_ms=int(raw.get("timeout_ms", 10_000)),
        warn_days_before=int(raw.get("warn_days_before", 14)),
    )
    if check.type == "http" and not check.url:
        raise ValueError(f"HTTP check {name} needs a 'url'")
    if check.type != "http" and not check.hostname:
        raise ValueError(f"{check.type.upper()} check {name} needs a 'hostname'")
    return check


def build_action(check: CheckDef) -> CheckAction:
    if check.type == "http":
        return http_check(check.url, check.method, check.expected_status, check.timeout_ms)
    if check.type == "tls":
        return tls_check(check.hostname, check.port, check.warn_days_before, check.timeout_ms)
    if check.type == "dns":
        return dns_check(check.hostname, check.timeout_ms)
    return tcp_check(check.hostname, check.port, check.timeout_ms)


def load_registry(path: Path, registry: CollectorRegistry | None = None) -> CollectorRegistry:
    """Parse ``path`` and register every valid entry into ``registry``."""
    registry = registry if registry is not None else CollectorRegistry()

    if not path.exists():
        logger.warning("Collectors file not found: %s", path)
        return registry

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        logger.error("Failed to parse %s: %s", path, e)
        return registry

    if not isinstance(raw, dict):
        logger.warning("Expected a mapping at the top of %s, got %s", path, type(raw).__name__)
        return registry

    loaded = 0
    for entry in raw.get("collectors") or []:
        try:
            check = parse_check(entry)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Skipping malformed collector entry: %s", e)
            continue
        registry.register(check.name, build_action(check))
        loaded += 1

    logger.info("Loaded %d collectors from %s", loaded, path)
    return registry
