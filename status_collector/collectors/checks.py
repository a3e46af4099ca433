"""Built-in network checks: HTTP(S), TLS cert expiry, DNS resolve, TCP connect.

Each factory returns a zero-argument async action suitable for
``CollectorRegistry.register``. The action resolves to a ``Status``; network
errors and timeouts are raised and end up in the envelope's ``error``.
"""

from __future__ import annotations

import asyncio
import ssl
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

import httpx

from .models import Status

CheckAction = Callable[[], Awaitable[Status]]

# Responses slower than this are still successful but flagged as degraded
DEGRADED_LATENCY_MS = 3000


def _elapsed_ms(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 1)


# ── HTTP ─────────────────────────────────────────────────────────────────────


def http_check(
    url: str,
    method: str = "GET",
    expected_status: int = 200,
    timeout_ms: int = 10_000,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CheckAction:
    """HTTP(S) check on status code and latency."""

    async def _check() -> Status:
        t0 = time.perf_counter()
        async with httpx.AsyncClient(
            timeout=timeout_ms / 1000, follow_redirects=True, transport=transport,
        ) as client:
            resp = await client.request(method, url)
        latency = _elapsed_ms(t0)

        if resp.status_code == expected_status:
            return Status(True, {
                "status_code": resp.status_code,
                "latency_ms": latency,
                "degraded": latency > DEGRADED_LATENCY_MS,
                "message": f"{resp.status_code} OK",
            })
        return Status(False, {
            "status_code": resp.status_code,
            "latency_ms": latency,
            "message": f"Expected {expected_status}, got {resp.status_code}",
        })

    return _check


# ── TLS ──────────────────────────────────────────────────────────────────────


def classify_expiry(
    not_after: str, warn_days_before: int = 14, now: datetime | None = None,
) -> Status:
    """Turn a certificate ``notAfter`` field into a Status."""
    expiry = datetime.strptime(not_after, "%b %d %H:%M:%S %Y %Z").replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    days_left = (expiry - now).days

    if days_left < 0:
        msg = f"Certificate EXPIRED {-days_left} days ago"
    elif days_left < warn_days_before:
        msg = f"Certificate expires in {days_left} days (warn < {warn_days_before})"
    else:
        msg = f"Certificate valid, expires in {days_left} days"

    return Status(days_left >= 0, {
        "days_left": days_left,
        "expiry": expiry.isoformat(),
        "expiring": 0 <= days_left < warn_days_before,
        "message": msg,
    })


def tls_check(
    hostname: str,
    port: int = 443,
    warn_days_before: int = 14,
    timeout_ms: int = 10_000,
) -> CheckAction:
    """Check TLS certificate expiry."""

    async def _check() -> Status:
        ctx = ssl.create_default_context()
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port, ssl=ctx, server_hostname=hostname),
            timeout=timeout_ms / 1000,
        )
        try:
            cert = writer.get_extra_info("peercert")
        finally:
            writer.close()
            await writer.wait_closed()

        if not cert:
            return Status(False, {"message": "No certificate returned"})
        return classify_expiry(cert.get("notAfter", ""), warn_days_before)

    return _check


# ── DNS / TCP ────────────────────────────────────────────────────────────────


def dns_check(hostname: str, timeout_ms: int = 5_000) -> CheckAction:
    """DNS resolution check."""

    async def _check() -> Status:
        t0 = time.perf_counter()
        loop = asyncio.get_running_loop()
        addrs = await asyncio.wait_for(
            loop.getaddrinfo(hostname, None), timeout=timeout_ms / 1000,
        )
        ips = sorted({a[4][0] for a in addrs})
        return Status(bool(ips), {
            "ips": ips,
            "latency_ms": _elapsed_ms(t0),
            "message": f"Resolved to {', '.join(ips[:3])}",
        })

    return _check


def tcp_check(hostname: str, port: int = 443, timeout_ms: int = 5_000) -> CheckAction:
    """Raw TCP port connectivity check."""

    async def _check() -> Status:
        t0 = time.perf_counter()
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port), timeout=timeout_ms / 1000,
        )
        writer.close()
        await writer.wait_closed()
        return Status(True, {"latency_ms": _elapsed_ms(t0), "message": f"Port {port} open"})

    return _check


CHECK_TYPES = ("http", "tls", "dns", "tcp")
