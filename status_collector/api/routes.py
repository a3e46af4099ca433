"""Status routes over the collector registry.

Endpoints (base path defaults to /status):
  GET  /status-list            sorted collector names
  GET  /status                 run every collector
  GET  /status/{path}          run collectors matching "<path with / as .>*"
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from status_collector.collectors.engine import run
from status_collector.collectors.registry import CollectorRegistry
from status_collector.config import settings
from status_collector.utils.serialization import serialize_envelope

logger = logging.getLogger(__name__)


def path_to_pattern(path: str) -> str:
    """Map a URL path suffix like ``db/primary`` to the glob ``db.primary*``."""
    segments = [s for s in path.split("/") if s]
    return ".".join(segments) + "*"


def _registry(request: Request) -> CollectorRegistry:
    return request.app.state.registry


def build_status_router(base_path: str = "/status", failure_status_code: int | None = None) -> APIRouter:
    """Create the list and run endpoints mounted under ``base_path``."""
    base_path = "/" + base_path.strip("/")
    router = APIRouter(tags=["status"])

    @router.get(f"{base_path}-list")
    def list_collectors(request: Request) -> list[str]:
        return _registry(request).list_names()

    async def _run_matching(request: Request, path: str) -> JSONResponse:
        registry = _registry(request)
        pattern = path_to_pattern(path)
        envelopes = await run(registry.select(pattern))

        failed = [e.name for e in envelopes if not e.success]
        status_code = 200
        if failed:
            status_code = failure_status_code or settings.failure_status_code
            logger.info("Status %s: %d/%d collectors failed: %s",
                        pattern, len(failed), len(envelopes), ", ".join(failed))

        return JSONResponse(
            status_code=status_code,
            content=[serialize_envelope(e) for e in envelopes],
        )

    @router.get(base_path)
    async def run_all(request: Request) -> JSONResponse:
        return await _run_matching(request, "")

    @router.get(base_path + "/{path:path}")
    async def run_path(path: str, request: Request) -> JSONResponse:
        return await _run_matching(request, path)

    return router
