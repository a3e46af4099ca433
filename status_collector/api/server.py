"""FastAPI application exposing a collector registry."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from status_collector.api.routes import build_status_router
from status_collector.collectors.loader import load_registry
from status_collector.collectors.registry import CollectorRegistry
from status_collector.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load collectors from the configured file unless a registry was injected."""
    if getattr(app.state, "registry", None) is None:
        collectors_path = Path(settings.collectors_file)
        if not collectors_path.is_absolute():
            collectors_path = Path.cwd() / collectors_path
        app.state.registry = load_registry(collectors_path)
    logger.info("Serving %r", app.state.registry)

    yield


def create_app(
    registry: CollectorRegistry | None = None,
    base_path: str | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Status Collector",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry = registry

    app.include_router(build_status_router(base_path or settings.base_path))

    return app


app = create_app()
