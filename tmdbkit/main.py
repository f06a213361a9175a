from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI

from tmdbkit.api.deps import get_movie_service
from tmdbkit.api.errors import register_exception_handlers
from tmdbkit.api.router import router
from tmdbkit.core.config import Settings, settings
from tmdbkit.core.connectivity import (
    ConnectivityMonitor,
    ManualPathMonitor,
    PathMonitor,
    ProbePathMonitor,
)
from tmdbkit.models.common import HealthResponse
from tmdbkit.models.connectivity import PathStatus
from tmdbkit.repositories.cache.repository import ResponseCache
from tmdbkit.services.movies.service import MovieService
from tmdbkit.services.pipeline import RequestPipeline
from tmdbkit.workers.transport import HttpxTransport

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Attach a stderr handler to the ``tmdbkit`` logger at ``LOG_LEVEL``.

    The handler hangs off the package logger rather than the root logger, and
    propagation is off, so records are printed once whatever handlers the
    ASGI server has already installed on root.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    pkg_log = logging.getLogger("tmdbkit")
    pkg_log.setLevel(level)
    if not pkg_log.handlers:
        pkg_log.addHandler(handler)
    pkg_log.propagate = False


_configure_logging()


def _build_path_monitor(settings: Settings) -> PathMonitor:
    if settings.force_offline:
        logger.warning("FORCE_OFFLINE is set; serving cached responses only.")
        return ManualPathMonitor(initial=PathStatus.UNSATISFIED)
    if not settings.connectivity_probe_enabled:
        return ManualPathMonitor()
    return ProbePathMonitor(
        settings.connectivity_probe_host,
        settings.connectivity_probe_port,
        interval=settings.connectivity_probe_interval,
        timeout=settings.connectivity_probe_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # ── Startup ──────────────────────────────────────────────────────
    if not settings.tmdb_api_key:
        logger.warning(
            "TMDB_API_KEY is not set; live requests will fail with HTTP 401."
        )

    cache = ResponseCache.from_settings(settings)
    cache.ensure_namespace()
    path_monitor = _build_path_monitor(settings)
    connectivity = ConnectivityMonitor(path_monitor)
    transport = HttpxTransport.from_settings(settings)
    pipeline = RequestPipeline.from_settings(settings, transport, cache, connectivity)
    app.state.movie_service = MovieService.from_settings(
        settings, pipeline, cache, connectivity
    )
    app.state.path_monitor = path_monitor
    await path_monitor.start()
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    await path_monitor.stop()
    await transport.aclose()


app = FastAPI(
    title="tmdbkit",
    description="Offline-aware TMDB movie browser API.",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(router)


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health(
    service: MovieService = Depends(get_movie_service),
) -> HealthResponse:
    state = service.connectivity()
    return HealthResponse(
        status="ok", online=state.is_online, connectivity=state.detail.value
    )
