from __future__ import annotations

import logging
from typing import Any

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from tmdbkit.core import endpoints
from tmdbkit.core.config import Settings
from tmdbkit.core.connectivity import ConnectivityMonitor
from tmdbkit.models.connectivity import ConnectivityState
from tmdbkit.models.endpoint import EndpointRequest
from tmdbkit.models.movies import MovieDetail, PagedMovieList
from tmdbkit.repositories.cache.repository import ResponseCache
from tmdbkit.services.errors import RequestFailedError
from tmdbkit.services.pipeline import RequestPipeline

logger = logging.getLogger(__name__)


class MovieService:
    """The typed movie operations, all routed through ``RequestPipeline``.

    Transient transport failures (``RequestFailedError``) are retried with
    exponential backoff; every attempt is a fresh ``execute`` call. Any other
    failure propagates on the first attempt.
    """

    def __init__(
        self,
        pipeline: RequestPipeline,
        cache: ResponseCache,
        connectivity: ConnectivityMonitor,
        max_retries: int = 2,
        retry_wait: wait_base | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._cache = cache
        self._connectivity = connectivity
        self._max_retries = max(0, max_retries)
        self._retry_wait = retry_wait or wait_exponential(
            multiplier=0.5, min=0.5, max=10
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        pipeline: RequestPipeline,
        cache: ResponseCache,
        connectivity: ConnectivityMonitor,
    ) -> MovieService:
        return cls(
            pipeline, cache, connectivity, max_retries=settings.http_max_retries
        )

    async def fetch_trending_page(self, page: int) -> PagedMovieList:
        return await self._execute(endpoints.trending_movies(page))

    async def fetch_movie_detail(self, movie_id: int) -> MovieDetail:
        return await self._execute(endpoints.movie_details(movie_id))

    async def search_movies(self, query: str, page: int) -> PagedMovieList:
        return await self._execute(endpoints.search_movies(query, page))

    async def clear_cache(self) -> None:
        """Drop every cached response.

        Raises:
            RuntimeError: propagated from the cache on storage failure.
        """
        await self._cache.clear()

    def connectivity(self) -> ConnectivityState:
        return self._connectivity.current_state()

    async def _execute(self, request: EndpointRequest) -> Any:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(RequestFailedError),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=self._retry_wait,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._pipeline.execute(request)
