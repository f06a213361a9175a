from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from tmdbkit.core.config import Settings
from tmdbkit.core.connectivity import ConnectivityMonitor
from tmdbkit.models.endpoint import EndpointRequest
from tmdbkit.repositories.cache.repository import ResponseCache, cache_key
from tmdbkit.services.errors import (
    DecodingFailedError,
    InvalidResponseError,
    InvalidURLError,
    OfflineAndNoCacheError,
    RequestFailedError,
    ServerError,
)
from tmdbkit.workers.transport import HttpTransport, TransportResponse

logger = logging.getLogger(__name__)


class RequestPipeline:
    """Single entry point for every typed TMDB call.

    Each ``execute`` is one independent attempt:

    - offline: serve the cached body for the request, or fail with
      ``OfflineAndNoCacheError``;
    - online: GET the live URL, check the status, decode, then cache the
      raw body.

    Retrying and pagination belong to the caller.
    """

    def __init__(
        self,
        transport: HttpTransport,
        cache: ResponseCache,
        connectivity: ConnectivityMonitor,
        base_url: str,
        api_key: str = "",
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._connectivity = connectivity
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: HttpTransport,
        cache: ResponseCache,
        connectivity: ConnectivityMonitor,
    ) -> RequestPipeline:
        return cls(
            transport,
            cache,
            connectivity,
            base_url=settings.tmdb_base_url,
            api_key=settings.tmdb_api_key,
        )

    async def execute(self, request: EndpointRequest) -> Any:
        """Resolve *request* into an instance of ``request.response_model``.

        Raises:
            OfflineAndNoCacheError: offline and no decodable cached body.
            InvalidURLError: the live URL could not be built.
            RequestFailedError: the transport raised.
            InvalidResponseError: the transport returned something malformed.
            ServerError: status outside 200-299.
            DecodingFailedError: the live body does not fit the model.
        """
        adapter = TypeAdapter(request.response_model)

        if not self._connectivity.current_state().is_online:
            try:
                identity, key = _identify(request)
            except UnicodeEncodeError as exc:
                logger.warning("No cache key for %s: %s", request.path, exc)
                raise OfflineAndNoCacheError(request.path) from exc
            return await self._from_cache(identity, adapter, key)

        url = self._build_url(request)
        try:
            identity, key = _identify(request)
        except UnicodeEncodeError as exc:
            raise InvalidURLError(request.path) from exc

        try:
            response = await self._transport.send("GET", url)
        except Exception as exc:
            logger.warning("Request for %s failed: %s", identity, exc)
            raise RequestFailedError(exc) from exc

        if not _is_well_formed(response):
            raise InvalidResponseError()

        if not 200 <= response.status_code <= 299:
            snippet = response.body[:500].decode("utf-8", errors="replace")
            logger.warning(
                "Server error %d for %s: %s",
                response.status_code,
                identity,
                snippet.replace("\n", " "),
            )
            raise ServerError(response.status_code)

        try:
            result = adapter.validate_json(response.body)
        except ValidationError as exc:
            logger.warning("Decoding %s failed: %s", identity, exc)
            raise DecodingFailedError(exc) from exc

        await self._cache.put(key, response.body)
        logger.info("Fetched %s from network and cached it", identity)
        return result

    async def _from_cache(self, identity: str, adapter: TypeAdapter, key: str) -> Any:
        logger.info("Offline; looking up cached response for %s", identity)
        data = await self._cache.get(key)
        if data is None:
            logger.info("No cached response for %s", identity)
            raise OfflineAndNoCacheError(identity)
        try:
            result = adapter.validate_json(data)
        except ValidationError as exc:
            logger.warning("Cached response for %s is unusable: %s", identity, exc)
            raise OfflineAndNoCacheError(identity) from exc
        logger.info("Served %s from cache", identity)
        return result

    def _build_url(self, request: EndpointRequest) -> str:
        raw = f"{self._base_url}{request.path}"
        params = request.query_params()
        if self._api_key:
            params["api_key"] = self._api_key
        try:
            url = httpx.URL(raw, params=params)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise InvalidURLError(raw) from exc
        if url.scheme not in {"http", "https"} or not url.host:
            raise InvalidURLError(raw)
        return str(url)


def _is_well_formed(response: object) -> bool:
    if not isinstance(response, TransportResponse):
        return False
    status = response.status_code
    if isinstance(status, bool) or not isinstance(status, int):
        return False
    return 100 <= status <= 599 and isinstance(response.body, bytes)


def _identify(request: EndpointRequest) -> tuple[str, str]:
    identity = request.identity
    return identity, cache_key(identity)
