"""HTTP transport boundary.

The request pipeline depends only on ``HttpTransport``: a single GET that
returns the status code and raw body bytes, or raises. ``HttpxTransport`` is
the production implementation; tests substitute their own.

``httpx.AsyncClient`` is meant to be long-lived and reused, so one transport
owns one client for the life of the application; see ``aclose``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from tmdbkit.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes


class HttpTransport(Protocol):
    async def send(self, method: str, url: str) -> TransportResponse:
        """Perform one request. Raises on transport failure."""
        ...


class HttpxTransport:
    """``HttpTransport`` backed by a shared ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpxTransport:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
            verify=settings.http_verify_ssl,
            headers={"User-Agent": "tmdbkit/1.0", "Accept": "application/json"},
        )
        return cls(client)

    async def send(self, method: str, url: str) -> TransportResponse:
        response = await self._client.request(method, url)
        return TransportResponse(
            status_code=response.status_code, body=response.content
        )

    async def aclose(self) -> None:
        """Close the underlying client gracefully."""
        if not self._client.is_closed:
            await self._client.aclose()
            logger.info("HTTP client closed.")
