"""Closed set of failures raised by ``RequestPipeline.execute``.

Every subclass carries a human-readable message suitable for showing to an
end user; the original exception (if any) is kept on ``cause`` and chained
via ``raise ... from``.
"""

from __future__ import annotations

import asyncio

import httpx


class NetworkError(Exception):
    """Base class for all request pipeline failures."""


class InvalidURLError(NetworkError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("The request URL was invalid.")


class RequestFailedError(NetworkError):
    """Transport-level failure while online."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(self._describe(cause))

    @staticmethod
    def _describe(cause: BaseException) -> str:
        if isinstance(
            cause, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)
        ):
            return "The network request timed out."
        if isinstance(cause, (httpx.ConnectError, ConnectionError)):
            return "Could not connect to the server."
        return f"Network request failed: {cause}"


class InvalidResponseError(NetworkError):
    def __init__(self) -> None:
        super().__init__("Received an invalid response from the server.")


class ServerError(NetworkError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"Server returned an error with status code: {status_code}."
        )


class DecodingFailedError(NetworkError):
    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to decode data: {cause}")


class OfflineAndNoCacheError(NetworkError):
    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(
            "You are currently offline and no cached data is available "
            "for this content."
        )
