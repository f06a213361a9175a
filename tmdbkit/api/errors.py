"""FastAPI exception handlers for pipeline errors.

Maps each ``NetworkError`` subclass to an HTTP status with a uniform body::

    {"error": "OfflineAndNoCacheError", "detail": "You are currently offline ..."}

Usage::

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tmdbkit.models.common import ErrorResponse
from tmdbkit.services.errors import (
    DecodingFailedError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    OfflineAndNoCacheError,
    RequestFailedError,
    ServerError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[NetworkError], int] = {
    OfflineAndNoCacheError: 503,
    RequestFailedError: 502,
    InvalidResponseError: 502,
    DecodingFailedError: 502,
    ServerError: 502,
    InvalidURLError: 500,
}


def status_for(exc: NetworkError) -> int:
    if isinstance(exc, ServerError) and exc.status_code == 404:
        return 404
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return 500


async def network_error_handler(request: Request, exc: NetworkError) -> JSONResponse:
    status = status_for(exc)
    logger.warning(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        status,
        type(exc).__name__,
        exc,
    )
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NetworkError, network_error_handler)
