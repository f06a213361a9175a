from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from tmdbkit.api.deps import get_movie_service
from tmdbkit.models.common import MessageResponse
from tmdbkit.services.movies.service import MovieService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["cache"])


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove every cached response",
)
async def delete_cache(
    service: MovieService = Depends(get_movie_service),
) -> MessageResponse:
    """Clear the offline response cache.

    - **200** — cache emptied
    - **500** — storage failure
    """
    try:
        await service.clear_cache()
    except RuntimeError as exc:
        logger.error("DELETE /cache failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="Response cache cleared")
