from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from tmdbkit.api.deps import get_movie_service
from tmdbkit.models.movies import MovieDetail, PagedMovieList
from tmdbkit.services.movies.service import MovieService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])


# ---------------------------------------------------------------------------
# GET /movies/trending
# ---------------------------------------------------------------------------


@router.get(
    "/trending",
    response_model=PagedMovieList,
    summary="One page of today's trending movies",
)
async def get_trending(
    page: int = Query(1, ge=1),
    service: MovieService = Depends(get_movie_service),
) -> PagedMovieList:
    """Return trending movies, served from the response cache while offline.

    - **200** — page returned (live or cached)
    - **502** — upstream failure (transport, bad status, undecodable body)
    - **503** — offline and this page was never cached
    """
    return await service.fetch_trending_page(page)


# ---------------------------------------------------------------------------
# GET /movies/search
# ---------------------------------------------------------------------------


@router.get(
    "/search",
    response_model=PagedMovieList,
    summary="Search movies by title",
)
async def get_search(
    query: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    service: MovieService = Depends(get_movie_service),
) -> PagedMovieList:
    """Return one page of search results for *query*.

    Offline, only queries that were searched before (same text and page)
    can be answered.
    """
    return await service.search_movies(query, page)


# ---------------------------------------------------------------------------
# GET /movies/{movie_id}
# ---------------------------------------------------------------------------


@router.get(
    "/{movie_id}",
    response_model=MovieDetail,
    summary="Full detail for one movie",
)
async def get_movie(
    movie_id: int,
    service: MovieService = Depends(get_movie_service),
) -> MovieDetail:
    """Return the detail record for *movie_id*.

    - **200** — detail returned
    - **404** — TMDB does not know this id
    - **503** — offline and the detail was never cached
    """
    return await service.fetch_movie_detail(movie_id)
