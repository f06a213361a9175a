"""TMDB endpoint descriptors used by ``MovieService``."""

from __future__ import annotations

from tmdbkit.models.endpoint import EndpointRequest
from tmdbkit.models.movies import MovieDetail, PagedMovieList

TRENDING_MOVIES_PATH = "/trending/movie/day"
MOVIE_DETAILS_PATH = "/movie/{movie_id}"
SEARCH_MOVIES_PATH = "/search/movie"


def trending_movies(page: int) -> EndpointRequest:
    return EndpointRequest(
        path=TRENDING_MOVIES_PATH,
        params={"page": page},
        response_model=PagedMovieList,
    )


def movie_details(movie_id: int) -> EndpointRequest:
    return EndpointRequest(
        path=MOVIE_DETAILS_PATH.format(movie_id=movie_id),
        response_model=MovieDetail,
    )


def search_movies(query: str, page: int) -> EndpointRequest:
    return EndpointRequest(
        path=SEARCH_MOVIES_PATH,
        params={"query": query, "page": page},
        response_model=PagedMovieList,
    )
