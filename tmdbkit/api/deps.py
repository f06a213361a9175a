from __future__ import annotations

from fastapi import Request

from tmdbkit.services.movies.service import MovieService


def get_movie_service(request: Request) -> MovieService:
    """FastAPI dependency returning the service built in the app lifespan."""
    return request.app.state.movie_service
