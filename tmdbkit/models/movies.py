"""Typed TMDB payloads.

Field names follow the wire's snake_case keys. Unknown keys are ignored so
that additive API changes never turn into decoding failures.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tmdbkit.core.config import settings


class ImageSize(str, Enum):
    THUMBNAIL = "w92"
    SMALL = "w200"
    MEDIUM = "w500"
    ORIGINAL = "original"


def image_url(
    path: str | None, size: ImageSize, base_url: str | None = None
) -> str | None:
    """Absolute image URL for a TMDB image ``path``, or ``None`` without one.

    ``base_url`` defaults to ``TMDB_IMAGE_BASE_URL``. The model properties below
    rely on that default, since decoded payloads carry no configuration.
    """
    if not path:
        return None
    if base_url is None:
        base_url = settings.tmdb_image_base_url
    return f"{base_url}{size.value}{path}"


class _TmdbModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Movie(_TmdbModel):
    id: int
    title: str
    overview: str
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None

    @property
    def thumbnail_poster_url(self) -> str | None:
        return image_url(self.poster_path, ImageSize.THUMBNAIL)

    @property
    def poster_url(self) -> str | None:
        return image_url(self.poster_path, ImageSize.SMALL)

    @property
    def detail_poster_url(self) -> str | None:
        return image_url(self.poster_path, ImageSize.MEDIUM)


class PagedMovieList(_TmdbModel):
    """One page of ``/trending`` or ``/search`` results."""

    page: int
    results: list[Movie]
    total_pages: int
    total_results: int


class Genre(_TmdbModel):
    id: int
    name: str


class ProductionCompany(_TmdbModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None


class MovieDetail(_TmdbModel):
    id: int
    title: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None  # minutes
    tagline: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: Optional[list[Genre]] = None
    production_companies: Optional[list[ProductionCompany]] = None
    status: Optional[str] = None

    @property
    def poster_url(self) -> str | None:
        return image_url(self.poster_path, ImageSize.SMALL)

    @property
    def detail_poster_url(self) -> str | None:
        return image_url(self.poster_path, ImageSize.MEDIUM)

    @property
    def backdrop_thumbnail_url(self) -> str | None:
        return image_url(self.backdrop_path, ImageSize.SMALL)

    @property
    def backdrop_url(self) -> str | None:
        return image_url(self.backdrop_path, ImageSize.ORIGINAL)

    @property
    def formatted_runtime(self) -> str | None:
        if self.runtime is None:
            return None
        hours, minutes = divmod(self.runtime, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    @property
    def formatted_vote_average(self) -> str:
        if self.vote_average is None:
            return "N/A"
        return f"{self.vote_average:.1f}"
