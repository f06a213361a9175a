from fastapi import APIRouter

from tmdbkit.api.cache.routes import router as cache_router
from tmdbkit.api.movies.routes import router as movies_router

router = APIRouter()
router.include_router(movies_router)
router.include_router(cache_router)
