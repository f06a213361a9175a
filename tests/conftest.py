from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tmdbkit.core.config import settings
from tmdbkit.core.connectivity import ConnectivityMonitor, ManualPathMonitor
from tmdbkit.main import app
from tmdbkit.repositories.cache.repository import ResponseCache
from tmdbkit.services.pipeline import RequestPipeline
from tmdbkit.workers.transport import TransportResponse

BASE_URL = "https://api.themoviedb.org/3"

TRENDING_BODY = (
    b'{"page":1,"results":[{"id":1,"title":"A","overview":"o",'
    b'"poster_path":null,"release_date":null,"vote_average":null,'
    b'"vote_count":null}],"total_pages":3,"total_results":50}'
)

DETAIL_BODY = (
    b'{"id":123,"title":"Mock Detail Movie","overview":"Detailed overview.",'
    b'"poster_path":"/dp.jpg","backdrop_path":"/db.jpg",'
    b'"release_date":"2023-05-15","runtime":100,"tagline":"A tagline",'
    b'"vote_average":8.5,"vote_count":500,'
    b'"genres":[{"id":1,"name":"Action"}],"production_companies":[],'
    b'"status":"Released"}'
)


class FakeTransport:
    """``HttpTransport`` double that records every call."""

    def __init__(
        self,
        response: object = None,
        error: BaseException | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, str]] = []

    @classmethod
    def returning(cls, status: int, body: bytes) -> FakeTransport:
        return cls(response=TransportResponse(status_code=status, body=body))

    async def send(self, method: str, url: str) -> TransportResponse:
        self.calls.append((method, url))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def path_monitor() -> ManualPathMonitor:
    return ManualPathMonitor()


@pytest.fixture
def connectivity(path_monitor) -> ConnectivityMonitor:
    return ConnectivityMonitor(path_monitor)


@pytest.fixture
def cache(tmp_path) -> ResponseCache:
    return ResponseCache(tmp_path)


@pytest.fixture
def make_pipeline(cache, connectivity):
    def _make(transport, api_key: str = "test-key") -> RequestPipeline:
        return RequestPipeline(
            transport, cache, connectivity, base_url=BASE_URL, api_key=api_key
        )

    return _make


@pytest.fixture
def client(tmp_path, monkeypatch):
    """TestClient running the real lifespan against a temporary cache.

    The reachability probe is disabled so connectivity stays online until a
    test pushes a status through ``app.state.path_monitor``.
    """
    monkeypatch.setattr(settings, "cache_dir", tmp_path)
    monkeypatch.setattr(settings, "connectivity_probe_enabled", False)
    monkeypatch.setattr(settings, "force_offline", False)
    monkeypatch.setattr(settings, "tmdb_api_key", "test-key")
    monkeypatch.setattr(settings, "tmdb_base_url", BASE_URL)
    monkeypatch.setattr(settings, "http_max_retries", 0)
    with TestClient(app) as c:
        yield c
