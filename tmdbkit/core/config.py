from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # TMDB
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str = "https://image.tmdb.org/t/p/"

    # Response cache
    cache_dir: Path = Path.home() / ".cache" / "tmdbkit"

    # HTTP transport
    http_timeout: float = 12.0
    http_max_retries: int = 2
    http_verify_ssl: bool = True  # set False behind corporate SSL-inspection proxies

    # Connectivity
    connectivity_probe_enabled: bool = True
    connectivity_probe_host: str = "api.themoviedb.org"
    connectivity_probe_port: int = 443
    connectivity_probe_interval: float = 10.0
    connectivity_probe_timeout: float = 3.0
    force_offline: bool = False  # serve cached responses only

    # Logging
    log_level: str = "INFO"


settings = Settings()
