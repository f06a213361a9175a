from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path

from tmdbkit.core.namespaces import NamespaceNames
from tmdbkit.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

CACHE_KEY_VERSION = "v1"


def cache_key(identity: str) -> str:
    """Derive the filesystem-safe cache key for a request identity.

    Format: ``v1_`` followed by the first 32 hex digits (128 bits) of the
    SHA-256 digest of the UTF-8 identity. Changing the format requires a new
    version prefix so that stale entries are simply never read.
    """
    digest = hashlib.sha256(identity.encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_VERSION}_{digest[:32]}"


class ResponseCache(BaseRepository):
    """Raw response bodies stored as one file per cache key.

    The cache is advisory: write failures are logged and swallowed, and
    read failures look the same as a miss.
    """

    NAMESPACE = NamespaceNames.RESPONSES

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    async def put(self, key: str, data: bytes) -> None:
        """Write *data* under *key*, replacing any previous entry.

        The bytes land in a temporary file that is renamed over the entry,
        so concurrent writers for one key end up last-writer-wins and a
        reader never observes a partial file.
        """
        try:
            await asyncio.to_thread(self._write, key, data)
        except OSError as exc:
            logger.warning("Failed to cache response for key=%s: %s", key, exc)
            return
        logger.debug("Cached %d bytes for key=%s", len(data), key)

    def _write(self, key: str, data: bytes) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp, self._path(key))
        except OSError:
            try:
                os.unlink(tmp)
            except FileNotFoundError:
                pass
            raise

    async def get(self, key: str) -> bytes | None:
        """Return the stored bytes for *key*, or ``None`` if there are none."""
        try:
            return await asyncio.to_thread(self._path(key).read_bytes)
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Failed to read cached response for key=%s: %s", key, exc)
            return None

    async def clear(self) -> None:
        """Delete every entry and recreate an empty namespace."""
        try:
            await asyncio.to_thread(self._reset)
        except OSError as exc:
            logger.exception("Clearing cache at %s failed", self._dir)
            raise RuntimeError("Cache clear failed") from exc
        logger.info("Cache cleared at %s.", self._dir)

    def _reset(self) -> None:
        if self._dir.exists():
            shutil.rmtree(self._dir)
        self._dir.mkdir(parents=True, exist_ok=True)
