"""Abstract base class for the on-disk stores.

Every store lives in its own directory (its *namespace*) under
``settings.cache_dir``.

Extending for a new store:
    1. Add the directory name to ``NamespaceNames``.
    2. Subclass ``BaseRepository`` and set ``NAMESPACE``.
    3. Build it in the app lifespan (``main.py``) with ``from_settings``.

Example::

    class ImageRepository(BaseRepository):
        NAMESPACE = NamespaceNames.IMAGES
"""

from __future__ import annotations

import logging
from abc import ABC
from pathlib import Path
from typing import ClassVar, TypeVar

from tmdbkit.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseRepository")


class BaseRepository(ABC):
    """Base class that binds a store to its namespace directory.

    Subclasses declare ``NAMESPACE``. The ``from_settings`` classmethod is the
    factory used in the lifespan startup hook.
    """

    NAMESPACE: ClassVar[str]

    def __init__(self, root: Path) -> None:
        self._dir = Path(root) / self.NAMESPACE

    @property
    def directory(self) -> Path:
        return self._dir

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(cls: type[T], settings: Settings) -> T:
        """Instantiate the store under the configured cache directory.

        Usage::

            cache = ResponseCache.from_settings(settings)
        """
        return cls(Path(settings.cache_dir).expanduser())

    # ------------------------------------------------------------------
    # Namespace management
    # ------------------------------------------------------------------

    def ensure_namespace(self) -> None:
        """Create the namespace directory if it is missing. Idempotent."""
        if not self._dir.exists():
            self._dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created store directory at %s.", self._dir)
