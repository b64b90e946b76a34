"""Favorites repository: best-effort persistence of favorite positions.

Storage problems never block the browser. Read failures yield no favorites,
and write failures are logged and dropped.
"""

import logging
import sqlite3

from src.core.db import load_favorite_indices, save_favorite_indices

logger = logging.getLogger(__name__)


class FavoritesRepository:
    """Reads and rewrites the list of favorite positions under one storage key.

    Usage::

        repo = FavoritesRepository(conn, "matrimony_favorites")
        indices = repo.load()
        repo.save({0, 4, 7})

    ``conn`` may be None when local storage could not be opened.
    """

    def __init__(self, conn: sqlite3.Connection | None, storage_key: str) -> None:
        self._conn = conn
        self._key = storage_key

    @property
    def available(self) -> bool:
        return self._conn is not None

    def load(self) -> set[int]:
        """Return stored positions, or an empty set if storage is unavailable or corrupt."""
        if self._conn is None:
            logger.debug("Favorites storage unavailable - starting with none")
            return set()
        try:
            return set(load_favorite_indices(self._conn, self._key))
        except (sqlite3.Error, ValueError) as e:
            logger.warning("Ignoring unreadable favorites under '%s': %s", self._key, e)
            return set()

    def save(self, indices: set[int]) -> bool:
        """Rewrite the stored list in full. Returns False if the write failed."""
        if self._conn is None:
            return False
        try:
            save_favorite_indices(self._conn, self._key, list(indices))
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.warning("Failed to save favorites under '%s': %s", self._key, e)
            return False
        logger.debug("Saved %d favorites", len(indices))
        return True
