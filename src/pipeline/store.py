"""ProfileStore: the session's ordered, normalized profile collection.

Data flow on load:
  1. Source fetch → raw records (the only suspension point)
  2. Drop rows whose marriage is fixed
  3. Map → Profile
  4. Merge persisted favorites by position
  5. Publish the collection in one assignment

Positions are fixed after load; favorites are keyed by them.
"""

import logging
from datetime import date, tzinfo

from src.core.schemas import IndexedProfile, Profile
from src.pipeline.favorites import FavoritesRepository
from src.profile.mapper import map_profiles
from src.sources.base import DatasetFetchError, DatasetSource

logger = logging.getLogger(__name__)

CATEGORICAL_FIELDS = ("gender", "resident_status", "marital_status", "subsect")


class DatasetLoadError(Exception):
    """Loading the profile collection failed; the store holds no data."""


class ProfileStore:
    """Holds all profiles for one session.

    Usage::

        store = ProfileStore(source, FavoritesRepository(conn, key))
        await store.load_all()
        store.toggle_favorite(3)
        view = store.snapshot()
    """

    def __init__(
        self,
        source: DatasetSource,
        favorites: FavoritesRepository,
        tz: tzinfo | None = None,
    ) -> None:
        self._source = source
        self._favorites = favorites
        self._tz = tz
        self._profiles: tuple[Profile, ...] = ()
        self._loaded = False
        self.load_error: str | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_all(self, today: date | None = None) -> tuple[Profile, ...]:
        """Fetch, normalize and publish the collection.

        Raises:
            DatasetLoadError: fetch or parse failed. The store is left empty.
        """
        self._profiles = ()
        self._loaded = False
        self.load_error = None

        try:
            records = await self._source.fetch()
        except DatasetFetchError as e:
            self.load_error = str(e)
            logger.error("Error loading profiles from %s: %s", self._source.source_id, e)
            raise DatasetLoadError(str(e)) from e

        profiles = map_profiles(records, today=today, tz=self._tz)
        favorites = self._favorites.load()
        merged = [
            p.model_copy(update={"favorite": True}) if i in favorites else p
            for i, p in enumerate(profiles)
        ]
        stale = {i for i in favorites if not 0 <= i < len(merged)}
        if stale:
            logger.debug("Ignoring %d stored favorites outside the collection", len(stale))

        self._profiles = tuple(merged)
        self._loaded = True
        logger.info(
            "Loaded %d profiles (%d raw, %d favorites)",
            len(self._profiles), len(records), len(favorites) - len(stale),
        )
        return self._profiles

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[Profile, ...]:
        """Immutable view of the collection at call time."""
        return self._profiles

    def indexed(self) -> list[IndexedProfile]:
        return [IndexedProfile(index=i, profile=p) for i, p in enumerate(self._profiles)]

    def __len__(self) -> int:
        return len(self._profiles)

    def __getitem__(self, index: int) -> Profile:
        return self._profiles[self._check_index(index)]

    def favorite_indices(self) -> set[int]:
        return {i for i, p in enumerate(self._profiles) if p.favorite}

    def filter_options(self) -> dict[str, list[str]]:
        """Distinct non-empty values per categorical filter field, sorted."""
        return {
            field: sorted({getattr(p, field) for p in self._profiles if getattr(p, field)})
            for field in CATEGORICAL_FIELDS
        }

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def set_favorite(self, index: int, value: bool) -> Profile:
        """Set the favorite flag at ``index`` and persist the full list.

        Raises:
            IndexError: no profile at ``index``.
        """
        index = self._check_index(index)
        current = self._profiles[index]
        if current.favorite != value:
            updated = current.model_copy(update={"favorite": value})
            profiles = list(self._profiles)
            profiles[index] = updated
            self._profiles = tuple(profiles)
        self._favorites.save(self.favorite_indices())
        return self._profiles[index]

    def toggle_favorite(self, index: int) -> Profile:
        """Flip the favorite flag at ``index``."""
        index = self._check_index(index)
        return self.set_favorite(index, not self._profiles[index].favorite)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._profiles):
            msg = f"no profile at position {index} (have {len(self._profiles)})"
            raise IndexError(msg)
        return index
