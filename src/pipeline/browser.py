"""DirectoryBrowser: application state tying store, filters and pagination together.

One instance per session. It owns the current criteria and page; the store
owns the profiles. Filtering and pagination always run on a store snapshot.
"""

import logging
from collections.abc import Callable
from datetime import date

from src.core.config import Settings
from src.core.schemas import IndexedProfile, Profile
from src.pipeline.debounce import Debouncer
from src.pipeline.matcher import FilterCriteria, filter_profiles
from src.pipeline.paginator import DEFAULT_PAGE_SIZE, Page, PageOutOfRangeError, paginate, total_pages_for
from src.pipeline.store import ProfileStore

logger = logging.getLogger(__name__)

ViewListener = Callable[[Page[IndexedProfile]], None]


class DirectoryBrowser:
    """Current view over a ProfileStore.

    Usage::

        browser = DirectoryBrowser(store, page_size=20)
        await browser.load()
        browser.apply_filters(FilterCriteria(gender="female"))
        browser.go_to_page(2)
        page = browser.current_view()
    """

    def __init__(
        self,
        store: ProfileStore,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = 0.3,
        on_change: ViewListener | None = None,
    ) -> None:
        self._store = store
        self._page_size = page_size
        self._criteria = FilterCriteria()
        self._page = 1
        self._filtered: list[IndexedProfile] = []
        self._debouncer = Debouncer(debounce_seconds)
        self._on_change = on_change

    @classmethod
    def from_settings(
        cls,
        store: ProfileStore,
        settings: Settings,
        on_change: ViewListener | None = None,
    ) -> "DirectoryBrowser":
        return cls(
            store,
            page_size=settings.pagination.page_size,
            debounce_seconds=settings.search.debounce_ms / 1000,
            on_change=on_change,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def page(self) -> int:
        return self._page

    @property
    def filtered(self) -> list[IndexedProfile]:
        return list(self._filtered)

    @property
    def total_pages(self) -> int:
        return total_pages_for(len(self._filtered), self._page_size)

    async def load(self, today: date | None = None) -> Page[IndexedProfile]:
        """Load the store and show page 1 of the unfiltered collection.

        Raises:
            DatasetLoadError: propagated from the store.
        """
        await self._store.load_all(today=today)
        return self.apply_filters(FilterCriteria())

    def current_view(self) -> Page[IndexedProfile]:
        return paginate(self._filtered, self._page, self._page_size)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def apply_filters(self, criteria: FilterCriteria) -> Page[IndexedProfile]:
        """Replace the criteria and return to page 1."""
        self._criteria = criteria
        self._page = 1
        self._refilter()
        return self._publish()

    def reset_filters(self) -> Page[IndexedProfile]:
        self._debouncer.cancel()
        return self.apply_filters(FilterCriteria())

    def set_search_text(self, text: str) -> None:
        """Debounced search update; only the last text in a burst is applied."""
        self._debouncer.trigger(self._apply_search, text)

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def go_to_page(self, page: int) -> bool:
        """Move to ``page``. Out-of-range requests leave the page unchanged and return False."""
        try:
            paginate(self._filtered, page, self._page_size)
        except PageOutOfRangeError as e:
            logger.debug("Ignoring page request: %s", e)
            return False
        self._page = page
        self._publish()
        return True

    def toggle_favorite(self, index: int) -> Profile:
        """Flip a favorite, persist it, and re-filter while keeping the current page.

        When the result shrinks below the current page (favorites-only view),
        the page falls back to the last one that still exists.

        Raises:
            IndexError: no profile at ``index``.
        """
        profile = self._store.toggle_favorite(index)
        self._refilter()
        if self._page > self.total_pages:
            logger.debug("Page %d no longer exists, moving to %d", self._page, self.total_pages)
            self._page = self.total_pages
        self._publish()
        return profile

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_search(self, text: str) -> None:
        self.apply_filters(self._criteria.model_copy(update={"search": text}))

    def _refilter(self) -> None:
        self._filtered = filter_profiles(self._store.snapshot(), self._criteria)

    def _publish(self) -> Page[IndexedProfile]:
        view = self.current_view()
        if self._on_change is not None:
            self._on_change(view)
        return view
