"""Filter chain for the profile grid.

Filter order:
  1. SearchTextFilter: case-insensitive substring over SEARCH_FIELDS
  2. CategoricalFilter: exact match, one per selected dropdown
  3. FavoritesOnlyFilter: optional toggle

Every filter returns an order-preserving subsequence of its input; nothing
reorders or deduplicates. Entries carry their load position so favorites and
detail views can be addressed after filtering.
"""

import logging
from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.schemas import IndexedProfile, Profile

logger = logging.getLogger(__name__)

# A filter is a callable that takes entries and returns a subsequence.
Filter = Callable[[list[IndexedProfile]], list[IndexedProfile]]

SEARCH_FIELDS = (
    "full_name",
    "name",
    "surname",
    "subsect",
    "gothra",
    "education",
    "occupation",
    "company",
    "job_location",
    "native_place",
    "marital_status",
    "resident_status",
    "birth_star",
    "college",
    "complexion",
    "height",
    "date_of_birth",
    "place_of_birth",
    "time_of_birth",
    "padam",
    "father_name",
    "father_occupation",
    "mother_name",
    "mother_occupation",
    "profile_created_by",
    "salary",
    "passout_year",
    "primary_contact",
    "secondary_contact",
    "max_age_gap",
    "subsect_preference",
    "location_preference",
    "education_preference",
    "other_info",
)


class FilterCriteria(BaseModel):
    """User-selected predicates. Unset fields match everything."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    gender: str | None = None
    resident_status: str | None = None
    marital_status: str | None = None
    subsect: str | None = None
    favorites_only: bool = False

    @field_validator("gender", "resident_status", "marital_status", "subsect")
    @classmethod
    def empty_means_unset(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return v

    def categorical(self) -> dict[str, str]:
        """Selected categorical constraints, keyed by Profile field."""
        selected = {
            "gender": self.gender,
            "resident_status": self.resident_status,
            "marital_status": self.marital_status,
            "subsect": self.subsect,
        }
        return {k: v for k, v in selected.items() if v is not None}


def search_text(profile: Profile) -> str:
    """The lower-cased haystack the search box matches against."""
    return " ".join(getattr(profile, f) for f in SEARCH_FIELDS).lower()


class SearchTextFilter:
    """Keep entries whose search haystack contains the query (case-insensitive).

    An empty query is a no-op. The query is not trimmed.
    """

    def __init__(self, query: str) -> None:
        self._query = query.lower()

    def __call__(self, entries: list[IndexedProfile]) -> list[IndexedProfile]:
        if not self._query:
            return entries
        result = [e for e in entries if self._query in search_text(e.profile)]
        removed = len(entries) - len(result)
        if removed:
            logger.debug("SearchTextFilter: removed %d profiles", removed)
        return result


class CategoricalFilter:
    """Keep entries whose ``field`` equals ``value`` exactly. ``None`` passes all."""

    def __init__(self, field: str, value: str | None) -> None:
        if field not in Profile.model_fields:
            msg = f"unknown profile field: '{field}'"
            raise ValueError(msg)
        self._field = field
        self._value = value

    def __call__(self, entries: list[IndexedProfile]) -> list[IndexedProfile]:
        if self._value is None:
            return entries
        result = [e for e in entries if getattr(e.profile, self._field) == self._value]
        removed = len(entries) - len(result)
        if removed:
            logger.debug("CategoricalFilter(%s): removed %d profiles", self._field, removed)
        return result


class FavoritesOnlyFilter:
    """Keep only favorites when enabled."""

    def __init__(self, enabled: bool) -> None:
        self._enabled = enabled

    def __call__(self, entries: list[IndexedProfile]) -> list[IndexedProfile]:
        if not self._enabled:
            return entries
        return [e for e in entries if e.profile.favorite]


def run_filter_chain(
    entries: list[IndexedProfile],
    filters: list[Filter],
) -> list[IndexedProfile]:
    """Apply filters in order, returning the surviving entries."""
    result = entries
    for f in filters:
        result = f(result)
    return result


def build_filters(criteria: FilterCriteria) -> list[Filter]:
    """Build the filter chain for a set of criteria."""
    filters: list[Filter] = [SearchTextFilter(criteria.search)]
    for field, value in criteria.categorical().items():
        filters.append(CategoricalFilter(field, value))
    filters.append(FavoritesOnlyFilter(criteria.favorites_only))
    return filters


def filter_profiles(
    profiles: Sequence[Profile],
    criteria: FilterCriteria,
) -> list[IndexedProfile]:
    """Filter a load-ordered collection, tagging survivors with their position."""
    entries = [IndexedProfile(index=i, profile=p) for i, p in enumerate(profiles)]
    result = run_filter_chain(entries, build_filters(criteria))
    logger.debug("Filtered %d → %d profiles", len(entries), len(result))
    return result
