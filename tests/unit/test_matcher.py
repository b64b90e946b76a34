"""Tests for filter chain: each filter in isolation + full chain."""

from typing import Any

import pytest

from src.core.schemas import IndexedProfile, Profile
from src.pipeline.matcher import (
    CategoricalFilter,
    FavoritesOnlyFilter,
    FilterCriteria,
    SearchTextFilter,
    build_filters,
    filter_profiles,
    run_filter_chain,
    search_text,
)


def _profile(**kwargs: Any) -> Profile:
    defaults: dict[str, Any] = {
        "name": "Ravi",
        "surname": "Kumar",
        "full_name": "Ravi Kumar",
        "gender": "male",
        "resident_status": "Indian Citizen",
        "marital_status": "Never Married",
        "subsect": "Vaidiki",
    }
    defaults.update(kwargs)
    return Profile(**defaults)


def _entries(*profiles: Profile) -> list[IndexedProfile]:
    return [IndexedProfile(index=i, profile=p) for i, p in enumerate(profiles)]


def _indices(entries: list[IndexedProfile]) -> list[int]:
    return [e.index for e in entries]


# ---------------------------------------------------------------------------
# SearchTextFilter
# ---------------------------------------------------------------------------


class TestSearchTextFilter:
    def test_case_insensitive_name(self) -> None:
        entries = _entries(_profile(full_name="Praveen Sharma"), _profile(full_name="Anil Rao"))
        assert _indices(SearchTextFilter("PRAV")(entries)) == [0]

    def test_matches_other_fields(self) -> None:
        entries = _entries(
            _profile(company="Infosys"),
            _profile(gothra="Kashyapa"),
            _profile(native_place="Guntur"),
            _profile(other_info="Prefers Hyderabad"),
        )
        assert _indices(SearchTextFilter("infosys")(entries)) == [0]
        assert _indices(SearchTextFilter("kashy")(entries)) == [1]
        assert _indices(SearchTextFilter("guntur")(entries)) == [2]
        assert _indices(SearchTextFilter("hyderabad")(entries)) == [3]

    def test_matches_contact_digits(self) -> None:
        entries = _entries(_profile(primary_contact="+91 9876543210"), _profile())
        assert _indices(SearchTextFilter("98765")(entries)) == [0]

    def test_empty_query_is_noop(self) -> None:
        entries = _entries(_profile(), _profile())
        assert SearchTextFilter("")(entries) == entries

    def test_query_not_trimmed(self) -> None:
        entries = _entries(_profile(full_name="Ravi Kumar"))
        assert SearchTextFilter(" kumar")(entries) == entries
        assert SearchTextFilter("kumar ")(entries) == []

    def test_no_match(self) -> None:
        assert SearchTextFilter("zzz")(_entries(_profile())) == []

    def test_haystack_is_lowercase(self) -> None:
        haystack = search_text(_profile(full_name="RAVI", company="ACME"))
        assert "ravi" in haystack
        assert "acme" in haystack
        assert "RAVI" not in haystack


# ---------------------------------------------------------------------------
# CategoricalFilter
# ---------------------------------------------------------------------------


class TestCategoricalFilter:
    def test_exact_match(self) -> None:
        entries = _entries(_profile(gender="male"), _profile(gender="female"), _profile(gender="female"))
        assert _indices(CategoricalFilter("gender", "female")(entries)) == [1, 2]

    def test_case_sensitive(self) -> None:
        entries = _entries(_profile(marital_status="Never Married"))
        assert CategoricalFilter("marital_status", "never married")(entries) == []

    def test_none_passes_all(self) -> None:
        entries = _entries(_profile(), _profile())
        assert CategoricalFilter("subsect", None)(entries) == entries

    def test_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="unknown profile field"):
            CategoricalFilter("shoe_size", "9")


# ---------------------------------------------------------------------------
# FavoritesOnlyFilter
# ---------------------------------------------------------------------------


class TestFavoritesOnlyFilter:
    def test_enabled(self) -> None:
        entries = _entries(_profile(favorite=True), _profile(), _profile(favorite=True))
        assert _indices(FavoritesOnlyFilter(True)(entries)) == [0, 2]

    def test_disabled(self) -> None:
        entries = _entries(_profile(), _profile(favorite=True))
        assert FavoritesOnlyFilter(False)(entries) == entries

    def test_no_favorites_is_empty(self) -> None:
        assert FavoritesOnlyFilter(True)(_entries(_profile(), _profile())) == []


# ---------------------------------------------------------------------------
# FilterCriteria
# ---------------------------------------------------------------------------


class TestFilterCriteria:
    def test_defaults_unset(self) -> None:
        c = FilterCriteria()
        assert c.search == ""
        assert c.categorical() == {}
        assert c.favorites_only is False

    def test_empty_string_means_unset(self) -> None:
        c = FilterCriteria(gender="", subsect="", marital_status="Divorced")
        assert c.gender is None
        assert c.subsect is None
        assert c.categorical() == {"marital_status": "Divorced"}

    def test_frozen(self) -> None:
        with pytest.raises(Exception):
            FilterCriteria().search = "x"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Full chain
# ---------------------------------------------------------------------------


class TestFilterChain:
    def test_empty_chain(self) -> None:
        entries = _entries(_profile())
        assert run_filter_chain(entries, []) == entries

    def test_build_filters_order(self) -> None:
        filters = build_filters(FilterCriteria(gender="female", subsect="Niyogi"))
        assert isinstance(filters[0], SearchTextFilter)
        assert all(isinstance(f, CategoricalFilter) for f in filters[1:3])
        assert isinstance(filters[-1], FavoritesOnlyFilter)

    def test_no_criteria_returns_all(self) -> None:
        profiles = [_profile(name=str(i)) for i in range(5)]
        result = filter_profiles(profiles, FilterCriteria())
        assert _indices(result) == [0, 1, 2, 3, 4]
        assert [e.profile for e in result] == profiles

    def test_combined(self) -> None:
        profiles = [
            _profile(full_name="Sita Rao", gender="female", resident_status="NRI", favorite=True),
            _profile(full_name="Gita Rao", gender="female", resident_status="NRI"),
            _profile(full_name="Rao Kumar", gender="male", resident_status="NRI", favorite=True),
            _profile(full_name="Lata Rao", gender="female", resident_status="Indian Citizen", favorite=True),
            _profile(full_name="Mita Rao", gender="female", resident_status="NRI", favorite=True),
        ]
        criteria = FilterCriteria(
            search="rao", gender="female", resident_status="NRI", favorites_only=True,
        )
        assert _indices(filter_profiles(profiles, criteria)) == [0, 4]

    def test_order_preserving_subsequence(self) -> None:
        profiles = [_profile(gender="female" if i % 3 else "male") for i in range(12)]
        result = filter_profiles(profiles, FilterCriteria(gender="female"))
        indices = _indices(result)
        assert indices == sorted(indices)
        assert all(e.profile is profiles[e.index] for e in result)

    def test_favorites_only_without_favorites(self) -> None:
        profiles = [_profile(), _profile()]
        assert filter_profiles(profiles, FilterCriteria(favorites_only=True)) == []

    def test_idempotent(self) -> None:
        profiles = [_profile(company="Acme" if i % 2 else "Initech") for i in range(6)]
        criteria = FilterCriteria(search="acme")
        once = filter_profiles(profiles, criteria)
        twice = filter_profiles([e.profile for e in once], criteria)
        assert [e.profile for e in twice] == [e.profile for e in once]
