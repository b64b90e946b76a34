"""Map raw source rows onto canonical Profile instances.

``map_profile`` is total: every RawRecord yields exactly one Profile, with
absent or malformed fields degraded to ``""`` / ``0``.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, tzinfo
from typing import Any

from src.core.schemas import Profile, RawRecord
from src.profile.normalizers import (
    as_text,
    format_contact,
    format_date,
    format_time,
    is_marriage_fixed,
    parse_age,
)

logger = logging.getLogger(__name__)

# Fields copied across as plain text.
_PASSTHROUGH_FIELDS = (
    "place_of_birth",
    "birth_star",
    "padam",
    "resident_status",
    "profile_created_by",
    "marital_status",
    "subsect",
    "gothra",
    "father_name",
    "father_occupation",
    "mother_name",
    "mother_occupation",
    "education",
    "college",
    "passout_year",
    "occupation",
    "company",
    "job_location",
    "salary",
    "complexion",
    "height",
    "native_place",
    "max_age_gap",
    "subsect_preference",
    "min_height_pref",
    "max_height_pref",
    "location_preference",
    "education_preference",
    "other_info",
)


def map_profile(
    raw: RawRecord | Mapping[str, Any],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> Profile:
    """Build a Profile from one source row.

    Args:
        raw: A RawRecord, or an untyped row which is ingested first.
        today: Reference date for the age calculation (defaults to today).
        tz: Zone used to read timestamp dates; host local time when None.
    """
    if not isinstance(raw, RawRecord):
        raw = RawRecord.from_mapping(raw)

    name = as_text(raw.name)
    surname = as_text(raw.surname)
    fields: dict[str, Any] = {f: as_text(getattr(raw, f)) for f in _PASSTHROUGH_FIELDS}

    return Profile(
        name=name,
        surname=surname,
        full_name=f"{name} {surname}".strip(),
        gender=as_text(raw.gender).strip().lower(),
        date_of_birth=format_date(raw.date_of_birth, tz),
        time_of_birth=format_time(raw.time_of_birth),
        age=parse_age(raw.date_of_birth, today, tz),
        primary_contact=format_contact(raw.primary_contact),
        secondary_contact=format_contact(raw.secondary_contact),
        favorite=False,
        **fields,
    )


def map_profiles(
    records: Iterable[RawRecord | Mapping[str, Any]],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> list[Profile]:
    """Drop rows whose marriage is already fixed and map the rest, preserving order."""
    profiles: list[Profile] = []
    excluded = 0
    for item in records:
        raw = item if isinstance(item, RawRecord) else RawRecord.from_mapping(item)
        if is_marriage_fixed(raw.marriage_fixed):
            excluded += 1
            continue
        profiles.append(map_profile(raw, today, tz))
    if excluded:
        logger.debug("Excluded %d profiles with marriage fixed", excluded)
    return profiles
