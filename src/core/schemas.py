"""Core data models for the directory browser."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Raw values are JSON scalars; anything else is coerced to text on ingestion.
RawValue = str | int | float | None

MARRIAGE_FIXED_FIELD = "Is your marriage fixed ?"


class RawRecord(BaseModel):
    """One source row, keyed by the spreadsheet's column headers.

    Every known column is optional. Unknown columns are kept as extras and
    ignored downstream. Build instances with ``from_mapping``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: RawValue = Field(default=None, alias="Name")
    surname: RawValue = Field(default=None, alias="Surname")
    gender: RawValue = Field(default=None, alias="Gender")
    date_of_birth: RawValue = Field(default=None, alias="Date Of Birth")
    time_of_birth: RawValue = Field(default=None, alias="Time Of Birth")
    place_of_birth: RawValue = Field(default=None, alias="Place Of Birth")
    birth_star: RawValue = Field(default=None, alias="Birth Star")
    padam: RawValue = Field(default=None, alias="Padam")
    resident_status: RawValue = Field(default=None, alias="Resident Status")
    profile_created_by: RawValue = Field(default=None, alias="Profile Created By")
    marital_status: RawValue = Field(default=None, alias="Marital Status")
    subsect: RawValue = Field(default=None, alias="SubSect / Sakha")
    gothra: RawValue = Field(default=None, alias="Gothra")
    father_name: RawValue = Field(default=None, alias="Fathers Name")
    father_occupation: RawValue = Field(default=None, alias="Fathers Occupation")
    mother_name: RawValue = Field(default=None, alias="Mothers Name")
    mother_occupation: RawValue = Field(default=None, alias="Mothers Occupation")
    education: RawValue = Field(default=None, alias="Highest Qualification")
    college: RawValue = Field(default=None, alias="College/University Name")
    passout_year: RawValue = Field(default=None, alias="Passout Year")
    occupation: RawValue = Field(default=None, alias="Current Job - Designation")
    company: RawValue = Field(default=None, alias="Company Name")
    job_location: RawValue = Field(default=None, alias="Current Job - Location")
    salary: RawValue = Field(default=None, alias="Annual Salary in INR")
    complexion: RawValue = Field(default=None, alias="Complexion")
    height: RawValue = Field(default=None, alias="Height")
    native_place: RawValue = Field(default=None, alias="Native Place")
    primary_contact: RawValue = Field(default=None, alias="Primary Contact Number")
    secondary_contact: RawValue = Field(default=None, alias="Secondary Contact Number")
    max_age_gap: RawValue = Field(default=None, alias="Max Age - Gap")
    subsect_preference: RawValue = Field(default=None, alias="Subsect - Preference")
    min_height_pref: RawValue = Field(default=None, alias="Min Height Requirement")
    max_height_pref: RawValue = Field(default=None, alias="Max Height Requirement")
    location_preference: RawValue = Field(default=None, alias="Location Preference")
    education_preference: RawValue = Field(default=None, alias="Education Preference")
    other_info: RawValue = Field(default=None, alias="Other Information / Comments")
    marriage_fixed: RawValue = Field(default=None, alias=MARRIAGE_FIXED_FIELD)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalar(cls, v: Any) -> RawValue:
        if isinstance(v, bool):
            return "true" if v else ""
        if v is None or isinstance(v, (str, int, float)):
            return v
        return str(v)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawRecord":
        """Translate one untyped source row. Never fails."""
        if not isinstance(data, Mapping):
            logger.debug("Ignoring non-object record: %r", data)
            return cls()
        return cls.model_validate({str(k): v for k, v in data.items()})


class Profile(BaseModel):
    """Canonical, display-ready profile.

    Frozen. ``favorite`` is changed by replacing the instance via
    ``model_copy(update={"favorite": ...})`` so earlier snapshots stay intact.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    surname: str = ""
    full_name: str = ""
    gender: str = ""
    date_of_birth: str = ""
    time_of_birth: str = ""
    place_of_birth: str = ""
    birth_star: str = ""
    padam: str = ""
    age: int = Field(default=0, ge=0)
    resident_status: str = ""
    profile_created_by: str = ""
    marital_status: str = ""
    subsect: str = ""
    gothra: str = ""
    father_name: str = ""
    father_occupation: str = ""
    mother_name: str = ""
    mother_occupation: str = ""
    education: str = ""
    college: str = ""
    passout_year: str = ""
    occupation: str = ""
    company: str = ""
    job_location: str = ""
    salary: str = ""
    complexion: str = ""
    height: str = ""
    native_place: str = ""
    primary_contact: str = ""
    secondary_contact: str = ""
    max_age_gap: str = ""
    subsect_preference: str = ""
    min_height_pref: str = ""
    max_height_pref: str = ""
    location_preference: str = ""
    education_preference: str = ""
    other_info: str = ""
    favorite: bool = False


class IndexedProfile(BaseModel):
    """A profile paired with its position in the load-ordered collection."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    profile: Profile
