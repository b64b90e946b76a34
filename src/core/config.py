"""Configuration models and YAML loader for the directory browser."""

from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_DATASET_URL = (
    "https://raw.githubusercontent.com/matrimonyfortelugubrahmins/"
    "matrimonyfortelugubrahmins.github.io/main/matrimony.json"
)
DEFAULT_FORM_URL = "https://forms.gle/HyiXrxC7nurHZF3m7"
FAVORITES_STORAGE_KEY = "matrimony_favorites"


class DatasetConfig(BaseModel):
    """Where the profile records come from."""

    url: str = DEFAULT_DATASET_URL
    timeout_seconds: float = Field(default=30.0, ge=1.0)
    form_url: str = DEFAULT_FORM_URL

    @field_validator("url")
    @classmethod
    def url_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "dataset url must not be empty"
            raise ValueError(msg)
        return v.strip()


class FavoritesConfig(BaseModel):
    """Local favorites storage."""

    path: str = "data/favorites.db"
    storage_key: str = FAVORITES_STORAGE_KEY


class PaginationConfig(BaseModel):
    """Fixed page size for the profile grid."""

    page_size: int = Field(default=20, ge=1, le=200)


class SearchConfig(BaseModel):
    """Search box behaviour."""

    debounce_ms: int = Field(default=300, ge=0)


class DisplayConfig(BaseModel):
    """Display settings. ``timezone`` is an IANA name; None means host local time."""

    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def timezone_known(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError):
            msg = f"unknown timezone: '{v}'"
            raise ValueError(msg) from None
        return v.strip()

    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    favorites: FavoritesConfig = Field(default_factory=FavoritesConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
