"""Abstract base class for dataset sources."""

from abc import ABC, abstractmethod
from typing import Any


class DatasetFetchError(Exception):
    """The dataset could not be fetched or is not a JSON array of records."""


class DatasetSource(ABC):
    """Base class that every dataset source must implement."""

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Human-readable identifier (URL or file path) for logs and errors."""

    @abstractmethod
    async def fetch(self) -> list[dict[str, Any]]:
        """Return the raw records, in source order.

        Raises:
            DatasetFetchError: on transport failure, non-2xx status, malformed
                JSON, or a body that is not a JSON array.
        """


def ensure_record_list(data: Any, source_id: str) -> list[dict[str, Any]]:
    """Validate the decoded body shape; non-object rows are kept for the mapper to absorb."""
    if not isinstance(data, list):
        msg = f"Dataset at {source_id} is not a JSON array (got {type(data).__name__})"
        raise DatasetFetchError(msg)
    return data
