"""File dataset source: read a JSON array from disk (offline use and fixtures)."""

import json
import logging
from pathlib import Path
from typing import Any

from src.sources.base import DatasetFetchError, DatasetSource, ensure_record_list

logger = logging.getLogger(__name__)


class LocalDatasetSource(DatasetSource):
    """Reads records from a local JSON export of the dataset."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_id(self) -> str:
        return str(self._path)

    async def fetch(self) -> list[dict[str, Any]]:
        logger.info("Reading profiles from %s", self._path)
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            msg = f"Failed to read dataset from {self._path}: {e}"
            raise DatasetFetchError(msg) from e
        return ensure_record_list(data, self.source_id)
