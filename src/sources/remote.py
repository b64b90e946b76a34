"""HTTP dataset source: GET a JSON array from a fixed URL."""

import logging
from typing import Any

import httpx

from src.core.config import DatasetConfig
from src.sources.base import DatasetFetchError, DatasetSource, ensure_record_list

logger = logging.getLogger(__name__)


class RemoteDatasetSource(DatasetSource):
    """Fetches the published dataset over HTTPS.

    An ``httpx.AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a short-lived client is created per fetch.
    """

    def __init__(self, config: DatasetConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client

    @property
    def source_id(self) -> str:
        return self._config.url

    async def fetch(self) -> list[dict[str, Any]]:
        if self._client is not None:
            return await self._fetch_with(self._client)
        async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
            return await self._fetch_with(client)

    async def _fetch_with(self, client: httpx.AsyncClient) -> list[dict[str, Any]]:
        url = self._config.url
        logger.info("Fetching profiles from %s", url)
        try:
            response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Dataset request failed with HTTP {e.response.status_code}: {url}"
            raise DatasetFetchError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Dataset request failed: {e}"
            raise DatasetFetchError(msg) from e

        try:
            data = response.json()
        except ValueError as e:
            msg = f"Dataset at {url} is not valid JSON: {e}"
            raise DatasetFetchError(msg) from e

        records = ensure_record_list(data, url)
        logger.debug("Fetched %d raw records (%d bytes)", len(records), len(response.content))
        return records
