"""Abstract base class for metadata fetchers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from stat_sync.errors import FetchError
from stat_sync.models.records import ExtractedItem, FetchResult

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """
    Standard interface for external metadata sources.
    Each fetcher owns its identifier rules and issues one request per batch.
    """

    source_id: str = ""
    max_batch_size: int = 1
    DEFAULT_ENDPOINT: str = ""

    DEFAULT_HEADERS = {
        "User-Agent": "stat-sync/0.1 (record statistics sync)",
        "Accept": "application/json",
    }

    def __init__(self, endpoint: Optional[str] = None, client: Optional[httpx.Client] = None):
        self.endpoint = endpoint or self.DEFAULT_ENDPOINT
        self._client = client or httpx.Client(
            timeout=30.0,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    @abstractmethod
    def extract_identifier(self, raw_value: str) -> Optional[str]:
        """Derive this source's identifier from a raw field value; None to skip."""
        pass

    @abstractmethod
    def fetch_batch(
        self,
        api_key: str,
        items: list[ExtractedItem],
        statistic_path: str,
    ) -> list[FetchResult]:
        """
        Fetch the statistic for every item in one request.
        Result order matches `items`.
        """
        pass

    def _check_batch_size(self, items: list[ExtractedItem]) -> None:
        if len(items) > self.max_batch_size:
            raise ValueError(
                f"{self.source_id} accepts at most {self.max_batch_size} items per request, got {len(items)}"
            )

    def _get_json(self, params: dict[str, Any]) -> Any:
        """GET the endpoint and decode JSON. Non-success and transport failures raise FetchError."""
        logger.debug("GET %s params=%s", self.endpoint, {k: v for k, v in params.items() if k != "key"})
        try:
            resp = self._client.get(self.endpoint, params=params)
        except httpx.RequestError as e:
            raise FetchError(f"{self.source_id} request failed: {e}") from e

        if not resp.is_success:
            raise FetchError(resp.text, status_code=resp.status_code, body=resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(
                f"{self.source_id} returned invalid JSON",
                status_code=resp.status_code,
                body=resp.text,
            ) from e
