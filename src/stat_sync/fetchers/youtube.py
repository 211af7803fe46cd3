"""YouTube Data API v3 fetcher.

One GET to /videos per batch of up to 50 ids:
    ?key=<apiKey>&id=<id1,id2,...>&part=<top-level field of the statistic path>
The response `items` array is aligned positionally with the requested ids.
"""

from typing import Optional

from stat_sync.errors import ResponseShapeError
from stat_sync.extractors import extract_youtube_id
from stat_sync.fetchers.base import BaseFetcher
from stat_sync.fetchers.paths import get_path, top_level_part
from stat_sync.models.records import ExtractedItem, FetchResult


class YouTubeFetcher(BaseFetcher):
    """Fetches video resource properties (statistics, snippet, ...) from YouTube."""

    source_id = "youtube"
    max_batch_size = 50
    DEFAULT_ENDPOINT = "https://www.googleapis.com/youtube/v3/videos"

    def extract_identifier(self, raw_value: str) -> Optional[str]:
        return extract_youtube_id(raw_value)

    def fetch_batch(
        self,
        api_key: str,
        items: list[ExtractedItem],
        statistic_path: str,
    ) -> list[FetchResult]:
        self._check_batch_size(items)
        if not items:
            return []

        params = {
            "key": api_key,
            "id": ",".join(item.identifier for item in items),
            "part": top_level_part(statistic_path),
        }
        payload = self._get_json(params)

        response_items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(response_items, list):
            raise ResponseShapeError(len(items), 0)
        if len(response_items) != len(items):
            raise ResponseShapeError(len(items), len(response_items))

        return [
            FetchResult(
                record_id=item.record.id,
                identifier=item.identifier,
                statistic=get_path(entry, statistic_path),
            )
            for item, entry in zip(items, response_items)
        ]
