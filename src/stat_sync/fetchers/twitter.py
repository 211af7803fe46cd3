"""Twitter video view-count fetcher.

The views service takes one tweet URL per request (`?tweet_url=<url>`) and
answers with a flat JSON object such as {"view_count": 1234}, or null when it
has nothing for that tweet.
"""

import logging
from typing import Optional

from stat_sync.extractors import extract_tweet_url
from stat_sync.fetchers.base import BaseFetcher
from stat_sync.fetchers.paths import get_path
from stat_sync.models.records import ExtractedItem, FetchResult

logger = logging.getLogger(__name__)


class TwitterViewsFetcher(BaseFetcher):
    """Fetches video view counts for tweets, one tweet per request."""

    source_id = "twitter"
    max_batch_size = 1
    DEFAULT_ENDPOINT = "https://import-twitter-video-views.herokuapp.com/"

    def extract_identifier(self, raw_value: str) -> Optional[str]:
        return extract_tweet_url(raw_value)

    def fetch_batch(
        self,
        api_key: str,
        items: list[ExtractedItem],
        statistic_path: str,
    ) -> list[FetchResult]:
        self._check_batch_size(items)
        results: list[FetchResult] = []
        for item in items:
            payload = self._get_json({"tweet_url": item.identifier})
            if payload is None:
                logger.warning("No data for tweet %s (record %s)", item.identifier, item.record.id)
                statistic = None
            else:
                statistic = get_path(payload, statistic_path)
            results.append(
                FetchResult(record_id=item.record.id, identifier=item.identifier, statistic=statistic)
            )
        return results
