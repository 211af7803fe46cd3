"""Registry mapping config variants to fetchers."""

import logging
from typing import TYPE_CHECKING, Type

from stat_sync.fetchers.base import BaseFetcher
from stat_sync.fetchers.paths import split_path
from stat_sync.fetchers.twitter import TwitterViewsFetcher
from stat_sync.fetchers.youtube import YouTubeFetcher

if TYPE_CHECKING:
    from stat_sync.models.config import SyncConfig

logger = logging.getLogger(__name__)


class FetcherRegistry:
    """Resolves a variant name (youtube | twitter) to its fetcher."""

    _fetchers: dict[str, Type[BaseFetcher]] = {
        "youtube": YouTubeFetcher,
        "twitter": TwitterViewsFetcher,
    }

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseFetcher:
        """Fetcher instance for a variant. kwargs passed to fetcher __init__."""
        fetcher_cls = cls._fetchers.get(source_id.lower())
        if not fetcher_cls:
            raise ValueError(f"Unknown variant: {source_id}. Available: {cls.available_sources()}")
        return fetcher_cls(**kwargs)

    @classmethod
    def for_config(cls, config: "SyncConfig", **kwargs) -> BaseFetcher:
        """
        Fetcher for config.variant, pointed at config.endpoint when set.
        Rejects statistic paths with empty segments (e.g. "statistics..viewCount").
        """
        if any(not segment for segment in split_path(config.statistic)):
            raise ValueError(f"Invalid statistic path: {config.statistic!r}")
        fetcher = cls.get(config.variant, endpoint=config.endpoint, **kwargs)
        if config.max_fetch_batch_size > fetcher.max_batch_size:
            logger.info(
                "%s takes at most %d items per request; max_fetch_batch_size=%d is capped",
                fetcher.source_id,
                fetcher.max_batch_size,
                config.max_fetch_batch_size,
            )
        return fetcher

    @classmethod
    def available_sources(cls) -> list[str]:
        return list(cls._fetchers.keys())
