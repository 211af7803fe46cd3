"""Metadata fetchers for external video services."""

from stat_sync.fetchers.base import BaseFetcher
from stat_sync.fetchers.registry import FetcherRegistry
from stat_sync.fetchers.twitter import TwitterViewsFetcher
from stat_sync.fetchers.youtube import YouTubeFetcher

__all__ = ["BaseFetcher", "FetcherRegistry", "TwitterViewsFetcher", "YouTubeFetcher"]
