"""Data models for sync records and run configuration."""

from stat_sync.models.config import SyncConfig
from stat_sync.models.records import (
    ExtractedItem,
    FetchResult,
    FieldUpdate,
    PermissionCheck,
    SourceRecord,
    StoreRecord,
)

__all__ = [
    "ExtractedItem",
    "FetchResult",
    "FieldUpdate",
    "PermissionCheck",
    "SourceRecord",
    "StoreRecord",
    "SyncConfig",
]
