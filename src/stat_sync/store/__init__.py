"""Record stores and batched writes."""

from stat_sync.store.airtable_store import AirtableStore
from stat_sync.store.base import RecordStore
from stat_sync.store.batch_writer import BatchWriter
from stat_sync.store.memory_store import InMemoryRecordStore

__all__ = [
    "AirtableStore",
    "BatchWriter",
    "InMemoryRecordStore",
    "RecordStore",
]
