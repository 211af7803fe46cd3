"""Sequential, size-bounded writes to a record store."""

import logging
from typing import Callable, Optional

from stat_sync.batching import chunked
from stat_sync.errors import StoreError, WriteError
from stat_sync.models.records import FieldUpdate
from stat_sync.store.base import RecordStore

logger = logging.getLogger(__name__)


class BatchWriter:
    """
    Writes updates in consecutive batches, one at a time.
    Each batch completes before the next is sent, so at most one write is in flight.
    A failed batch stops the run; batches already written stay committed.
    """

    def __init__(
        self,
        store: RecordStore,
        max_batch_size: int = 50,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.max_batch_size = min(max_batch_size, store.max_batch_size)
        self._on_progress = on_progress

    def write_all(self, updates: list[FieldUpdate]) -> int:
        """Write all updates. Returns the number of records written."""
        written = 0
        for index, batch in enumerate(chunked(updates, self.max_batch_size)):
            if self._on_progress:
                self._on_progress(f"Updating {len(batch)} records...")
            try:
                self.store.update_records_batch(batch)
            except StoreError as e:
                logger.warning("Write batch %d failed after %d records committed: %s", index, written, e)
                raise WriteError(
                    f"Write batch {index} failed: {e}",
                    batch_index=index,
                    committed=written,
                ) from e
            written += len(batch)
        return written
