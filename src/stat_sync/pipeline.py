"""Pipeline orchestration: read → extract → fetch → map → write."""

import enum
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from stat_sync.batching import chunked
from stat_sync.errors import PermissionDenied, RunInProgressError
from stat_sync.fetchers.base import BaseFetcher
from stat_sync.mapping import map_to_field_update
from stat_sync.models.config import SyncConfig
from stat_sync.models.records import (
    ExtractedItem,
    FetchResult,
    FieldUpdate,
    PermissionCheck,
    SourceRecord,
)
from stat_sync.store.base import RecordStore
from stat_sync.store.batch_writer import BatchWriter

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class SyncReport:
    """Counts from one completed run."""

    total_records: int
    valid_items: int
    fetched: int
    skipped_fetch: int
    updated: int


class SyncPipeline:
    """
    Runs one sync of a statistic into a destination field.
    The run is strictly sequential: one fetch or write in flight at a time,
    with a fixed throttle delay between successive fetch calls.
    """

    def __init__(
        self,
        config: SyncConfig,
        store: RecordStore,
        fetcher: BaseFetcher,
        *,
        on_progress: Optional[Callable[[str], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.store = store
        self.fetcher = fetcher
        self._on_progress = on_progress or (lambda msg: logger.info("%s", msg))
        self._sleep = sleep
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def fetch_batch_size(self) -> int:
        return min(self.config.max_fetch_batch_size, self.fetcher.max_batch_size)

    def check_permission(self) -> PermissionCheck:
        """Whether the destination field may be updated (gates `run`)."""
        return self.store.check_update_permission([self.config.destination_field])

    def read_source_records(self) -> list[SourceRecord]:
        field = self.config.source_field
        return [
            SourceRecord(id=r.id, source_value=r.value_as_string(field))
            for r in self.store.select_records([field])
        ]

    def extract_items(self, records: list[SourceRecord]) -> list[ExtractedItem]:
        """Keep records whose source value yields an identifier, in read order."""
        items: list[ExtractedItem] = []
        for record in records:
            if not record.source_value:
                continue
            identifier = self.fetcher.extract_identifier(record.source_value)
            if not identifier:
                logger.debug("Skipping record %s: no identifier in %r", record.id, record.source_value)
                continue
            items.append(ExtractedItem(record=record, identifier=identifier))
        return items

    def fetch_all(self, items: list[ExtractedItem]) -> list[FetchResult]:
        """Fetch batch by batch, sleeping `throttle_seconds` between calls."""
        results: list[FetchResult] = []
        api_key = self.config.resolved_api_key()
        for index, batch in enumerate(chunked(items, self.fetch_batch_size)):
            if index > 0 and self.config.throttle_seconds:
                self._sleep(self.config.throttle_seconds)
            self._on_progress(f"Fetching statistics for {len(batch)} items...")
            results.extend(self.fetcher.fetch_batch(api_key, batch, self.config.statistic))
        return results

    def build_updates(self, results: list[FetchResult], field_type: str) -> list[FieldUpdate]:
        updates: list[FieldUpdate] = []
        for result in results:
            if result.statistic is None:
                continue
            update = map_to_field_update(
                result.record_id,
                result.statistic,
                self.config.destination_field,
                field_type,
            )
            value = update.fields[self.config.destination_field]
            if isinstance(value, float) and math.isnan(value):
                logger.warning(
                    "Statistic %r for record %s is not numeric", result.statistic, result.record_id
                )
            updates.append(update)
        return updates

    def preview(self) -> list[ExtractedItem]:
        """Read and extract only; no fetches or writes."""
        return self.extract_items(self.read_source_records())

    def run(self) -> SyncReport:
        """
        Execute a full run. Raises PermissionDenied before any work if the
        destination field is not writable; fetch/write errors abort the run.
        The pipeline is back in IDLE afterwards in every case.
        """
        if self._state is RunState.RUNNING:
            raise RunInProgressError("A sync run is already in progress")

        permission = self.check_permission()
        if not permission.allowed:
            reason = permission.reason or "Permission denied"
            self._on_progress(reason)
            raise PermissionDenied(reason)

        self._state = RunState.RUNNING
        try:
            return self._run()
        finally:
            self._state = RunState.IDLE

    def _run(self) -> SyncReport:
        records = self.read_source_records()
        items = self.extract_items(records)
        self._on_progress(f"Total number of records: {len(records)}")
        self._on_progress(f"Number of records with valid URLs: {len(items)}")

        results = self.fetch_all(items)
        field_type = self.store.get_field_type(self.config.destination_field)
        updates = self.build_updates(results, field_type)
        skipped = len(results) - len(updates)

        writer = BatchWriter(
            self.store,
            max_batch_size=self.config.max_write_batch_size,
            on_progress=self._on_progress,
        )
        written = writer.write_all(updates)
        self._on_progress("Operation complete.")

        return SyncReport(
            total_records=len(records),
            valid_items=len(items),
            fetched=len(results),
            skipped_fetch=skipped,
            updated=written,
        )
