"""In-memory record store for tests and local runs."""

from typing import Any, Optional

from stat_sync.errors import StoreError
from stat_sync.models.records import FieldUpdate, PermissionCheck, StoreRecord
from stat_sync.store.base import RecordStore


class InMemoryRecordStore(RecordStore):
    """
    Dict-backed store. Records are kept in insertion order.
    fail_on_batch makes the N-th update call (0-based) raise StoreError.
    """

    def __init__(
        self,
        records: Optional[dict[str, dict[str, Any]]] = None,
        field_types: Optional[dict[str, str]] = None,
        *,
        read_only_fields: Optional[set[str]] = None,
        max_batch_size: int = 50,
        fail_on_batch: Optional[int] = None,
    ):
        self.records: dict[str, dict[str, Any]] = {k: dict(v) for k, v in (records or {}).items()}
        self.field_types = dict(field_types or {})
        self.read_only_fields = set(read_only_fields or ())
        self.max_batch_size = max_batch_size
        self.fail_on_batch = fail_on_batch
        self.update_calls: list[list[FieldUpdate]] = []

    def select_records(self, fields: list[str]) -> list[StoreRecord]:
        return [
            StoreRecord(id=rid, fields={f: values[f] for f in fields if f in values})
            for rid, values in self.records.items()
        ]

    def update_records_batch(self, updates: list[FieldUpdate]) -> None:
        if len(updates) > self.max_batch_size:
            raise ValueError(f"At most {self.max_batch_size} records per update, got {len(updates)}")
        call_index = len(self.update_calls)
        self.update_calls.append(list(updates))
        if self.fail_on_batch is not None and call_index == self.fail_on_batch:
            raise StoreError(f"Injected failure on batch {call_index}")
        for update in updates:
            if update.id not in self.records:
                raise StoreError(f"Unknown record: {update.id}")
            self.records[update.id].update(update.fields)

    def check_update_permission(self, fields: list[str]) -> PermissionCheck:
        for field in fields:
            if field in self.read_only_fields:
                return PermissionCheck(allowed=False, reason=f'You cannot edit the field "{field}"')
        return PermissionCheck(allowed=True)

    def get_field_type(self, field: str) -> str:
        return self.field_types.get(field, "number")
