"""Abstract record store bound to one table."""

from abc import ABC, abstractmethod

from stat_sync.models.records import FieldUpdate, PermissionCheck, StoreRecord


class RecordStore(ABC):
    """
    Tabular record store the sync reads from and writes back to.
    Implementations raise StoreError on failed requests.
    """

    # Largest batch accepted by one update_records_batch call.
    max_batch_size: int = 50

    @abstractmethod
    def select_records(self, fields: list[str]) -> list[StoreRecord]:
        """Return every record in the table with the given fields loaded."""
        pass

    @abstractmethod
    def update_records_batch(self, updates: list[FieldUpdate]) -> None:
        """Persist one batch of field updates (len <= max_batch_size)."""
        pass

    @abstractmethod
    def check_update_permission(self, fields: list[str]) -> PermissionCheck:
        """Check whether the caller may update the given fields."""
        pass

    @abstractmethod
    def get_field_type(self, field: str) -> str:
        """Store type name of a field, e.g. 'number' or 'multipleAttachments'."""
        pass
