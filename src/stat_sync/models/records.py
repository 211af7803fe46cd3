"""Records flowing through one sync run."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class StoreRecord(BaseModel):
    """Record as returned by a record store: id plus the requested field values."""

    id: str
    fields: dict[str, Any] = Field(default_factory=dict)

    def value_as_string(self, field: str) -> str:
        """Render a cell value as display text (empty string when unset)."""
        return cell_value_as_string(self.fields.get(field))


def cell_value_as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "checked" if value else ""
    if isinstance(value, dict):
        return str(value.get("name") or value.get("url") or value.get("email") or "")
    if isinstance(value, list):
        return ", ".join(cell_value_as_string(v) for v in value)
    return str(value)


class SourceRecord(BaseModel):
    """A record id and the text of its source (URL) field."""

    id: str
    source_value: str = ""


class ExtractedItem(BaseModel):
    """Source record with a valid external identifier."""

    record: SourceRecord
    identifier: str = Field(..., min_length=1)


class FetchResult(BaseModel):
    """Statistic fetched for one item. statistic is None when the service had no data."""

    record_id: str
    identifier: str
    statistic: Optional[Any] = None


class FieldUpdate(BaseModel):
    """Pending write for one record, in the record store's wire shape."""

    id: str
    fields: dict[str, Any]


class PermissionCheck(BaseModel):
    """Outcome of a destination-field permission check."""

    allowed: bool
    reason: Optional[str] = None
