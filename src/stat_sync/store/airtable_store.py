"""Airtable REST API (v0) record store.

List:    GET   /v0/{base}/{table}?fields[]=...&offset=...   (pages of up to 100)
Update:  PATCH /v0/{base}/{table}  {"records": [{"id", "fields"}, ...]}  (max 10 per request)
Schema:  GET   /v0/meta/bases/{base}/tables
"""

import logging
import math
import os
from typing import Any, Optional

import httpx

from stat_sync.errors import StoreError
from stat_sync.models.records import FieldUpdate, PermissionCheck, StoreRecord
from stat_sync.store.base import RecordStore

logger = logging.getLogger(__name__)

# Field types Airtable computes itself; they reject writes.
COMPUTED_FIELD_TYPES = frozenset({
    "formula",
    "rollup",
    "multipleLookupValues",
    "count",
    "autoNumber",
    "createdTime",
    "lastModifiedTime",
    "createdBy",
    "lastModifiedBy",
    "button",
})


def _json_safe(value: Any) -> Any:
    """Replace NaN and infinities with None; Airtable stores them as empty cells."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


class AirtableStore(RecordStore):
    """Record store backed by one Airtable table."""

    API_URL = "https://api.airtable.com/v0"
    max_batch_size = 10
    PAGE_SIZE = 100

    def __init__(
        self,
        base_id: str,
        table: str,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_id: Airtable base id (appXXXXXXXXXXXXXX)
            table: Table name or id
            token: Personal access token (defaults to AIRTABLE_TOKEN env var)
            client: Optional httpx client
        """
        if not base_id:
            raise ValueError("base_id is required for the Airtable store")
        self.base_id = base_id
        self.table = table
        token = token or os.environ.get("AIRTABLE_TOKEN", "")
        self._client = client or httpx.Client(timeout=30.0)
        self._client.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })
        self._schema: Optional[dict[str, Any]] = None

    @property
    def _table_url(self) -> str:
        return f"{self.API_URL}/{self.base_id}/{self.table}"

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            resp = self._client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreError(
                f"Airtable {method} failed: HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise StoreError(f"Airtable {method} failed: {e}") from e
        return resp.json()

    def select_records(self, fields: list[str]) -> list[StoreRecord]:
        records: list[StoreRecord] = []
        offset: Optional[str] = None

        while True:
            params: dict[str, Any] = {"pageSize": self.PAGE_SIZE, "fields[]": fields}
            if offset:
                params["offset"] = offset
            payload = self._request("GET", self._table_url, params=params)

            for row in payload.get("records") or []:
                records.append(StoreRecord(id=row["id"], fields=row.get("fields") or {}))

            offset = payload.get("offset")
            if not offset:
                break

        logger.debug("Loaded %d records from %s", len(records), self.table)
        return records

    def update_records_batch(self, updates: list[FieldUpdate]) -> None:
        if len(updates) > self.max_batch_size:
            raise ValueError(
                f"Airtable accepts at most {self.max_batch_size} records per update, got {len(updates)}"
            )
        if not updates:
            return
        body = {"records": [_json_safe(u.model_dump()) for u in updates]}
        self._request("PATCH", self._table_url, json=body)

    def _table_schema(self) -> Optional[dict[str, Any]]:
        """Schema entry for this table (cached), or None if the base has no such table."""
        if self._schema is None:
            payload = self._request("GET", f"{self.API_URL}/meta/bases/{self.base_id}/tables")
            for table in payload.get("tables") or []:
                if self.table in (table.get("id"), table.get("name")):
                    self._schema = table
                    break
        return self._schema

    def _field_schema(self, field: str) -> Optional[dict[str, Any]]:
        table = self._table_schema()
        if table is None:
            return None
        for f in table.get("fields") or []:
            if field in (f.get("id"), f.get("name")):
                return f
        return None

    def check_update_permission(self, fields: list[str]) -> PermissionCheck:
        try:
            table = self._table_schema()
        except StoreError as e:
            return PermissionCheck(allowed=False, reason=f"Could not read base schema: {e}")
        if table is None:
            return PermissionCheck(allowed=False, reason=f'Table "{self.table}" not found in base')

        for field in fields:
            schema = self._field_schema(field)
            if schema is None:
                return PermissionCheck(allowed=False, reason=f'Field "{field}" not found in {self.table}')
            if schema.get("type") in COMPUTED_FIELD_TYPES:
                return PermissionCheck(
                    allowed=False,
                    reason=f'Field "{field}" is computed ({schema["type"]}) and cannot be updated',
                )
        return PermissionCheck(allowed=True)

    def get_field_type(self, field: str) -> str:
        schema = self._field_schema(field)
        if schema is None:
            raise StoreError(f'Field "{field}" not found in {self.table}')
        return schema.get("type", "")
