"""Convert fetched statistics into destination field values."""

import json
import re
from typing import Any

from stat_sync.models.records import FieldUpdate

ATTACHMENT_FIELD_TYPES = frozenset({"multipleAttachments"})

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def statistic_text(raw: Any) -> str:
    """Text form of a statistic: strings as-is, anything else JSON-encoded."""
    if isinstance(raw, str):
        return raw
    return json.dumps(raw)


def coerce_number(raw: Any) -> float | int:
    """
    Strip quote characters and parse a leading integer.
    Non-numeric input yields NaN.
    """
    match = _LEADING_INT.match(statistic_text(raw).replace('"', ""))
    if not match:
        return float("nan")
    return int(match.group(1))


def to_field_value(raw: Any, field_type: str) -> Any:
    """Shape a statistic for a field of the given store type."""
    if field_type in ATTACHMENT_FIELD_TYPES:
        # Attachment fields take a list of {url} objects; the statistic is assumed to be a URL.
        return [{"url": statistic_text(raw)}]
    return coerce_number(raw)


def map_to_field_update(
    record_id: str,
    raw_statistic: Any,
    destination_field: str,
    destination_field_type: str,
) -> FieldUpdate:
    return FieldUpdate(
        id=record_id,
        fields={destination_field: to_field_value(raw_statistic, destination_field_type)},
    )
