"""Run configuration for a sync job."""

import os
from pathlib import Path
from typing import Any, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: pip install stat-sync"
    ) from e
from pydantic import BaseModel, Field, model_validator

# Defaults for the hard-coded Twitter video views base.
_VARIANT_DEFAULTS: dict[str, dict[str, Any]] = {
    "twitter": {
        "table": "Video",
        "source_field": "TW",
        "destination_field": "TW-V",
        "statistic": "view_count",
    },
}


class SyncConfig(BaseModel):
    """Resolved inputs for one sync run."""

    variant: str = Field(default="youtube", description="Fetcher source id: youtube | twitter")
    api_key: str = Field(default="", description="External API key (YOUTUBE_API_KEY if empty)")

    base_id: str = Field(default="", description="Airtable base id, e.g. appXXXXXXXXXXXXXX")
    table: str
    source_field: str = Field(..., description="Field holding video/tweet URLs")
    destination_field: str = Field(..., description="Field receiving the statistic")
    statistic: str = Field(..., min_length=1, description="Dot path, e.g. statistics.viewCount")

    max_fetch_batch_size: int = Field(default=50, ge=1)
    max_write_batch_size: int = Field(default=50, ge=1)
    throttle_seconds: float = Field(default=0.05, ge=0)
    endpoint: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _apply_variant_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        variant = str(data.get("variant") or "youtube").lower()
        merged = dict(_VARIANT_DEFAULTS.get(variant, {}))
        merged.update({k: v for k, v in data.items() if v is not None})
        merged["variant"] = variant
        return merged

    def resolved_api_key(self) -> str:
        return self.api_key or os.environ.get("YOUTUBE_API_KEY", "")

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "SyncConfig":
        """Load config from YAML. Supports nested (airtable/source/destination/limits) or flat keys."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        airtable = data.get("airtable", {}) or {}
        source = data.get("source", {}) or {}
        destination = data.get("destination", {}) or {}
        limits = data.get("limits", {}) or {}

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict = {
            "variant": data.get("variant"),
            "api_key": data.get("api_key"),
            "statistic": data.get("statistic"),
            "endpoint": data.get("endpoint"),
            "base_id": _get("base_id", airtable, data),
            "table": _get("table", airtable, data),
            "source_field": source.get("field", data.get("source_field")),
            "destination_field": destination.get("field", data.get("destination_field")),
            "max_fetch_batch_size": _get("max_fetch_batch_size", limits, data),
            "max_write_batch_size": _get("max_write_batch_size", limits, data),
            "throttle_seconds": _get("throttle_seconds", limits, data),
        }
        flat.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(flat)
