"""Pytest fixtures for stat-sync tests."""

import json
from typing import Any, Callable

import httpx
import pytest

from stat_sync.models.config import SyncConfig
from stat_sync.models.records import ExtractedItem, SourceRecord
from stat_sync.store.memory_store import InMemoryRecordStore


def make_items(n: int, prefix: str = "vid") -> list[ExtractedItem]:
    """n extracted items with record ids rec0.. and identifiers vid0.."""
    return [
        ExtractedItem(
            record=SourceRecord(id=f"rec{i}", source_value=f"https://www.youtube.com/watch?v={prefix}{i}"),
            identifier=f"{prefix}{i}",
        )
        for i in range(n)
    ]


def youtube_handler(
    view_counts: dict[str, Any] | None = None,
    calls: list[httpx.Request] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler answering YouTube /videos requests in request order."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        ids = request.url.params["id"].split(",")
        items = [
            {
                "id": vid,
                "statistics": {"viewCount": str((view_counts or {}).get(vid, 100))},
                "snippet": {"thumbnails": {"default": {"url": f"https://i.ytimg.com/vi/{vid}/default.jpg"}}},
            }
            for vid in ids
        ]
        return httpx.Response(200, json={"kind": "youtube#videoListResponse", "items": items})

    return handler


@pytest.fixture
def youtube_config() -> SyncConfig:
    """YouTube view-count config with throttling disabled."""
    return SyncConfig(
        variant="youtube",
        api_key="test-key",
        base_id="appTEST",
        table="Videos",
        source_field="URL",
        destination_field="Views",
        statistic="statistics.viewCount",
    )


@pytest.fixture
def video_store() -> InMemoryRecordStore:
    """Store with three valid YouTube links and three unusable values."""
    return InMemoryRecordStore(
        records={
            "rec1": {"URL": "https://www.youtube.com/watch?v=aaa"},
            "rec2": {"URL": "https://vimeo.com/aaa"},
            "rec3": {"URL": "https://youtube.com/watch?v=bbb&t=10"},
            "rec4": {},
            "rec5": {"URL": "not a url"},
            "rec6": {"URL": "https://m.youtube.com/watch?v=ccc"},
        },
        field_types={"Views": "number", "Thumb": "multipleAttachments"},
    )


def airtable_list_response(records: list[dict], offset: str | None = None) -> httpx.Response:
    body: dict[str, Any] = {"records": records}
    if offset:
        body["offset"] = offset
    return httpx.Response(200, content=json.dumps(body), headers={"content-type": "application/json"})
