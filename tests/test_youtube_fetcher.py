"""Tests for the YouTube fetcher with a mocked transport."""

import httpx
import pytest

from conftest import make_items, youtube_handler
from stat_sync.errors import FetchError, PathNotFoundError, ResponseShapeError
from stat_sync.fetchers.youtube import YouTubeFetcher


def _fetcher(handler) -> YouTubeFetcher:
    return YouTubeFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestYouTubeFetcherRequest:
    """Request construction."""

    def test_one_request_per_batch(self) -> None:
        """A full batch is a single GET with comma-joined ids."""
        calls: list[httpx.Request] = []
        fetcher = _fetcher(youtube_handler(calls=calls))
        items = make_items(50)

        results = fetcher.fetch_batch("KEY", items, "statistics.viewCount")

        assert len(calls) == 1
        assert len(results) == 50
        params = calls[0].url.params
        assert params["key"] == "KEY"
        assert params["part"] == "statistics"
        assert params["id"] == ",".join(f"vid{i}" for i in range(50))
        assert calls[0].url.path == "/youtube/v3/videos"

    def test_part_is_first_path_segment(self) -> None:
        calls: list[httpx.Request] = []
        fetcher = _fetcher(youtube_handler(calls=calls))
        fetcher.fetch_batch("KEY", make_items(1), "snippet.thumbnails.default.url")
        assert calls[0].url.params["part"] == "snippet"

    def test_oversized_batch_rejected(self) -> None:
        """More than 50 items is a caller error; no request is sent."""
        calls: list[httpx.Request] = []
        fetcher = _fetcher(youtube_handler(calls=calls))
        with pytest.raises(ValueError, match="at most 50"):
            fetcher.fetch_batch("KEY", make_items(51), "statistics.viewCount")
        assert calls == []

    def test_empty_batch_sends_nothing(self) -> None:
        calls: list[httpx.Request] = []
        fetcher = _fetcher(youtube_handler(calls=calls))
        assert fetcher.fetch_batch("KEY", [], "statistics.viewCount") == []
        assert calls == []


class TestYouTubeFetcherResults:
    """Response handling."""

    def test_results_aligned_with_items(self) -> None:
        fetcher = _fetcher(youtube_handler(view_counts={"vid0": 10, "vid1": 20, "vid2": 30}))
        results = fetcher.fetch_batch("KEY", make_items(3), "statistics.viewCount")
        assert [r.record_id for r in results] == ["rec0", "rec1", "rec2"]
        assert [r.statistic for r in results] == ["10", "20", "30"]
        assert results[1].identifier == "vid1"

    def test_nested_statistic(self) -> None:
        fetcher = _fetcher(youtube_handler())
        [result] = fetcher.fetch_batch("KEY", make_items(1), "snippet.thumbnails.default.url")
        assert result.statistic == "https://i.ytimg.com/vi/vid0/default.jpg"

    def test_non_success_raises_with_body(self) -> None:
        body = '{"error": {"code": 400, "message": "API key not valid"}}'
        fetcher = _fetcher(lambda request: httpx.Response(400, text=body))
        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_batch("BAD", make_items(2), "statistics.viewCount")
        assert exc_info.value.status_code == 400
        assert exc_info.value.body == body

    def test_item_count_mismatch(self) -> None:
        """Fewer items than requested (e.g. a deleted video) is a shape error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"items": [{"statistics": {"viewCount": "1"}}]})

        fetcher = _fetcher(handler)
        with pytest.raises(ResponseShapeError) as exc_info:
            fetcher.fetch_batch("KEY", make_items(3), "statistics.viewCount")
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 1

    def test_missing_items_array(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, json={"kind": "x"}))
        with pytest.raises(ResponseShapeError):
            fetcher.fetch_batch("KEY", make_items(1), "statistics.viewCount")

    def test_missing_statistic_path(self) -> None:
        fetcher = _fetcher(youtube_handler())
        with pytest.raises(PathNotFoundError) as exc_info:
            fetcher.fetch_batch("KEY", make_items(2), "statistics.dislikeCount")
        assert exc_info.value.segment == "dislikeCount"

    def test_invalid_json(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(FetchError, match="invalid JSON"):
            fetcher.fetch_batch("KEY", make_items(1), "statistics.viewCount")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = _fetcher(handler)
        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_batch("KEY", make_items(1), "statistics.viewCount")
        assert exc_info.value.status_code is None


class TestYouTubeFetcherIdentifier:
    def test_extract_identifier(self) -> None:
        fetcher = YouTubeFetcher()
        assert fetcher.extract_identifier("https://www.youtube.com/watch?v=abc123") == "abc123"
        assert fetcher.extract_identifier("https://twitter.com/u/status/1") is None
