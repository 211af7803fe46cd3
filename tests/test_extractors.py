"""Unit tests for identifier extraction."""

import pytest

from stat_sync.extractors import extract_tweet_url, extract_youtube_id, host_matches


class TestExtractYoutubeId:
    """Tests for extract_youtube_id."""

    def test_watch_url(self) -> None:
        """Returns the v parameter of a watch URL."""
        assert extract_youtube_id("https://www.youtube.com/watch?v=abc123") == "abc123"

    def test_bare_domain_and_extra_params(self) -> None:
        """Accepts youtube.com without www and ignores other parameters."""
        assert extract_youtube_id("https://youtube.com/watch?t=30&v=xyz") == "xyz"

    def test_subdomain_case_insensitive(self) -> None:
        """Host match is case-insensitive and allows subdomains."""
        assert extract_youtube_id("https://M.YouTube.com/watch?v=q1") == "q1"

    def test_other_host_rejected(self) -> None:
        """Non-YouTube hosts return None."""
        assert extract_youtube_id("https://vimeo.com/abc123") is None
        assert extract_youtube_id("https://notyoutube.com/watch?v=abc") is None

    def test_missing_or_empty_v(self) -> None:
        """No v parameter, or an empty one, returns None."""
        assert extract_youtube_id("https://www.youtube.com/channel/UC123") is None
        assert extract_youtube_id("https://www.youtube.com/watch?v=") is None

    @pytest.mark.parametrize(
        "value",
        ["", "   ", None, "not a url", "youtube.com/watch?v=abc", "http://[::1", "://nohost"],
    )
    def test_unparseable_returns_none(self, value) -> None:
        """Values that are not absolute URLs never raise."""
        assert extract_youtube_id(value) is None

    def test_deterministic(self) -> None:
        """Same input gives same output across calls."""
        url = "https://www.youtube.com/watch?v=same"
        assert extract_youtube_id(url) == extract_youtube_id(url) == "same"


class TestExtractTweetUrl:
    """Tests for extract_tweet_url."""

    def test_status_url_accepted(self) -> None:
        """A tweet permalink yields the URL itself."""
        url = "https://twitter.com/user/status/123"
        assert extract_tweet_url(url) == url

    def test_profile_url_rejected(self) -> None:
        """URLs without /status/ are rejected."""
        assert extract_tweet_url("https://twitter.com/user") is None

    def test_x_domain_and_whitespace(self) -> None:
        """x.com links are accepted and surrounding whitespace is stripped."""
        assert extract_tweet_url("  https://x.com/user/status/9  ") == "https://x.com/user/status/9"

    def test_other_host_rejected(self) -> None:
        """A /status/ path on another host is rejected."""
        assert extract_tweet_url("https://example.com/user/status/123") is None

    def test_empty(self) -> None:
        """Empty values return None."""
        assert extract_tweet_url("") is None
        assert extract_tweet_url(None) is None


class TestHostMatches:
    """Tests for host_matches."""

    def test_exact_and_subdomain(self) -> None:
        assert host_matches("youtube.com", ("youtube.com",))
        assert host_matches("www.youtube.com", ("youtube.com",))

    def test_suffix_without_dot_rejected(self) -> None:
        assert not host_matches("fakeyoutube.com", ("youtube.com",))

    def test_none(self) -> None:
        assert not host_matches(None, ("youtube.com",))
