"""Identifier extraction from video and tweet URLs."""

from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

YOUTUBE_DOMAINS = ("youtube.com",)
TWITTER_DOMAINS = ("twitter.com", "x.com")

# Path marker every tweet permalink carries.
TWEET_STATUS_MARKER = "/status/"

ExtractorFn = Callable[[str], Optional[str]]


def _parse_url(raw: Optional[str]):
    """Parse an absolute URL; None when raw is empty or lacks scheme/host."""
    if not raw or not raw.strip():
        return None
    try:
        parsed = urlparse(raw.strip())
        host = parsed.hostname
    except ValueError:
        return None
    if not parsed.scheme or not host:
        return None
    return parsed


def host_matches(host: Optional[str], domains: tuple[str, ...]) -> bool:
    """True if host equals one of domains or is a subdomain of one."""
    if not host:
        return False
    host = host.lower().rstrip(".")
    return any(host == d or host.endswith("." + d) for d in domains)


def extract_youtube_id(raw: Optional[str]) -> Optional[str]:
    """
    Extract the video id from a YouTube watch URL.
    Returns None for unparseable URLs, non-YouTube hosts, or a missing/empty `v` parameter.
    """
    parsed = _parse_url(raw)
    if parsed is None or not host_matches(parsed.hostname, YOUTUBE_DOMAINS):
        return None
    values = parse_qs(parsed.query).get("v")
    if not values:
        return None
    return values[0] or None


def extract_tweet_url(raw: Optional[str]) -> Optional[str]:
    """Return the tweet URL itself if it is a Twitter/X status permalink."""
    parsed = _parse_url(raw)
    if parsed is None or not host_matches(parsed.hostname, TWITTER_DOMAINS):
        return None
    if TWEET_STATUS_MARKER not in parsed.path:
        return None
    return raw.strip()
