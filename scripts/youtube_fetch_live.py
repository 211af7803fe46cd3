#!/usr/bin/env python3
"""Quick live test of the YouTube fetcher.

Run:
  YOUTUBE_API_KEY=... python scripts/youtube_fetch_live.py                       # default video, viewCount
  YOUTUBE_API_KEY=... python scripts/youtube_fetch_live.py <video-url> snippet.title
"""

import os
import sys

from stat_sync.fetchers import YouTubeFetcher
from stat_sync.models.records import ExtractedItem, SourceRecord


def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    statistic = sys.argv[2] if len(sys.argv) > 2 else "statistics.viewCount"
    api_key = os.environ.get("YOUTUBE_API_KEY", "")
    if not api_key:
        raise SystemExit("Set YOUTUBE_API_KEY first.")

    fetcher = YouTubeFetcher()
    video_id = fetcher.extract_identifier(url)
    if not video_id:
        raise SystemExit(f"Not a YouTube watch URL: {url}")

    item = ExtractedItem(record=SourceRecord(id="live", source_value=url), identifier=video_id)
    print(f"Fetching {statistic} for {video_id}...")
    [result] = fetcher.fetch_batch(api_key, [item], statistic)
    print(f"  {statistic} = {result.statistic!r}")
    print("\n✅ Fetch succeeded.")


if __name__ == "__main__":
    main()
