import argparse
import asyncio
from pathlib import Path
import sys


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import aiohttp

from gbfs_exporter.config import Settings
from gbfs_exporter.ingest.feeds import (
    FeedError,
    count_vehicles,
    fetch_json,
    list_feeds,
    resolve_feed_url,
)


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Resolve and count one GBFS discovery URL without publishing metrics"
    )
    parser.add_argument("url", help="gbfs.json discovery URL")
    parser.add_argument("--feed", default=Settings.feed_name, help="Sub-feed name")
    parser.add_argument("--language", default=Settings.feed_language)
    args = parser.parse_args()

    async with aiohttp.ClientSession(
        headers={"User-Agent": Settings.user_agent}
    ) as session:
        try:
            discovery = await fetch_json(session, args.url)
            for feed in list_feeds(discovery, args.language):
                print(f"feed: {feed.name} {feed.url}")
            status_url = resolve_feed_url(discovery, args.feed, args.language)
            status = await fetch_json(session, status_url)
        except FeedError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    print(f"{args.feed}: {status_url}")
    print(f"vehicles: {count_vehicles(status)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
