import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp

from gbfs_exporter.config import Settings


class FeedError(Exception):
    """A GBFS document could not be fetched or did not hold what we need."""


class FeedNotFoundError(FeedError):
    pass


@dataclass
class GbfsFeed:
    name: str
    url: str


async def fetch_json(session: aiohttp.ClientSession, url: str) -> dict[str, Any]:
    try:
        async with session.get(
            url, timeout=aiohttp.ClientTimeout(total=Settings.request_timeout_s)
        ) as response:
            if response.status >= 400:
                raise FeedError(f"GET {url} returned HTTP {response.status}")
            # GBFS hosts do not reliably send application/json
            payload = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise FeedError(f"GET {url} failed: {type(exc).__name__}: {exc}") from exc
    except ValueError as exc:
        raise FeedError(f"GET {url} returned invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise FeedError(f"GET {url} returned {type(payload).__name__}, expected object")
    return payload


def _feeds_block(data: dict[str, Any], language: str) -> list[Any]:
    block = data.get(language)
    if isinstance(block, dict) and isinstance(block.get("feeds"), list):
        return block["feeds"]
    for value in data.values():
        if isinstance(value, dict) and isinstance(value.get("feeds"), list):
            return value["feeds"]
    feeds = data.get("feeds")
    if isinstance(feeds, list):
        return feeds
    return []


def list_feeds(discovery: dict[str, Any], language: str | None = None) -> list[GbfsFeed]:
    """
    Returns the sub-feeds a gbfs.json discovery document advertises.

    The requested language block is preferred. Otherwise the first language
    block with a feeds list is used, then a top-level data.feeds list (v3).
    """
    language = language or Settings.feed_language
    data = discovery.get("data")
    if not isinstance(data, dict):
        return []
    feeds: list[GbfsFeed] = []
    for entry in _feeds_block(data, language):
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        url = entry.get("url")
        if not name or not url:
            continue
        feeds.append(GbfsFeed(name=str(name), url=str(url)))
    return feeds


def resolve_feed_url(
    discovery: dict[str, Any],
    feed_name: str | None = None,
    language: str | None = None,
) -> str:
    feed_name = feed_name or Settings.feed_name
    for feed in list_feeds(discovery, language):
        if feed.name == feed_name:
            return feed.url
    raise FeedNotFoundError(f"{feed_name} not found in discovery document")


def count_vehicles(status: dict[str, Any]) -> int:
    data = status.get("data")
    if not isinstance(data, dict):
        return 0
    vehicles = data.get("bikes")
    if not isinstance(vehicles, list):
        vehicles = data.get("vehicles")
    if not isinstance(vehicles, list):
        return 0
    return len(vehicles)


async def fetch_feed_url(
    session: aiohttp.ClientSession,
    discovery_url: str,
    feed_name: str | None = None,
) -> str:
    discovery = await fetch_json(session, discovery_url)
    return resolve_feed_url(discovery, feed_name)


async def fetch_vehicle_count(session: aiohttp.ClientSession, status_url: str) -> int:
    status = await fetch_json(session, status_url)
    return count_vehicles(status)
