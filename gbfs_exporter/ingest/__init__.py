"""Ingest subpackage: feed fetching and the polling loop."""

from gbfs_exporter.ingest.feeds import (
    FeedError,
    FeedNotFoundError,
    GbfsFeed,
    count_vehicles,
    fetch_feed_url,
    fetch_json,
    fetch_vehicle_count,
    list_feeds,
    resolve_feed_url,
)
from gbfs_exporter.ingest.poller import (
    IngestSummary,
    ProviderResult,
    ingest_once,
    ingest_provider,
    run_poller,
)

__all__ = [
    # feeds
    "FeedError",
    "FeedNotFoundError",
    "GbfsFeed",
    "count_vehicles",
    "fetch_feed_url",
    "fetch_json",
    "fetch_vehicle_count",
    "list_feeds",
    "resolve_feed_url",
    # poller
    "IngestSummary",
    "ProviderResult",
    "ingest_once",
    "ingest_provider",
    "run_poller",
]
