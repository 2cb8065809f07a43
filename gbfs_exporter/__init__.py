"""GBFS exporter package."""

# Config
from gbfs_exporter.config import (
    ConfigError,
    NoProvidersError,
    Provider,
    Settings,
    load_providers,
)

# Ingest
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

# Monitoring
from gbfs_exporter.monitoring.metrics import (
    AVAILABLE_BIKES,
    PROVIDER_UP,
    TOTAL_AVAILABLE_BIKES,
    record_provider,
    record_provider_failure,
    record_run,
    record_total,
)
from gbfs_exporter.monitoring.metrics_server import run_metrics_server

__all__ = [
    # Config
    "ConfigError",
    "NoProvidersError",
    "Provider",
    "Settings",
    "load_providers",
    # Ingest - feeds
    "FeedError",
    "FeedNotFoundError",
    "GbfsFeed",
    "count_vehicles",
    "fetch_feed_url",
    "fetch_json",
    "fetch_vehicle_count",
    "list_feeds",
    "resolve_feed_url",
    # Ingest - poller
    "IngestSummary",
    "ProviderResult",
    "ingest_once",
    "ingest_provider",
    "run_poller",
    # Monitoring - metrics
    "AVAILABLE_BIKES",
    "PROVIDER_UP",
    "TOTAL_AVAILABLE_BIKES",
    "record_provider",
    "record_provider_failure",
    "record_run",
    "record_total",
    # Monitoring - server
    "run_metrics_server",
]
