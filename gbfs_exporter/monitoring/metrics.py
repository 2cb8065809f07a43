import time

from prometheus_client import Counter, Gauge, Histogram

from gbfs_exporter.config import Provider


AVAILABLE_BIKES = Gauge(
    "available_bikes",
    "Number of bikes available from providers",
    ["location", "url"],
)
TOTAL_AVAILABLE_BIKES = Gauge(
    "total_available_bikes",
    "Total number of bikes available across all providers",
)
PROVIDER_UP = Gauge(
    "gbfs_provider_up",
    "Whether the last fetch of a provider's feeds succeeded",
    ["location", "url"],
)
INGEST_ERRORS = Counter(
    "gbfs_ingest_errors_total",
    "Failed provider fetches by stage",
    ["location", "stage"],
)
INGEST_RUNS = Counter("gbfs_ingest_runs_total", "Total ingestion cycles run")
INGEST_DURATION_S = Histogram(
    "gbfs_ingest_duration_seconds",
    "Duration of one ingestion cycle in seconds",
    buckets=(0.1, 0.25, 0.5, 1, 2.5, 5, 10, 20, 30, 60),
)
LAST_SUCCESS_TS = Gauge(
    "gbfs_ingest_last_success_timestamp_seconds",
    "Unix time of the last cycle with at least one successful provider",
)


def record_provider(provider: Provider, vehicles: int) -> None:
    AVAILABLE_BIKES.labels(location=provider.location, url=provider.url).set(vehicles)
    PROVIDER_UP.labels(location=provider.location, url=provider.url).set(1)


def record_provider_failure(provider: Provider, stage: str) -> None:
    PROVIDER_UP.labels(location=provider.location, url=provider.url).set(0)
    INGEST_ERRORS.labels(location=provider.location, stage=stage).inc()


def record_total(total: int) -> None:
    TOTAL_AVAILABLE_BIKES.set(total)


def record_run(duration_s: float, succeeded: int) -> None:
    INGEST_RUNS.inc()
    INGEST_DURATION_S.observe(duration_s)
    if succeeded:
        LAST_SUCCESS_TS.set(time.time())
