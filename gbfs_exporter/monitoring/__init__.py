"""Monitoring subpackage: observability components."""

from gbfs_exporter.monitoring.metrics import (
    AVAILABLE_BIKES,
    INGEST_DURATION_S,
    INGEST_ERRORS,
    INGEST_RUNS,
    LAST_SUCCESS_TS,
    PROVIDER_UP,
    TOTAL_AVAILABLE_BIKES,
    record_provider,
    record_provider_failure,
    record_run,
    record_total,
)
from gbfs_exporter.monitoring.logging_utils import (
    get_event_logger,
    get_failure_logger,
    get_logger,
    log_event,
    log_failure,
)

__all__ = [
    # metrics
    "AVAILABLE_BIKES",
    "INGEST_DURATION_S",
    "INGEST_ERRORS",
    "INGEST_RUNS",
    "LAST_SUCCESS_TS",
    "PROVIDER_UP",
    "TOTAL_AVAILABLE_BIKES",
    "record_provider",
    "record_provider_failure",
    "record_run",
    "record_total",
    # logging
    "get_event_logger",
    "get_failure_logger",
    "get_logger",
    "log_event",
    "log_failure",
]
