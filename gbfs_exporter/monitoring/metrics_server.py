import asyncio

from prometheus_client import start_http_server

from gbfs_exporter.config import Settings
from gbfs_exporter.ingest.poller import run_poller
from gbfs_exporter.monitoring.logging_utils import get_event_logger

log_event = get_event_logger("metrics")


def run_metrics_server() -> None:
    start_http_server(Settings.metrics_port)
    log_event("listen", port=Settings.metrics_port)
    asyncio.run(run_poller())
