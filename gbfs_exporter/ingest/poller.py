import asyncio
import contextlib
from dataclasses import dataclass, field
import time
from typing import Any

import aiohttp

from gbfs_exporter.config import NoProvidersError, Provider, Settings, load_providers
from gbfs_exporter.ingest.feeds import FeedError, fetch_feed_url, fetch_vehicle_count
from gbfs_exporter.monitoring.logging_utils import get_event_logger, get_failure_logger
from gbfs_exporter.monitoring.metrics import (
    record_provider,
    record_provider_failure,
    record_run,
    record_total,
)

log_event = get_event_logger("poller")
log_failure = get_failure_logger("poller")

STAGE_DISCOVERY = "discovery"
STAGE_STATUS = "status"


@dataclass
class ProviderResult:
    provider: Provider
    status_url: str | None = None
    vehicles: int | None = None
    error: str | None = None
    stage: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict[str, Any]:
        return {
            "location": self.provider.location,
            "url": self.provider.url,
            "status_url": self.status_url,
            "vehicles": self.vehicles,
            "error": self.error,
            "stage": self.stage,
        }


@dataclass
class IngestSummary:
    results: list[ProviderResult] = field(default_factory=list)
    total_vehicles: int = 0
    duration_s: float = 0.0
    started_at: float = 0.0
    error: str | None = None

    @property
    def provider_count(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        return self.provider_count - self.succeeded

    def as_dict(self) -> dict[str, Any]:
        return {
            "providers": self.provider_count,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "total_vehicles": self.total_vehicles,
            "duration_s": round(self.duration_s, 3),
            "started_at": self.started_at,
            "error": self.error,
            "results": [result.as_dict() for result in self.results],
        }


def _client_session() -> aiohttp.ClientSession:
    return aiohttp.ClientSession(headers={"User-Agent": Settings.user_agent})


async def ingest_provider(
    session: aiohttp.ClientSession, provider: Provider
) -> ProviderResult:
    result = ProviderResult(provider=provider)

    # Locate the vehicle status feed from gbfs.json
    try:
        result.status_url = await fetch_feed_url(session, provider.url)
    except FeedError as exc:
        result.error, result.stage = str(exc), STAGE_DISCOVERY
        log_failure("fail", exc, location=provider.location, stage=result.stage)
        record_provider_failure(provider, result.stage)
        return result

    # Count vehicles in the status feed
    try:
        result.vehicles = await fetch_vehicle_count(session, result.status_url)
    except FeedError as exc:
        result.error, result.stage = str(exc), STAGE_STATUS
        log_failure("fail", exc, location=provider.location, stage=result.stage)
        record_provider_failure(provider, result.stage)
        return result

    record_provider(provider, result.vehicles)
    log_event("provider", location=provider.location, vehicles=result.vehicles)
    return result


async def _ingest(session: aiohttp.ClientSession) -> IngestSummary:
    summary = IngestSummary(started_at=time.time())
    started = time.perf_counter()
    try:
        providers = load_providers()
    except NoProvidersError as exc:
        summary.error = str(exc)
        log_failure("config", exc)
        return summary

    for provider in providers:
        result = await ingest_provider(session, provider)
        summary.results.append(result)
        if result.ok and result.vehicles is not None:
            summary.total_vehicles += result.vehicles

    record_total(summary.total_vehicles)
    summary.duration_s = time.perf_counter() - started
    record_run(summary.duration_s, summary.succeeded)
    log_event(
        "ingested",
        providers=summary.provider_count,
        failed=summary.failed,
        total=summary.total_vehicles,
        duration_s=round(summary.duration_s, 3),
    )
    return summary


async def ingest_once(
    session: aiohttp.ClientSession | None = None,
    lock: asyncio.Lock | None = None,
) -> IngestSummary:
    """
    Runs one ingestion cycle over every configured provider.

    Providers are re-read from the environment on each call. A provider that
    fails is logged and skipped; its last published count is left in place.
    """
    async with contextlib.AsyncExitStack() as stack:
        if lock is not None:
            await stack.enter_async_context(lock)
        if session is None:
            session = await stack.enter_async_context(_client_session())
        return await _ingest(session)


async def run_poller(
    interval_s: float | None = None,
    stop_event: asyncio.Event | None = None,
    lock: asyncio.Lock | None = None,
) -> None:
    interval_s = Settings.ingest_interval_s if interval_s is None else interval_s
    stop_event = stop_event or asyncio.Event()
    log_event("poller", interval_s=interval_s)
    async with _client_session() as session:
        while not stop_event.is_set():
            try:
                await ingest_once(session, lock=lock)
            except Exception as exc:
                log_failure("cycle_fail", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval_s)
            except asyncio.TimeoutError:
                continue
    log_event("poller", stopped=True)
