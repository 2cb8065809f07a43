import asyncio
import contextlib

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from gbfs_exporter.config import NoProvidersError, Settings, load_providers
from gbfs_exporter.ingest.poller import ingest_once, run_poller
from gbfs_exporter.monitoring.logging_utils import get_event_logger


app = FastAPI()
log_event = get_event_logger("api")


@app.on_event("startup")
async def startup() -> None:
    app.state.ingest_lock = asyncio.Lock()
    app.state.stop_event = asyncio.Event()
    app.state.poller_task = None
    if Settings.api_background_ingest:
        app.state.poller_task = asyncio.create_task(
            run_poller(stop_event=app.state.stop_event, lock=app.state.ingest_lock)
        )
    log_event("startup", background_ingest=Settings.api_background_ingest)


@app.on_event("shutdown")
async def shutdown() -> None:
    app.state.stop_event.set()
    task = getattr(app.state, "poller_task", None)
    if task is None:
        return
    try:
        await asyncio.wait_for(task, timeout=Settings.request_timeout_s)
    except asyncio.TimeoutError:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.post("/ingest")
async def ingest() -> dict:
    summary = await ingest_once(lock=app.state.ingest_lock)
    return {
        "status": "ok",
        "message": "Manual ingestion complete",
        **summary.as_dict(),
    }


@app.get("/providers")
async def providers() -> dict:
    try:
        configured = load_providers()
    except NoProvidersError as exc:
        return {"count": 0, "providers": [], "error": str(exc)}
    return {
        "count": len(configured),
        "providers": [provider.__dict__ for provider in configured],
    }
