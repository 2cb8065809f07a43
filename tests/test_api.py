from fastapi.testclient import TestClient
import pytest

import api.app as api_app
from gbfs_exporter.config import Provider, Settings
from gbfs_exporter.ingest.poller import IngestSummary, ProviderResult
from gbfs_exporter.monitoring.metrics import record_provider


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(Settings, "api_background_ingest", False)
    with TestClient(api_app.app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_exposes_gauges(client):
    record_provider(Provider(location="api-test", url="https://example.com/gbfs.json"), 9)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert (
        'available_bikes{location="api-test",url="https://example.com/gbfs.json"} 9.0'
        in response.text
    )
    assert "total_available_bikes" in response.text


def test_manual_ingest(client, monkeypatch):
    calls = []

    async def fake_ingest_once(session=None, lock=None):
        calls.append(lock)
        provider = Provider(location="manual", url="https://example.com/gbfs.json")
        return IngestSummary(
            results=[ProviderResult(provider=provider, vehicles=4)],
            total_vehicles=4,
        )

    monkeypatch.setattr(api_app, "ingest_once", fake_ingest_once)
    response = client.post("/ingest")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Manual ingestion complete"
    assert body["providers"] == 1
    assert body["total_vehicles"] == 4
    assert body["results"][0]["location"] == "manual"
    assert calls == [api_app.app.state.ingest_lock]


def test_providers_listing(client, clean_env):
    response = client.get("/providers")
    assert response.json()["count"] == 0
    assert "error" in response.json()

    clean_env.setenv("provider1_region", "lisbon")
    clean_env.setenv("provider1_url", "https://example.com/lisbon/gbfs.json")
    response = client.get("/providers")
    assert response.json() == {
        "count": 1,
        "providers": [{"location": "lisbon", "url": "https://example.com/lisbon/gbfs.json"}],
    }
