import asyncio
import os
import re

from aiohttp import web
from aiohttp.test_utils import TestServer
import pytest
import pytest_asyncio


PROVIDER_ENV = re.compile(r"^provider\d+_(region|url)$")


def discovery_doc(
    status_url: str, feed_name: str = "free_bike_status", language: str = "en"
) -> dict:
    base_url = status_url.rsplit("/", 1)[0]
    return {
        "last_updated": 1700000000,
        "ttl": 60,
        "data": {
            language: {
                "feeds": [
                    {"name": "system_information", "url": f"{base_url}/system_information.json"},
                    {"name": feed_name, "url": status_url},
                ]
            }
        },
    }


def status_doc(bikes: int) -> dict:
    return {
        "last_updated": 1700000000,
        "ttl": 60,
        "data": {"bikes": [{"bike_id": f"bike-{i}"} for i in range(bikes)]},
    }


class FeedServer:
    """In-process HTTP server that serves canned GBFS documents by path."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, object]] = {}
        self.hits: list[str] = []
        self.delays: dict[str, float] = {}
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        self.server = TestServer(app)

    async def _handle(self, request: web.Request) -> web.Response:
        self.hits.append(request.path)
        if request.path in self.delays:
            await asyncio.sleep(self.delays[request.path])
        status, body = self.routes.get(request.path, (404, {"error": "not found"}))
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))

    def add_provider(self, name: str, bikes: int) -> str:
        discovery_path = f"/{name}/gbfs.json"
        status_path = f"/{name}/free_bike_status.json"
        self.routes[discovery_path] = (200, discovery_doc(self.url(status_path)))
        self.routes[status_path] = (200, status_doc(bikes))
        return self.url(discovery_path)

    def set_route(self, path: str, status: int, body: object) -> None:
        self.routes[path] = (status, body)


@pytest_asyncio.fixture
async def feed_server():
    server = FeedServer()
    await server.server.start_server()
    try:
        yield server
    finally:
        await server.server.close()


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(os.environ):
        if PROVIDER_ENV.match(key):
            monkeypatch.delenv(key)
    return monkeypatch
