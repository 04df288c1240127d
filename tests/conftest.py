"""Pytest configuration and fixtures."""

import asyncio
import json
from contextlib import asynccontextmanager

import httpx
import pytest

from storefront_edge.app.core.config import Settings
from storefront_edge.app.core.edge import EdgeRequest

GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
WHATSAPP_UA = "WhatsApp/2.23.20.0 A"
BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@pytest.fixture
def settings(tmp_path):
    """Fully configured settings pointing at fake upstreams."""
    return Settings(
        render_service_url="https://render.test",
        render_service_token="render-token",
        render_engine="prerender.io",
        store_url="https://store.test",
        store_key="anon-key",
        site_url="https://alsamah-store.com",
        site_name="Alsamah",
        debug_headers=True,
        spa_dist_dir=str(tmp_path / "dist"),
    )


@pytest.fixture
def make_request():
    """Build an EdgeRequest for a URL and user agent."""
    def _make(url="https://shop.test/", user_agent=GOOGLEBOT_UA, method="GET"):
        headers = {"User-Agent": user_agent} if user_agent is not None else {}
        return EdgeRequest(method=method, url=url, headers=headers)
    return _make


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def html_transport():
    """Rendering service that answers 200 with a fixed body."""
    return RecordingTransport(lambda request: httpx.Response(200, text="<html>OK</html>"))


@pytest.fixture
def store_transport_factory():
    """Data store returning the given rows (or raw body) for any query."""
    def _factory(rows=None, status_code=200, raw=None):
        def _handler(request):
            if raw is not None:
                return httpx.Response(status_code, content=raw.encode("utf-8"))
            return httpx.Response(status_code, json=rows if rows is not None else [])
        return RecordingTransport(_handler)
    return _factory


def raising_transport(exc):
    """Transport whose every request raises ``exc``."""
    def _handler(request):
        raise exc
    return RecordingTransport(_handler)


@pytest.fixture
def sofa_row():
    return {"title": "Sofa", "description": "Comfy", "image_url": "/img/1.jpg"}


@pytest.fixture
def sofa_payload(sofa_row):
    return json.dumps([sofa_row])


PROXY_VARIABLES = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")


@pytest.fixture
def no_proxy_env(monkeypatch):
    """Make sure real httpx clients connect to localhost directly."""
    for name in PROXY_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@asynccontextmanager
async def trickling_server(chunks=8, interval=0.5):
    """Local HTTP server that dribbles a chunked body one byte at a time.

    Each chunk arrives well inside an httpx per-read timeout, so only a
    deadline on the whole exchange can cut the response short.
    Yields the server's base URL.
    """
    connections = set()

    async def _serve(reader, writer):
        connections.add(asyncio.current_task())
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: text/html\r\n"
                b"Transfer-Encoding: chunked\r\n"
                b"Connection: close\r\n\r\n"
            )
            await writer.drain()
            for _ in range(chunks):
                await asyncio.sleep(interval)
                writer.write(b"1\r\nx\r\n")
                await writer.drain()
            writer.write(b"0\r\n\r\n")
            await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(_serve, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        for task in connections:
            task.cancel()
        await asyncio.gather(*connections, return_exceptions=True)
        server.close()
        await server.wait_closed()
