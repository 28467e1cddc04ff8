"""Request ID and timeout middleware (raw ASGI)."""

import asyncio
import logging

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from scaling_reads.middleware import RequestIDMiddleware, TimeoutMiddleware
from scaling_reads.middleware.request_id import sanitize_request_id
from scaling_reads.shared.context import get_request_id
from scaling_reads.shared.telemetry.logging import RequestIDFilter


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/rid")
    async def rid():
        return {"request_id": get_request_id()}

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(5)
        return {"ok": True}

    app.add_middleware(RequestIDMiddleware, header_name="X-Request-ID")
    app.add_middleware(TimeoutMiddleware, timeout_seconds=0.05)
    return app


def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_request_id_generated_and_visible_in_context() -> None:
    async with _client(_app()) as ac:
        response = await ac.get("/rid")
    request_id = response.headers["X-Request-ID"]
    assert len(request_id) == 36
    assert response.json() == {"request_id": request_id}
    assert get_request_id() is None


async def test_client_request_id_forwarded() -> None:
    async with _client(_app()) as ac:
        response = await ac.get("/rid", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_sanitize_request_id() -> None:
    assert sanitize_request_id(" abc_1 ") == "abc_1"
    assert sanitize_request_id("bad\nvalue") != "bad\nvalue"
    assert len(sanitize_request_id("x" * 65)) == 36
    assert len(sanitize_request_id(None)) == 36


async def test_timeout_returns_504() -> None:
    async with _client(_app()) as ac:
        response = await ac.get("/slow")
    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"


def test_log_filter_adds_request_id() -> None:
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "-"
