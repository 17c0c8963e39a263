"""
sixpack_sdk test configuration.

Most tests talk to an httpx.MockTransport; the stub_server fixture runs a
real local HTTP server for timeout and status-code behaviour. No external
services required.
"""
from __future__ import annotations

import json
import os
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import httpx
import pytest

# ── Test environment ───────────────────────────────────────────────────────
# These must be set before any sixpack_sdk modules are imported.

os.environ.setdefault("SIXPACK_LOG_FORMAT", "console")
os.environ.setdefault("SIXPACK_LOG_LEVEL", "WARNING")

_SIXPACK_ENV = ("SIXPACK_BASE_URL", "SIXPACK_TIMEOUT", "SIXPACK_IP_ADDRESS", "SIXPACK_USER_AGENT")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """
    Each test starts from the built-in defaults with no SIXPACK_* connection
    settings leaking in from the shell, and a fresh config cache.
    """
    from sixpack_sdk.tier0_core.config import _reset_config

    for name in _SIXPACK_ENV:
        monkeypatch.delenv(name, raising=False)
    _reset_config()
    yield
    _reset_config()


@pytest.fixture(autouse=True, scope="session")
def shutdown_background_pool():
    """Join worker threads left by the callback-style tests."""
    yield
    from sixpack_sdk.tier3_platform.session import _reset_executor

    _reset_executor()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with a canned response and records requests."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
        exc: Exception | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        super().__init__(handler)


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport


class StubSixpackServer:
    """
    Threaded local HTTP server. Configure the next responses with
    respond(); every request path (with query) is kept in ``paths``.
    """

    def __init__(self) -> None:
        self.status_code = 200
        self.body = json.dumps({"status": "ok"})
        self.delay = 0.0
        self.drip = 0.0
        self.paths: list[str] = []
        stub = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                stub.paths.append(self.path)
                if stub.delay:
                    time.sleep(stub.delay)
                payload = stub.body.encode()
                try:
                    self.send_response(stub.status_code)
                    self.send_header("Content-Type", "application/json")
                    self.send_header("Content-Length", str(len(payload)))
                    self.end_headers()
                    if stub.drip:
                        for i in range(len(payload)):
                            self.wfile.write(payload[i:i + 1])
                            self.wfile.flush()
                            time.sleep(stub.drip)
                    else:
                        self.wfile.write(payload)
                except (BrokenPipeError, ConnectionResetError):
                    # client gave up after its timeout
                    pass

            def log_message(self, format: str, *args: Any) -> None:
                pass

        self._server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self._server.daemon_threads = True
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def base_url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def respond(
        self,
        status_code: int = 200,
        body: Any = None,
        delay: float = 0.0,
        drip: float = 0.0,
    ) -> None:
        """
        ``delay`` sleeps before the headers; ``drip`` sends the body one
        byte at a time with that many seconds between bytes.
        """
        self.status_code = status_code
        self.body = body if isinstance(body, str) else json.dumps(body)
        self.delay = delay
        self.drip = drip

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def stub_server():
    """A running StubSixpackServer, shut down after the test."""
    server = StubSixpackServer()
    server.start()
    yield server
    server.stop()
