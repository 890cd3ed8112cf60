"""
Pytest fixtures for bridge tests.
"""

import io
import json
import sys
import tempfile
import threading
import time
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stdio_bridge.bridge.output import OutputWriter  # noqa: E402
from stdio_bridge.bridge.session import SessionTracker  # noqa: E402
from stdio_bridge.bridge.transport import UpstreamResponse  # noqa: E402
from stdio_bridge.configs import BridgeConfig  # noqa: E402

BRIDGE_ENV_VARS = (
    "BRIDGE_DEBUG",
    "BRIDGE_LOG_FILE",
    "BRIDGE_REQUEST_TIMEOUT",
    "BRIDGE_SESSION_HEADER",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path) -> Path:
    """Keep user config and BRIDGE_* variables out of every test."""
    for name in BRIDGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    data_path = tmp_path / "bridge_data"
    monkeypatch.setenv("BRIDGE_DATA_PATH", str(data_path))
    # Local test upstreams must not go through a proxy
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    return data_path


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bridge_config() -> BridgeConfig:
    return BridgeConfig(url="http://upstream.test/mcp")


@pytest.fixture
def stdout_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def output(stdout_buffer: io.StringIO) -> OutputWriter:
    return OutputWriter(stdout_buffer)


# =============================================================================
# Upstream replies
# =============================================================================


def json_reply(payload, status_code: int = 200, session_id: str | None = None) -> UpstreamResponse:
    return UpstreamResponse(
        status_code=status_code,
        content_type="application/json",
        body=json.dumps(payload),
        session_id=session_id,
    )


def sse_reply(body: str, status_code: int = 200) -> UpstreamResponse:
    return UpstreamResponse(
        status_code=status_code,
        content_type="text/event-stream",
        body=body,
    )


def empty_reply(status_code: int = 202) -> UpstreamResponse:
    return UpstreamResponse(status_code=status_code, content_type="", body="")


class FakeTransport:
    """
    Stand-in for TransportClient.

    Replies are consumed in order; an exception instance is raised instead of
    returned. A callable reply is called with the envelope.
    Tracks how many sends overlap to prove dispatch is sequential.
    """

    def __init__(self, replies=None, delay: float = 0.0):
        self.session = SessionTracker()
        self.replies = list(replies or [])
        self.delay = delay
        self.sent: list = []
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def send(self, envelope):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.sent.append(envelope)
        try:
            if self.delay:
                time.sleep(self.delay)
            reply = self.replies.pop(0)
            if callable(reply):
                reply = reply(envelope)
            if isinstance(reply, BaseException):
                raise reply
            return reply
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self):
        self.closed = True


def echo_reply(envelope) -> UpstreamResponse:
    """Reply echoing the request method as the result."""
    return json_reply({"jsonrpc": "2.0", "id": envelope.get("id"), "result": envelope.get("method")})


def make_http_response(
    body: bytes | str = b"",
    content_type: str | None = "application/json",
    status_code: int = 200,
    session_id: str | None = None,
) -> MagicMock:
    """Mock of a requests.Response as returned by Session.post."""
    headers = CaseInsensitiveDict()
    if content_type is not None:
        headers["Content-Type"] = content_type
    if session_id is not None:
        headers["Mcp-Session-Id"] = session_id
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers
    response.content = body.encode("utf-8") if isinstance(body, str) else body
    return response


@pytest.fixture
def mock_http() -> MagicMock:
    """A mocked requests.Session."""
    return MagicMock(spec=requests.Session)


def output_lines(buffer: io.StringIO) -> list[dict]:
    """Parse every line written to the output buffer."""
    return [json.loads(line) for line in buffer.getvalue().splitlines()]


# =============================================================================
# Local upstream server
# =============================================================================


class UpstreamHandler(BaseHTTPRequestHandler):
    """
    Minimal MCP-style upstream.

    - initialize: SSE reply, issues session S1
    - notifications: 202 with empty body
    - rotate: JSON reply, issues session S2
    - anything else: SSE reply echoing the method
    """

    def do_POST(self):
        length = int(self.headers.get("content-length", 0))
        request = json.loads(self.rfile.read(length))
        self.server.received.append(
            {"request": request, "session_id": self.headers.get("mcp-session-id")}
        )

        if "id" not in request:
            self.send_response(202)
            self.send_header("content-length", "0")
            self.end_headers()
            return

        method = request.get("method")
        reply = {"jsonrpc": "2.0", "id": request["id"], "result": {"method": method}}

        if method == "rotate":
            body = json.dumps(reply).encode("utf-8")
            content_type = "application/json"
        else:
            body = f"event: message\ndata: {json.dumps(reply)}\n\n".encode("utf-8")
            content_type = "text/event-stream"

        self.send_response(200)
        self.send_header("content-type", content_type)
        if method == "initialize":
            self.send_header("mcp-session-id", "S1")
        elif method == "rotate":
            self.send_header("mcp-session-id", "S2")
        self.send_header("content-length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def upstream_server() -> Generator[HTTPServer, None, None]:
    """Run UpstreamHandler on a random local port."""
    server = HTTPServer(("127.0.0.1", 0), UpstreamHandler)
    server.received = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def upstream_url(upstream_server: HTTPServer) -> str:
    host, port = upstream_server.server_address[:2]
    return f"http://{host}:{port}/mcp"
