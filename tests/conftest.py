"""Pytest shared fixtures for OneLogin SDK tests."""
import pathlib
import sys
import threading
from dataclasses import dataclass
from email.message import Message
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, List, Tuple
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from onelogin_sdk.core.auth import StaticTokenProvider
from onelogin_sdk.core.client import ResourceRepository


# ─────────────────────────────────────────────────────────────────────────────
# Local API stand-in
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Message
    body: bytes


Responder = Callable[[RecordedRequest], Tuple[int, bytes]]


def echo_responder(req: RecordedRequest) -> Tuple[int, bytes]:
    return 200, req.body or b"{}"


class _Handler(BaseHTTPRequestHandler):
    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        req = RecordedRequest(self.command, self.path, self.headers, body)
        self.server.record(req)
        status, payload = self.server.responder(req)
        try:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)
        except (BrokenPipeError, ConnectionResetError):
            # Client gave up (timeout tests)
            pass

    do_GET = do_POST = do_PUT = do_DELETE = _handle

    def log_message(self, format, *args):
        pass


class FakeAPIServer(ThreadingHTTPServer):
    daemon_threads = True
    request_queue_size = 128

    def __init__(self):
        super().__init__(("127.0.0.1", 0), _Handler)
        self.responder: Responder = echo_responder
        self.requests: List[RecordedRequest] = []
        self._lock = threading.Lock()

    def record(self, req: RecordedRequest) -> None:
        with self._lock:
            self.requests.append(req)

    @property
    def base_url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


@pytest.fixture
def api_server():
    """Threaded HTTP server on an ephemeral port; set ``.responder`` per test."""
    server = FakeAPIServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def http_session():
    session = requests.Session()
    # Keep proxy settings from the environment away from 127.0.0.1
    session.trust_env = False
    yield session
    session.close()


@pytest.fixture
def repository(http_session):
    """Executor with a fixed bearer token and a 1 second timeout."""
    return ResourceRepository(StaticTokenProvider("test-token"), timeout=1, session=http_session)


@pytest.fixture
def mock_repo():
    """Repository double for service tests; configure read/create/update/destroy per test."""
    repo = MagicMock(spec=ResourceRepository)
    repo.read.return_value = b"[]"
    repo.create.return_value = b"{}"
    repo.update.return_value = b"{}"
    repo.destroy.return_value = b""
    return repo


