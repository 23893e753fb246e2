"""Tests for the shared request executor (ResourceRepository.execute).

Runs against a local threaded HTTP server so encoding, headers, error
decoding, timeouts and concurrent use are exercised over real sockets.
"""
import json
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import urlsplit

import pytest

from onelogin_sdk.core.client import build_url, error_from_response
from onelogin_sdk.core.exceptions import (
    APIError,
    NotFoundError,
    RequestTimeoutError,
    TransportError,
)
from onelogin_sdk.core.models import User
from onelogin_sdk.core.resource import decode_many, decode_one


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
def test_query_params_encoded_in_given_order(api_server, repository, method):
    api_server.responder = lambda req: (200, b"{}")
    params = [("limit", "10"), ("b", "x y"), ("a", "1&2"), ("cursor", "abc=")]

    repository.execute(method, f"{api_server.base_url}/api/2/users", params)

    req = api_server.requests[-1]
    assert req.method == method
    assert req.path == "/api/2/users?limit=10&b=x+y&a=1%262&cursor=abc%3D"


def test_dict_params_keep_insertion_order(api_server, repository):
    api_server.responder = lambda req: (200, b"[]")
    repository.execute("GET", f"{api_server.base_url}/api/2/apps", {"z": "1", "a": "2", "m": "3"})
    assert urlsplit(api_server.requests[-1].path).query == "z=1&a=2&m=3"


def test_bearer_token_attached(api_server, repository):
    api_server.responder = lambda req: (200, b"{}")
    repository.execute("GET", f"{api_server.base_url}/api/2/roles")

    headers = api_server.requests[-1].headers
    assert headers.get("Authorization") == "bearer test-token"
    assert headers.get("Accept") == "application/json"


def test_json_body_sent_with_content_type(api_server, repository):
    repository.execute("POST", f"{api_server.base_url}/api/2/roles", body={"name": "admins"})

    req = api_server.requests[-1]
    assert req.headers.get("Content-Type") == "application/json"
    assert json.loads(req.body) == {"name": "admins"}


def test_no_body_means_no_content_type(api_server, repository):
    api_server.responder = lambda req: (204, b"")
    assert repository.execute("DELETE", f"{api_server.base_url}/api/2/roles/1") == b""
    assert api_server.requests[-1].headers.get("Content-Type") is None


def test_model_body_drops_unset_fields(api_server, repository):
    repository.execute("PUT", f"{api_server.base_url}/api/2/users/7", body=User(firstname="Alice"))
    assert json.loads(api_server.requests[-1].body) == {"firstname": "Alice"}


def test_success_returns_raw_bytes(api_server, repository):
    api_server.responder = lambda req: (201, b'{"id": 99}')
    raw = repository.execute("POST", f"{api_server.base_url}/api/2/apps", body={"name": "x"})
    assert raw == b'{"id": 99}'


def test_unsupported_method_rejected_before_io(api_server, repository):
    with pytest.raises(ValueError):
        repository.execute("PATCH", f"{api_server.base_url}/api/2/users")
    assert api_server.requests == []


def test_structured_error_decoded(api_server, repository):
    body = {"statusCode": 422, "code": "invalid_email", "message": "Email is invalid"}
    api_server.responder = lambda req: (422, json.dumps(body).encode())

    with pytest.raises(APIError) as excinfo:
        repository.execute("POST", f"{api_server.base_url}/api/2/users", body={"email": "nope"})

    err = excinfo.value
    assert err.status_code == 422
    assert err.code == "invalid_email"
    assert err.message == "Email is invalid"
    assert not err.is_retryable


def test_v1_status_envelope_error_decoded(api_server, repository):
    body = {"status": {"error": True, "code": 400, "type": "bad request", "message": "Missing subdomain"}}
    api_server.responder = lambda req: (400, json.dumps(body).encode())

    with pytest.raises(APIError) as excinfo:
        repository.execute("POST", f"{api_server.base_url}/api/1/login/auth", body={})

    assert excinfo.value.code == 400
    assert excinfo.value.message == "Missing subdomain"


def test_unparseable_error_keeps_status_and_text(api_server, repository):
    api_server.responder = lambda req: (502, b"<html>Bad Gateway</html>")

    with pytest.raises(APIError) as excinfo:
        repository.execute("GET", f"{api_server.base_url}/api/2/apps")

    err = excinfo.value
    assert err.status_code == 502
    assert err.code is None
    assert err.message == "<html>Bad Gateway</html>"
    assert err.is_retryable


def test_not_found_has_own_type(api_server, repository):
    api_server.responder = lambda req: (404, b'{"statusCode": 404, "name": "NotFound", "message": "no such user"}')

    with pytest.raises(NotFoundError) as excinfo:
        repository.execute("GET", f"{api_server.base_url}/api/2/users/1")

    assert isinstance(excinfo.value, APIError)
    assert excinfo.value.code == "NotFound"


def test_connection_refused_is_transport_error(repository):
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()

    with pytest.raises(TransportError) as excinfo:
        repository.execute("GET", f"http://127.0.0.1:{port}/api/2/users")

    assert not isinstance(excinfo.value, RequestTimeoutError)
    assert not isinstance(excinfo.value, APIError)


def test_timeout_surfaces_within_bound(api_server, repository):
    def slow(req):
        time.sleep(3)
        return 200, b"{}"

    api_server.responder = slow

    started = time.monotonic()
    with pytest.raises(RequestTimeoutError):
        repository.execute("GET", f"{api_server.base_url}/api/2/users")
    elapsed = time.monotonic() - started

    assert elapsed < 2.5


@pytest.fixture
def trickling_server():
    """Raw socket server: sends headers at once, then one body byte every 0.6s."""
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    stop = threading.Event()

    def serve():
        conn, _ = listener.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                b"Content-Length: 8\r\n\r\n"
            )
            for byte in b'"abcdef"':
                if stop.wait(0.6):
                    return
                try:
                    conn.sendall(bytes([byte]))
                except OSError:
                    return

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{port}"
    stop.set()
    listener.close()
    thread.join(timeout=2)


def test_timeout_covers_slow_body(trickling_server, repository):
    started = time.monotonic()
    with pytest.raises(RequestTimeoutError):
        repository.execute("GET", f"{trickling_server}/api/2/users")
    elapsed = time.monotonic() - started

    assert elapsed < 2.5


def test_parallel_callers_get_their_own_responses(api_server, repository):
    def respond_with_path(req):
        return 200, json.dumps({"path": req.path, "thread": threading.get_ident()}).encode()

    api_server.responder = respond_with_path

    def call(i):
        raw = repository.execute("GET", f"{api_server.base_url}/api/2/users/{i}", [("n", str(i))])
        return i, json.loads(raw)["path"]

    with ThreadPoolExecutor(max_workers=50) as pool:
        results = list(pool.map(call, range(50)))

    assert len(results) == 50
    for i, path in results:
        assert path == f"/api/2/users/{i}?n={i}"


def test_echoed_body_round_trips(api_server, repository):
    original = User(
        username="alice",
        email="alice@example.com",
        role_ids=[1, 2],
        custom_attributes={"team": "blue"},
        nickname="al",
    )

    raw = repository.execute("POST", f"{api_server.base_url}/api/2/users", body=original)

    assert decode_one(User, raw) == original


def test_list_users_example(api_server, repository):
    api_server.responder = lambda req: (200, b'[{"id":1,"username":"a"}]')

    raw = repository.execute("GET", f"{api_server.base_url}/api/2/users", {"limit": "10"})
    users = decode_many(User, raw)

    assert api_server.requests[-1].path == "/api/2/users?limit=10"
    assert len(users) == 1
    assert users[0].id == 1
    assert users[0].username == "a"


def test_verb_helpers_map_to_methods(api_server, repository):
    api_server.responder = lambda req: (200, b"{}")
    url = f"{api_server.base_url}/api/2/roles"
    repository.read(url)
    repository.create(url, {"name": "a"})
    repository.update(url, {"name": "b"})
    repository.destroy(url)
    assert [r.method for r in api_server.requests] == ["GET", "POST", "PUT", "DELETE"]


class TestBuildUrl:
    def test_no_params(self):
        assert build_url("https://x/api") == "https://x/api"

    def test_none_values_skipped(self):
        assert build_url("https://x/api", [("a", None), ("b", "1")]) == "https://x/api?b=1"

    def test_existing_query_extended(self):
        assert build_url("https://x/api?a=1", {"b": "2"}) == "https://x/api?a=1&b=2"

    def test_bool_and_list_values(self):
        assert build_url("https://x/api", {"enabled": True, "ids": [1, 2]}) == "https://x/api?enabled=true&ids=1%2C2"


class TestErrorFromResponse:
    def test_missing_fields_are_absent(self):
        err = error_from_response(400, b'{"message": "bad"}', "https://x")
        assert err.code is None
        assert err.message == "bad"

    def test_empty_body(self):
        err = error_from_response(500, b"", "https://x")
        assert err.status_code == 500
        assert err.message == ""

    def test_json_array_body_falls_back_to_text(self):
        err = error_from_response(400, b"[1, 2]", "https://x")
        assert err.code is None
        assert err.message == "[1, 2]"
