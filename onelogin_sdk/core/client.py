"""Low-level HTTP executor for the OneLogin API.

Every resource service delegates here: one authenticated round trip per
call, with the outcome normalized into raw bytes or a typed error.
"""
from __future__ import annotations
import json
import logging
import socket
import threading
import time
from typing import Any, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

import requests
from pydantic import BaseModel

from .auth import TokenProvider
from .exceptions import APIError, NotFoundError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5
BODY_CHUNK_SIZE = 64 * 1024
USER_AGENT = "onelogin-sdk-python"
SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


class ResourceRepository:
    """Authenticated request executor shared by every resource service.

    The repository keeps no per-call state, so one instance can be used from
    many threads at once. The session's connection pool and the token
    provider are the only shared pieces.

    Usage:
        repo = ResourceRepository(token_provider, timeout=5)
        raw = repo.execute("GET", "https://api.us.onelogin.com/api/2/users", {"limit": "10"})
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()

    def execute(
        self,
        method: str,
        url: str,
        query_params: Optional[QueryParams] = None,
        body: Any = None,
    ) -> bytes:
        """Perform one authenticated HTTP round trip.

        Args:
            method: One of GET, POST, PUT, DELETE
            url: Absolute URL (base URL + resource path)
            query_params: Ordered query parameters appended to the URL
            body: JSON-serializable payload or pydantic model

        Returns:
            Raw response body on a 2xx status

        Raises:
            ValueError: Unsupported method
            TransportError: No response received (RequestTimeoutError on timeout)
            APIError: Non-2xx response
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        target = build_url(url, query_params)
        headers = {
            "Authorization": f"bearer {self.token_provider.get_token().value}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        data = None
        if body is not None:
            data = encode_body(body)
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, target)
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.session.request(
                method, target, data=data, headers=headers, timeout=self.timeout, stream=True
            )
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"no response within {self.timeout}s", target) from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc), target) from exc

        content = self._read_body(resp, deadline, target)
        logger.debug("%s %s -> %s", method, target, resp.status_code)
        if not 200 <= resp.status_code < 300:
            raise error_from_response(resp.status_code, content, target)
        return content

    def _read_body(self, resp: requests.Response, deadline: float, url: str) -> bytes:
        """Read the streamed body, giving up once the round-trip deadline passes.

        A timer shuts the connection down at the deadline, so a read blocked
        on a server that trickles bytes fails instead of waiting it out.
        """
        expired = threading.Event()

        def sever() -> None:
            expired.set()
            _shutdown_connection(resp)

        timer = threading.Timer(max(deadline - time.monotonic(), 0.0), sever)
        timer.daemon = True
        timer.start()
        chunks = []
        completed = False
        try:
            for chunk in resp.iter_content(BODY_CHUNK_SIZE):
                if expired.is_set():
                    break
                chunks.append(chunk)
            if expired.is_set() or time.monotonic() > deadline:
                raise RequestTimeoutError(f"no complete response within {self.timeout}s", url)
            completed = True
        except requests.RequestException as exc:
            if expired.is_set():
                raise RequestTimeoutError(f"no complete response within {self.timeout}s", url) from exc
            raise TransportError(str(exc), url) from exc
        finally:
            timer.cancel()
            if not completed:
                resp.close()
        return b"".join(chunks)

    def read(self, url: str, query_params: Optional[QueryParams] = None) -> bytes:
        """Execute GET request."""
        return self.execute("GET", url, query_params)

    def create(self, url: str, body: Any = None) -> bytes:
        """Execute POST request."""
        return self.execute("POST", url, body=body)

    def update(self, url: str, body: Any = None) -> bytes:
        """Execute PUT request."""
        return self.execute("PUT", url, body=body)

    def destroy(self, url: str, body: Any = None) -> bytes:
        """Execute DELETE request."""
        return self.execute("DELETE", url, body=body)


def _shutdown_connection(resp: requests.Response) -> None:
    # None once the body is fully read and the connection is back in the pool
    conn = getattr(resp.raw, "connection", None)
    sock = getattr(conn, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        logger.debug("Connection already closed at deadline")


def build_url(url: str, query_params: Optional[QueryParams] = None) -> str:
    """Append query parameters to the URL, keeping their order."""
    if not query_params:
        return url
    pairs = query_params.items() if isinstance(query_params, Mapping) else query_params
    encoded = urlencode([(key, _query_value(value)) for key, value in pairs if value is not None])
    if not encoded:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{encoded}"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def encode_body(body: Any) -> bytes:
    """Serialize a request payload to JSON bytes."""
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True, by_alias=True).encode("utf-8")
    if isinstance(body, (list, tuple)) and any(isinstance(item, BaseModel) for item in body):
        body = [
            item.model_dump(mode="json", exclude_none=True, by_alias=True) if isinstance(item, BaseModel) else item
            for item in body
        ]
    return json.dumps(body).encode("utf-8")


def error_from_response(status_code: int, content: bytes, url: str) -> APIError:
    """Decode an error body leniently into an APIError.

    Recognized shapes:
        {"statusCode": 400, "code": "...", "message": "..."}
        {"statusCode": 400, "name": "BadRequest", "message": "..."}
        {"status": {"error": true, "code": 400, "type": "...", "message": "..."}}

    Anything else keeps only the status and the raw body text.
    """
    text = content.decode("utf-8", errors="replace")
    error_cls = NotFoundError if status_code == 404 else APIError

    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        nested = payload.get("status")
        if isinstance(nested, dict):
            payload = nested
        message = payload.get("message")
        code = payload.get("code")
        if code is None:
            code = payload.get("name", payload.get("type"))
        if message is not None or code is not None:
            return error_cls(
                status_code,
                message=str(message) if message is not None else text,
                url=url,
                code=code,
                body=text,
            )

    return error_cls(status_code, message=text, url=url, body=text)
