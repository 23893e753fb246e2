"""Access token acquisition for the OneLogin API.

The executor only needs something that hands out a bearer token; the
client-credentials flow below is the default, and a static provider is
available for pre-obtained tokens.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

import requests

from .exceptions import AuthenticationError, DecodeError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/auth/oauth2/v2/token"
REFRESH_MARGIN = timedelta(seconds=10)


@dataclass(frozen=True)
class AccessToken:
    """Opaque bearer token and the instant it stops being valid."""
    value: str
    expires_at: datetime

    def expires_within(self, margin: timedelta) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at - margin


class TokenProvider(Protocol):
    """Anything able to hand out the current access token."""

    def get_token(self) -> AccessToken:
        ...


class StaticTokenProvider:
    """Serve a pre-obtained token.

    Useful for tests and for callers that manage tokens themselves.
    """

    def __init__(self, token: str, expires_in: int = 3600):
        self._token = AccessToken(token, datetime.now(timezone.utc) + timedelta(seconds=expires_in))

    def get_token(self) -> AccessToken:
        return self._token


class ClientCredentialsTokenProvider:
    """Fetch and cache tokens via the OneLogin client credentials grant.

    The token is cached until shortly before it expires and then fetched
    again on the next call. A lock keeps concurrent callers from racing the
    refresh.

    Usage:
        provider = ClientCredentialsTokenProvider("https://api.us.onelogin.com", "id", "secret")
        token = provider.get_token().value
    """

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 5,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._session = session or requests.Session()
        self._token: Optional[AccessToken] = None
        self._lock = threading.Lock()

    def get_token(self) -> AccessToken:
        """Return a valid token, refreshing it if expired or about to expire."""
        with self._lock:
            if self._token is None or self._token.expires_within(REFRESH_MARGIN):
                self._token = self._request_token()
            return self._token

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        with self._lock:
            self._token = None

    def _request_token(self) -> AccessToken:
        url = f"{self.base_url}{TOKEN_PATH}"
        headers = {
            "Authorization": f"client_id:{self._client_id}, client_secret:{self._client_secret}",
            "Content-Type": "application/json",
        }
        try:
            resp = self._session.post(
                url,
                json={"grant_type": "client_credentials"},
                headers=headers,
                timeout=self._timeout,
            )
        except requests.Timeout as exc:
            raise RequestTimeoutError(str(exc), url) from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc), url) from exc

        if resp.status_code != 200:
            raise AuthenticationError(resp.status_code, resp.text, url, body=resp.text)

        try:
            payload = resp.json()
            value = payload["access_token"]
            expires_in = int(payload.get("expires_in") or 0)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise DecodeError(f"Malformed token response from {url}", resp.text) from exc

        logger.debug("Obtained access token (expires_in=%ss)", expires_in)
        return AccessToken(value, datetime.now(timezone.utc) + timedelta(seconds=expires_in))
