"""OneLogin SDK exceptions for error handling."""
from __future__ import annotations
from typing import Optional, Union


class OneLoginError(Exception):
    """Base exception for all OneLogin SDK operations."""
    pass


class ConfigurationError(OneLoginError):
    """Client configuration is missing a required value or is invalid."""
    pass


class TransportError(OneLoginError):
    """The request never reached the server or no response came back.

    Covers DNS failures, refused or reset connections and timeouts.
    Callers may treat these as retryable.

    Attributes:
        url: Target URL of the failed request
    """

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(f"{url}: {message}" if url else message)


class RequestTimeoutError(TransportError):
    """No response within the configured timeout."""
    pass


class APIError(OneLoginError):
    """Non-2xx HTTP response from the OneLogin API.

    Attributes:
        status_code: HTTP status code
        code: Remote error code as it appeared in the body (string or number)
        message: Remote error message, or the raw body text
        url: API endpoint that failed
        body: Raw response body text
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        url: str = "",
        code: Optional[Union[str, int]] = None,
        body: str = "",
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.url = url
        self.body = body
        label = f"[{status_code}]" if code is None else f"[{status_code} {code}]"
        super().__init__(f"{label} {url}: {message}" if url else f"{label} {message}")

    @property
    def is_retryable(self) -> bool:
        """Server-side failures may succeed on a later attempt."""
        return self.status_code >= 500


class AuthenticationError(APIError):
    """Token endpoint rejected the client credentials."""
    pass


class NotFoundError(APIError):
    """Requested resource does not exist."""
    pass


class DecodeError(OneLoginError):
    """Response body could not be parsed into the expected shape.

    Attributes:
        body: Raw response body text
    """

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)
