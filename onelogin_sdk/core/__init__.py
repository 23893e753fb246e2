"""OneLogin API client library.

This package provides a modular, testable interface to the OneLogin REST API.

Architecture:
- client.py: Request executor (bearer auth, JSON bodies, error decoding)
- auth.py: Token providers (client credentials flow, static tokens)
- exceptions.py: Typed exceptions for error handling
- models.py: Resource schemas with an unknown-field bag
- resource.py: Generic CRUD client parameterized by path and model
- services/: Named facades per resource (apps, users, roles, ...)
- api.py: APIClient wiring all services to one executor

Usage:
    from onelogin_sdk.core import ResourceRepository, StaticTokenProvider

    repo = ResourceRepository(StaticTokenProvider("token"))
    raw = repo.execute("GET", "https://api.us.onelogin.com/api/2/users", {"limit": "10"})
"""
from .auth import (
    AccessToken,
    ClientCredentialsTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)
from .client import (
    REQUEST_TIMEOUT,
    ResourceRepository,
    build_url,
    error_from_response,
)
from .exceptions import (
    OneLoginError,
    ConfigurationError,
    TransportError,
    RequestTimeoutError,
    APIError,
    AuthenticationError,
    NotFoundError,
    DecodeError,
)
from .resource import ResourceClient, decode_json, decode_many, decode_one

__all__ = [
    # Auth
    "AccessToken",
    "ClientCredentialsTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",

    # Executor
    "REQUEST_TIMEOUT",
    "ResourceRepository",
    "build_url",
    "error_from_response",

    # Exceptions
    "OneLoginError",
    "ConfigurationError",
    "TransportError",
    "RequestTimeoutError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "DecodeError",

    # Resources
    "ResourceClient",
    "decode_json",
    "decode_many",
    "decode_one",
]
