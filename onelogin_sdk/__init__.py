"""OneLogin API client SDK.

To build a client:
    from onelogin_sdk import APIClient, ClientConfig

    client = APIClient(ClientConfig(client_id="...", client_secret="...", region="us"))
    apps = client.services.apps.query()

To configure from the environment:
    from onelogin_sdk.config import load_settings
    client = APIClient(load_settings())
"""
from .config import ClientConfig, load_settings
from .core.api import APIClient, Services
from .core.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    OneLoginError,
    RequestTimeoutError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "APIClient",
    "Services",
    "ClientConfig",
    "load_settings",
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "DecodeError",
    "NotFoundError",
    "OneLoginError",
    "RequestTimeoutError",
    "TransportError",
]
