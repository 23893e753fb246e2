"""Client configuration with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5
DEFAULT_REGION = "us"
REGIONS = ("us", "eu")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("Loaded %s from environment", env_var)
            return secret_value

    return None


def region_url(region: str) -> str:
    """Return the API host for a region (e.g. ``https://api.us.onelogin.com``)."""
    return f"https://api.{region}.onelogin.com"


@dataclass(frozen=True)
class ClientConfig:
    """Settings needed to build an API client."""
    client_id: str
    client_secret: str
    region: str = DEFAULT_REGION
    # Explicit base URL; overrides the region host when set
    url: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT

    def initialize(self) -> "ClientConfig":
        """Validate the settings and fill in derived values.

        Returns:
            A new config with ``region`` normalized, ``url`` resolved and
            ``timeout`` defaulted

        Raises:
            ConfigurationError: If credentials are missing or the region is unknown
        """
        if not self.client_id:
            raise ConfigurationError("client_id is required")
        if not self.client_secret:
            raise ConfigurationError("client_secret is required")

        region = (self.region or DEFAULT_REGION).strip().lower()
        if not self.url and region not in REGIONS:
            raise ConfigurationError(f"Unknown region '{self.region}': expected one of {', '.join(REGIONS)}")

        url = (self.url or region_url(region)).rstrip("/")
        timeout = self.timeout if self.timeout and self.timeout > 0 else DEFAULT_TIMEOUT
        return replace(self, region=region, url=url, timeout=timeout)


def load_settings() -> ClientConfig:
    """Load client settings from environment and /run/secrets.

    Recognized variables:
        ONELOGIN_CLIENT_ID      (required)
        ONELOGIN_CLIENT_SECRET  (required; /run/secrets/onelogin_client_secret wins)
        ONELOGIN_REGION         (us | eu, default us)
        ONELOGIN_URL            (explicit base URL)
        ONELOGIN_TIMEOUT        (seconds, default 5)
    """
    client_id = os.environ.get("ONELOGIN_CLIENT_ID", "").strip()
    client_secret = _load_secret_from_file("onelogin_client_secret", "ONELOGIN_CLIENT_SECRET") or ""

    timeout_raw = os.environ.get("ONELOGIN_TIMEOUT", "").strip()
    if timeout_raw:
        try:
            timeout = int(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError(f"ONELOGIN_TIMEOUT must be an integer, got '{timeout_raw}'") from exc
    else:
        timeout = DEFAULT_TIMEOUT

    config = ClientConfig(
        client_id=client_id,
        client_secret=client_secret,
        region=os.environ.get("ONELOGIN_REGION", DEFAULT_REGION),
        url=os.environ.get("ONELOGIN_URL") or None,
        timeout=timeout,
    ).initialize()

    logger.info("OneLogin settings loaded: url=%s; client_id=%s; timeout=%ss", config.url, client_id, config.timeout)
    return config
