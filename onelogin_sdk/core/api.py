"""Top-level API client wiring every resource service to one executor."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from ..config.settings import ClientConfig
from .auth import ClientCredentialsTokenProvider, TokenProvider
from .client import ResourceRepository
from .services import (
    AccessTokenClaimsService,
    AppRulesService,
    AppsService,
    AuthServersService,
    LegalValuesService,
    RolesService,
    ScopesService,
    SessionLoginTokensService,
    SmartHooksService,
    UserMappingsService,
    UsersService,
)

logger = logging.getLogger(__name__)

POOL_SIZE = 50


@dataclass(frozen=True)
class Services:
    """All available API services."""
    http: ResourceRepository
    legal_values: LegalValuesService
    apps: AppsService
    app_rules: AppRulesService
    users: UsersService
    user_mappings: UserMappingsService
    session_login_tokens: SessionLoginTokensService
    auth_servers: AuthServersService
    access_token_claims: AccessTokenClaimsService
    scopes: ScopesService
    smart_hooks: SmartHooksService
    roles: RolesService


class APIClient:
    """Client for the OneLogin API with every service attached.

    The client is built once and then only read, so it can be shared across
    threads.

    Usage:
        client = APIClient(ClientConfig(client_id="id", client_secret="secret", region="us"))
        users = client.services.users.query(UserQuery(limit=10))
    """

    def __init__(
        self,
        config: ClientConfig,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the API client.

        Args:
            config: Client settings; validated via ``ClientConfig.initialize``
            token_provider: Token source (defaults to the client credentials flow)
            session: HTTP session to share (defaults to a pooled session)

        Raises:
            ConfigurationError: If the settings are invalid
        """
        self.config = config.initialize()
        self.base_url = self.config.url
        self.session = session or _pooled_session()
        self.token_provider = token_provider or ClientCredentialsTokenProvider(
            self.base_url,
            self.config.client_id,
            self.config.client_secret,
            timeout=self.config.timeout,
            session=self.session,
        )

        repository = ResourceRepository(self.token_provider, timeout=self.config.timeout, session=self.session)
        legal_values = LegalValuesService(repository, self.base_url)
        self.services = Services(
            http=repository,
            legal_values=legal_values,
            apps=AppsService(repository, self.base_url),
            app_rules=AppRulesService(repository, legal_values, self.base_url),
            users=UsersService(repository, self.base_url),
            user_mappings=UserMappingsService(repository, legal_values, self.base_url),
            session_login_tokens=SessionLoginTokensService(repository, self.base_url),
            auth_servers=AuthServersService(repository, self.base_url),
            access_token_claims=AccessTokenClaimsService(repository, self.base_url),
            scopes=ScopesService(repository, self.base_url),
            smart_hooks=SmartHooksService(repository, self.base_url),
            roles=RolesService(repository, self.base_url),
        )
        logger.debug("OneLogin client ready for %s", self.base_url)

    @property
    def region(self) -> str:
        return self.config.region

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _pooled_session() -> requests.Session:
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=POOL_SIZE, pool_maxsize=POOL_SIZE)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session
