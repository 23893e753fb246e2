"""Per-resource facades over the shared request executor."""
from .apps import AppsService
from .app_rules import AppRulesService
from .auth_servers import AccessTokenClaimsService, AuthServersService, ScopesService
from .legal_values import LegalValuesService
from .roles import RolesService
from .session_login_tokens import SessionLoginTokensService
from .smarthooks import SmartHooksService
from .user_mappings import UserMappingsService
from .users import UsersService

__all__ = [
    "AppsService",
    "AppRulesService",
    "AccessTokenClaimsService",
    "AuthServersService",
    "ScopesService",
    "LegalValuesService",
    "RolesService",
    "SessionLoginTokensService",
    "SmartHooksService",
    "UserMappingsService",
    "UsersService",
]
