"""OneLogin API authorization server operations (API v2).

Auth servers own two nested collections, access-token claims and scopes,
each addressed under ``/api/2/api_authorizations/{auth_server_id}``.
"""
from __future__ import annotations
from typing import List, Optional

from ..client import ResourceRepository
from ..models import AccessTokenClaim, AuthServer, AuthServerQuery, Scope
from ..resource import ResourceClient

AUTH_SERVERS_PATH = "/api/2/api_authorizations"
CLAIMS_PATH = AUTH_SERVERS_PATH + "/{auth_server_id}/claims"
SCOPES_PATH = AUTH_SERVERS_PATH + "/{auth_server_id}/scopes"


class AuthServersService:
    """Service for managing API authorization servers."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.resource = ResourceClient(repository, base_url, AUTH_SERVERS_PATH, AuthServer)

    def query(self, query: Optional[AuthServerQuery] = None) -> List[AuthServer]:
        return self.resource.list(query)

    def get_one(self, auth_server_id: int) -> AuthServer:
        return self.resource.get(auth_server_id)

    def create(self, auth_server: AuthServer) -> AuthServer:
        return self.resource.create(auth_server)

    def update(self, auth_server_id: int, auth_server: AuthServer) -> AuthServer:
        return self.resource.update(auth_server_id, auth_server)

    def destroy(self, auth_server_id: int) -> None:
        self.resource.destroy(auth_server_id)


class AccessTokenClaimsService:
    """Service for the custom claims an auth server adds to access tokens."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.resource = ResourceClient(repository, base_url, CLAIMS_PATH, AccessTokenClaim)

    def query(self, auth_server_id: int) -> List[AccessTokenClaim]:
        claims = self.resource.list(auth_server_id=auth_server_id)
        for claim in claims:
            claim.auth_server_id = auth_server_id
        return claims

    def create(self, claim: AccessTokenClaim) -> AccessTokenClaim:
        created = self.resource.create(claim, auth_server_id=claim.auth_server_id)
        created.auth_server_id = claim.auth_server_id
        return created

    def update(self, claim: AccessTokenClaim) -> AccessTokenClaim:
        updated = self.resource.update(claim.id, claim, auth_server_id=claim.auth_server_id)
        updated.auth_server_id = claim.auth_server_id
        return updated

    def destroy(self, auth_server_id: int, claim_id: int) -> None:
        self.resource.destroy(claim_id, auth_server_id=auth_server_id)


class ScopesService:
    """Service for the scopes an auth server grants."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.resource = ResourceClient(repository, base_url, SCOPES_PATH, Scope)

    def query(self, auth_server_id: int) -> List[Scope]:
        scopes = self.resource.list(auth_server_id=auth_server_id)
        for scope in scopes:
            scope.auth_server_id = auth_server_id
        return scopes

    def create(self, scope: Scope) -> Scope:
        created = self.resource.create(scope, auth_server_id=scope.auth_server_id)
        created.auth_server_id = scope.auth_server_id
        return created

    def update(self, scope: Scope) -> Scope:
        updated = self.resource.update(scope.id, scope, auth_server_id=scope.auth_server_id)
        updated.auth_server_id = scope.auth_server_id
        return updated

    def destroy(self, auth_server_id: int, scope_id: int) -> None:
        self.resource.destroy(scope_id, auth_server_id=auth_server_id)
