"""OneLogin role operations."""
from __future__ import annotations
import json
from typing import Any, List, Optional, Sequence

from ..client import ResourceRepository
from ..exceptions import DecodeError
from ..models import App, Role, RoleQuery, User
from ..resource import ResourceClient, decode_json, decode_many

ROLES_PATH = "/api/2/roles"


class RolesService:
    """Service for managing roles and their app, user and admin assignments."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        """Initialize role service.

        Args:
            repository: Shared request executor
            base_url: Region base URL
        """
        self.resource = ResourceClient(repository, base_url, ROLES_PATH, Role)

    def query(self, query: Optional[RoleQuery] = None) -> List[Role]:
        return self.resource.list(query)

    def get_one(self, role_id: int) -> Role:
        return self.resource.get(role_id)

    def create(self, role: Role) -> Role:
        return self.resource.create(role)

    def update(self, role_id: int, role: Role) -> Role:
        return self.resource.update(role_id, role)

    def destroy(self, role_id: int) -> None:
        self.resource.destroy(role_id)

    # Apps
    def get_apps(self, role_id: int) -> List[App]:
        return decode_many(App, self._repo.read(self.resource.url(role_id, "apps")))

    def set_apps(self, role_id: int, app_ids: Sequence[int]) -> List[int]:
        """Replace the apps assigned to a role."""
        return _ids(self._repo.update(self.resource.url(role_id, "apps"), list(app_ids)))

    # Users
    def get_users(self, role_id: int) -> List[User]:
        return decode_many(User, self._repo.read(self.resource.url(role_id, "users")))

    def add_users(self, role_id: int, user_ids: Sequence[int]) -> List[int]:
        return _ids(self._repo.create(self.resource.url(role_id, "users"), list(user_ids)))

    def remove_users(self, role_id: int, user_ids: Sequence[int]) -> None:
        self._repo.destroy(self.resource.url(role_id, "users"), list(user_ids))

    # Admins
    def get_admins(self, role_id: int) -> List[User]:
        return decode_many(User, self._repo.read(self.resource.url(role_id, "admins")))

    def add_admins(self, role_id: int, user_ids: Sequence[int]) -> List[int]:
        return _ids(self._repo.create(self.resource.url(role_id, "admins"), list(user_ids)))

    def remove_admins(self, role_id: int, user_ids: Sequence[int]) -> None:
        self._repo.destroy(self.resource.url(role_id, "admins"), list(user_ids))

    @property
    def _repo(self) -> ResourceRepository:
        return self.resource.repository


def _ids(raw: bytes) -> List[int]:
    """Decode an assignment response of the form ``[{"id": 1}, ...]`` or ``[1, ...]``."""
    payload = decode_json(raw)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError("Expected a JSON array of ids", json.dumps(payload))
    ids: List[Any] = []
    for item in payload:
        if isinstance(item, dict) and "id" in item:
            ids.append(item["id"])
        elif isinstance(item, int):
            ids.append(item)
        else:
            raise DecodeError("Unexpected entry in id list", json.dumps(payload))
    return ids
