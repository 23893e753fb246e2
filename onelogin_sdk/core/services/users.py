"""OneLogin user operations (API v2)."""
from __future__ import annotations
from typing import List, Optional

from ..client import ResourceRepository
from ..models import User, UserApp, UserQuery
from ..resource import ResourceClient, decode_many

USERS_PATH = "/api/2/users"


class UsersService:
    """Service for managing OneLogin users."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.resource = ResourceClient(repository, base_url, USERS_PATH, User)

    def query(self, query: Optional[UserQuery] = None) -> List[User]:
        """List users matching the given filters.

        Args:
            query: Optional filters (username, email, created_since, ...)

        Returns:
            Matching users, in the order the API returned them
        """
        return self.resource.list(query)

    def get_one(self, user_id: int) -> User:
        return self.resource.get(user_id)

    def create(self, user: User) -> User:
        return self.resource.create(user)

    def update(self, user_id: int, user: User) -> User:
        return self.resource.update(user_id, user)

    def destroy(self, user_id: int) -> None:
        self.resource.destroy(user_id)

    def get_apps(self, user_id: int) -> List[UserApp]:
        """Return the apps assigned to a user."""
        raw = self.resource.repository.read(self.resource.url(user_id, "apps"))
        return decode_many(UserApp, raw)
