"""OneLogin application operations (API v2)."""
from __future__ import annotations
from typing import List, Optional

from ..client import ResourceRepository
from ..models import App, AppQuery, User
from ..resource import ResourceClient, decode_many

APPS_PATH = "/api/2/apps"


class AppsService:
    """Service for managing OneLogin apps."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        """Initialize app service.

        Args:
            repository: Shared request executor
            base_url: Region base URL
        """
        self.resource = ResourceClient(repository, base_url, APPS_PATH, App)

    def query(self, query: Optional[AppQuery] = None) -> List[App]:
        """List apps, optionally filtered by name, connector or auth method."""
        return self.resource.list(query)

    def get_one(self, app_id: int) -> App:
        return self.resource.get(app_id)

    def create(self, app: App) -> App:
        return self.resource.create(app)

    def update(self, app_id: int, app: App) -> App:
        return self.resource.update(app_id, app)

    def destroy(self, app_id: int) -> None:
        self.resource.destroy(app_id)

    def delete_parameter(self, app_id: int, parameter_id: int) -> None:
        """Remove a single parameter from an app."""
        self.resource.repository.destroy(self.resource.url(app_id, "parameters", parameter_id))

    def list_users(self, app_id: int) -> List[User]:
        """Return the users assigned to an app."""
        raw = self.resource.repository.read(self.resource.url(app_id, "users"))
        return decode_many(User, raw)
