"""OneLogin user mapping operations (API v2)."""
from __future__ import annotations
from typing import List, Optional, Sequence

from ..client import ResourceRepository
from ..models import LegalValue, UserMapping, UserMappingQuery
from ..resource import ResourceClient
from .legal_values import LegalValuesService
from .rules import RuleService

USER_MAPPINGS_PATH = "/api/2/mappings"


class UserMappingsService(RuleService[UserMapping]):
    """Service for managing user mappings."""

    def __init__(self, repository: ResourceRepository, legal_values: LegalValuesService, base_url: str):
        super().__init__(ResourceClient(repository, base_url, USER_MAPPINGS_PATH, UserMapping), legal_values)

    def query(self, query: Optional[UserMappingQuery] = None) -> List[UserMapping]:
        return self.resource.list(query)

    def get_one(self, mapping_id: int) -> UserMapping:
        return self.resource.get(mapping_id)

    def create(self, mapping: UserMapping) -> UserMapping:
        return self.resource.create(mapping)

    def update(self, mapping_id: int, mapping: UserMapping) -> UserMapping:
        return self.resource.update(mapping_id, mapping)

    def destroy(self, mapping_id: int) -> None:
        self.resource.destroy(mapping_id)

    def sort(self, mapping_ids: Sequence[int]) -> List[int]:
        """Reorder mappings; returns the ids in their new order."""
        return self._sort(mapping_ids)

    def list_conditions(self) -> List[LegalValue]:
        return self._conditions()

    def list_condition_operators(self, condition: str) -> List[LegalValue]:
        return self._condition_operators(condition)

    def list_condition_values(self, condition: str) -> List[LegalValue]:
        return self._condition_values(condition)

    def list_actions(self) -> List[LegalValue]:
        return self._actions()

    def list_action_values(self, action: str) -> List[LegalValue]:
        return self._action_values(action)
