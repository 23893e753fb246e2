"""OneLogin app rule operations (API v2)."""
from __future__ import annotations
from typing import List, Optional, Sequence

from ..client import ResourceRepository
from ..models import AppRule, AppRuleQuery, LegalValue
from ..resource import ResourceClient
from .legal_values import LegalValuesService
from .rules import RuleService

APP_RULES_PATH = "/api/2/apps/{app_id}/rules"


class AppRulesService(RuleService[AppRule]):
    """Service for managing the provisioning rules of an app.

    Every operation is scoped to one app; rule objects may carry their
    ``app_id`` but it is never sent in the payload.
    """

    def __init__(self, repository: ResourceRepository, legal_values: LegalValuesService, base_url: str):
        super().__init__(ResourceClient(repository, base_url, APP_RULES_PATH, AppRule), legal_values)

    def query(self, app_id: int, query: Optional[AppRuleQuery] = None) -> List[AppRule]:
        rules = self.resource.list(query, app_id=app_id)
        for rule in rules:
            rule.app_id = app_id
        return rules

    def get_one(self, app_id: int, rule_id: int) -> AppRule:
        rule = self.resource.get(rule_id, app_id=app_id)
        rule.app_id = app_id
        return rule

    def create(self, rule: AppRule) -> AppRule:
        created = self.resource.create(rule, app_id=rule.app_id)
        created.app_id = rule.app_id
        return created

    def update(self, rule: AppRule) -> AppRule:
        updated = self.resource.update(rule.id, rule, app_id=rule.app_id)
        updated.app_id = rule.app_id
        return updated

    def destroy(self, app_id: int, rule_id: int) -> None:
        self.resource.destroy(rule_id, app_id=app_id)

    def sort(self, app_id: int, rule_ids: Sequence[int]) -> List[int]:
        """Reorder an app's rules; returns the ids in their new order."""
        return self._sort(rule_ids, app_id=app_id)

    def list_conditions(self, app_id: int) -> List[LegalValue]:
        return self._conditions(app_id=app_id)

    def list_condition_operators(self, app_id: int, condition: str) -> List[LegalValue]:
        return self._condition_operators(condition, app_id=app_id)

    def list_condition_values(self, app_id: int, condition: str) -> List[LegalValue]:
        return self._condition_values(condition, app_id=app_id)

    def list_actions(self, app_id: int) -> List[LegalValue]:
        return self._actions(app_id=app_id)

    def list_action_values(self, app_id: int, action: str) -> List[LegalValue]:
        return self._action_values(action, app_id=app_id)
