"""Shared operations for rule-style resources (app rules, user mappings).

Both resources are ordered lists of condition/action rules and publish the
same set of legal-values lookups underneath their collection path.
"""
from __future__ import annotations
import json
from typing import Any, Generic, List, Sequence

from ..exceptions import DecodeError
from ..models import LegalValue
from ..resource import ModelT, ResourceClient, decode_json
from .legal_values import LegalValuesService


class RuleService(Generic[ModelT]):
    """CRUD plus sort and legal-values lookups for a rule collection."""

    def __init__(self, resource: ResourceClient[ModelT], legal_values: LegalValuesService):
        self.resource = resource
        self.legal_values = legal_values

    def _sort(self, rule_ids: Sequence[int], **path_args: Any) -> List[int]:
        raw = self.resource.repository.update(self.resource.url("sort", **path_args), list(rule_ids))
        payload = decode_json(raw)
        if payload is None:
            return list(rule_ids)
        if not isinstance(payload, list):
            raise DecodeError("Expected a JSON array of rule ids", json.dumps(payload))
        return payload

    def _lookup(self, *segments: Any, **path_args: Any) -> List[LegalValue]:
        return self.legal_values.find(self.resource.url(*segments, **path_args))

    def _conditions(self, **path_args: Any) -> List[LegalValue]:
        return self._lookup("conditions", **path_args)

    def _condition_operators(self, condition: str, **path_args: Any) -> List[LegalValue]:
        return self._lookup("conditions", condition, "operators", **path_args)

    def _condition_values(self, condition: str, **path_args: Any) -> List[LegalValue]:
        return self._lookup("conditions", condition, "values", **path_args)

    def _actions(self, **path_args: Any) -> List[LegalValue]:
        return self._lookup("actions", **path_args)

    def _action_values(self, action: str, **path_args: Any) -> List[LegalValue]:
        return self._lookup("actions", action, "values", **path_args)
