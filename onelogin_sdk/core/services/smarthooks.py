"""OneLogin smart hook operations.

The API stores hook source base64-encoded. This service accepts and returns
plain source text in ``SmartHook.function`` and does the encoding on the
way out and the decoding on the way in.
"""
from __future__ import annotations
import base64
import binascii
from typing import List, Optional

from ..client import ResourceRepository
from ..exceptions import DecodeError
from ..models import EnvVar, SmartHook, SmartHookQuery
from ..resource import ResourceClient, merge_created

HOOKS_PATH = "/api/2/hooks"
ENV_VARS_PATH = "/api/2/hooks/envs"


def encode_function(source: str) -> str:
    return base64.b64encode(source.encode("utf-8")).decode("ascii")


def decode_function(encoded: str) -> str:
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise DecodeError(f"Smart hook function is not valid base64: {exc}", encoded) from exc


def _decoded(hook: SmartHook) -> SmartHook:
    if hook.function:
        hook.function = decode_function(hook.function)
    return hook


def _encoded(hook: SmartHook) -> SmartHook:
    if hook.function:
        return hook.model_copy(update={"function": encode_function(hook.function)})
    return hook


class SmartHooksService:
    """Service for managing smart hooks and their environment variables."""

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.resource = ResourceClient(repository, base_url, HOOKS_PATH, SmartHook)
        self.env_vars = ResourceClient(repository, base_url, ENV_VARS_PATH, EnvVar)

    def query(self, query: Optional[SmartHookQuery] = None) -> List[SmartHook]:
        return [_decoded(hook) for hook in self.resource.list(query)]

    def get_one(self, hook_id: str) -> SmartHook:
        return _decoded(self.resource.get(hook_id))

    def create(self, hook: SmartHook) -> SmartHook:
        payload = _encoded(hook)
        raw = self.resource.repository.create(self.resource.url(), payload)
        return _decoded(merge_created(SmartHook, payload, raw))

    def update(self, hook_id: str, hook: SmartHook) -> SmartHook:
        payload = _encoded(hook)
        raw = self.resource.repository.update(self.resource.url(hook_id), payload)
        return _decoded(merge_created(SmartHook, payload, raw))

    def destroy(self, hook_id: str) -> None:
        self.resource.destroy(hook_id)

    # Environment variables
    def list_env_vars(self) -> List[EnvVar]:
        return self.env_vars.list()

    def get_env_var(self, env_var_id: str) -> EnvVar:
        return self.env_vars.get(env_var_id)

    def create_env_var(self, env_var: EnvVar) -> EnvVar:
        return self.env_vars.create(env_var)

    def update_env_var(self, env_var_id: str, value: str) -> EnvVar:
        """Change the value of an environment variable; names are immutable."""
        raw = self.env_vars.repository.update(self.env_vars.url(env_var_id), {"value": value})
        return merge_created(EnvVar, {"id": env_var_id}, raw)

    def destroy_env_var(self, env_var_id: str) -> None:
        self.env_vars.destroy(env_var_id)
