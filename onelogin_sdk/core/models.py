"""Typed schemas for OneLogin API resources.

Each resource is a pydantic model with the fields the SDK knows about.
Fields the API returns but the schema does not declare are kept in
``model_extra`` and sent back unchanged on update, so partially modelled
resources survive a read/modify/write cycle.

Example:
    >>> user = User.model_validate({"id": 1, "username": "a", "department_code": "x"})
    >>> user.username
    'a'
    >>> user.model_extra
    {'department_code': 'x'}
"""
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class OneLoginModel(BaseModel):
    """Base for every resource schema."""

    model_config = ConfigDict(
        # Unknown API fields are preserved rather than rejected
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict without unset (None) fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class Query(BaseModel):
    """Base for list filters; serialized to query parameters in field order."""

    model_config = ConfigDict(extra="allow")

    def to_params(self) -> List[Tuple[str, str]]:
        params = []
        for key, value in self.model_dump(mode="json", exclude_none=True).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, list):
                value = ",".join(str(item) for item in value)
            params.append((key, str(value)))
        return params


# ─────────────────────────────────────────────────────────────────────────────
# Shared rule building blocks (app rules, user mappings)
# ─────────────────────────────────────────────────────────────────────────────
class Condition(OneLoginModel):
    source: Optional[str] = None
    operator: Optional[str] = None
    value: Optional[str] = None


class Action(OneLoginModel):
    action: Optional[str] = None
    value: Optional[List[str]] = None
    expression: Optional[str] = None
    scriplet: Optional[str] = None
    macro: Optional[str] = None


class LegalValue(OneLoginModel):
    """Name/value pair accepted by a rule condition or action."""
    name: Optional[str] = None
    value: Any = None


# ─────────────────────────────────────────────────────────────────────────────
# Apps
# ─────────────────────────────────────────────────────────────────────────────
class AppProvisioning(OneLoginModel):
    enabled: Optional[bool] = None


class AppParameter(OneLoginModel):
    id: Optional[int] = None
    label: Optional[str] = None
    user_attribute_mappings: Optional[str] = None
    user_attribute_macros: Optional[str] = None
    attributes_transformations: Optional[str] = None
    default_values: Optional[str] = None
    skip_if_blank: Optional[bool] = None
    values: Optional[str] = None
    provisioned_entitlements: Optional[bool] = None
    safe_entitlements_enabled: Optional[bool] = None
    include_in_saml_assertion: Optional[bool] = None


class App(OneLoginModel):
    id: Optional[int] = None
    connector_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    policy_id: Optional[int] = None
    brand_id: Optional[int] = None
    icon_url: Optional[str] = None
    visible: Optional[bool] = None
    auth_method: Optional[int] = None
    tab_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    role_ids: Optional[List[int]] = None
    allow_assumed_signin: Optional[bool] = None
    provisioning: Optional[AppProvisioning] = None
    sso: Optional[Dict[str, Any]] = None
    configuration: Optional[Dict[str, Any]] = None
    parameters: Optional[Dict[str, AppParameter]] = None
    enforcement_point: Optional[Dict[str, Any]] = None


class AppQuery(Query):
    limit: Optional[int] = None
    page: Optional[int] = None
    cursor: Optional[str] = None
    name: Optional[str] = None
    connector_id: Optional[int] = None
    auth_method: Optional[int] = None


class AppRule(OneLoginModel):
    id: Optional[int] = None
    app_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    match: Optional[str] = None
    enabled: Optional[bool] = None
    position: Optional[int] = None
    conditions: Optional[List[Condition]] = None
    actions: Optional[List[Action]] = None


class AppRuleQuery(Query):
    enabled: Optional[bool] = None
    has_condition: Optional[str] = None
    has_condition_type: Optional[str] = None
    has_action: Optional[str] = None
    has_action_type: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Users
# ─────────────────────────────────────────────────────────────────────────────
class User(OneLoginModel):
    id: Optional[int] = None
    username: Optional[str] = None
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None
    comment: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    password_confirmation: Optional[str] = None
    password_algorithm: Optional[str] = None
    salt: Optional[str] = None
    distinguished_name: Optional[str] = None
    samaccountname: Optional[str] = None
    userprincipalname: Optional[str] = None
    member_of: Optional[str] = None
    external_id: Optional[str] = None
    directory_id: Optional[int] = None
    trusted_idp_id: Optional[int] = None
    manager_ad_id: Optional[int] = None
    manager_user_id: Optional[int] = None
    group_id: Optional[int] = None
    role_ids: Optional[List[int]] = None
    state: Optional[int] = None
    status: Optional[int] = None
    invalid_login_attempts: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    activated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None
    locked_until: Optional[datetime] = None
    invitation_sent_at: Optional[datetime] = None
    custom_attributes: Optional[Dict[str, Any]] = None


class UserQuery(Query):
    limit: Optional[int] = None
    page: Optional[int] = None
    cursor: Optional[str] = None
    created_since: Optional[str] = None
    created_until: Optional[str] = None
    updated_since: Optional[str] = None
    updated_until: Optional[str] = None
    last_login_since: Optional[str] = None
    last_login_until: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    samaccountname: Optional[str] = None
    directory_id: Optional[int] = None
    external_id: Optional[str] = None
    app_id: Optional[int] = None
    user_ids: Optional[List[int]] = None


class UserApp(OneLoginModel):
    """Application assigned to a user."""
    id: Optional[int] = None
    name: Optional[str] = None
    icon_url: Optional[str] = None
    login_id: Optional[int] = None
    provisioning_status: Optional[str] = None
    provisioning_state: Optional[str] = None
    provisioning_enabled: Optional[bool] = None


class UserMapping(OneLoginModel):
    id: Optional[int] = None
    name: Optional[str] = None
    match: Optional[str] = None
    enabled: Optional[bool] = None
    position: Optional[int] = None
    conditions: Optional[List[Condition]] = None
    actions: Optional[List[Action]] = None


class UserMappingQuery(Query):
    enabled: Optional[bool] = None
    has_condition: Optional[str] = None
    has_condition_type: Optional[str] = None
    has_action: Optional[str] = None
    has_action_type: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Roles
# ─────────────────────────────────────────────────────────────────────────────
class Role(OneLoginModel):
    id: Optional[int] = None
    name: Optional[str] = None
    admins: Optional[List[int]] = None
    apps: Optional[List[int]] = None
    users: Optional[List[int]] = None


class RoleQuery(Query):
    limit: Optional[int] = None
    page: Optional[int] = None
    cursor: Optional[str] = None
    name: Optional[str] = None
    app_id: Optional[int] = None
    app_name: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# API authorization servers
# ─────────────────────────────────────────────────────────────────────────────
class AuthServerConfiguration(OneLoginModel):
    resource_identifier: Optional[str] = None
    audiences: Optional[List[str]] = None
    access_token_expiration_minutes: Optional[int] = None
    refresh_token_expiration_minutes: Optional[int] = None


class AuthServer(OneLoginModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    configuration: Optional[AuthServerConfiguration] = None


class AuthServerQuery(Query):
    name: Optional[str] = None


class AccessTokenClaim(OneLoginModel):
    id: Optional[int] = None
    auth_server_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    label: Optional[str] = None
    user_attribute_mappings: Optional[str] = None
    user_attribute_macros: Optional[str] = None
    attribute_transformations: Optional[str] = None
    skip_if_blank: Optional[bool] = None
    values: Optional[List[Any]] = None
    default_values: Optional[str] = None
    provisioned_entitlements: Optional[bool] = None


class Scope(OneLoginModel):
    id: Optional[int] = None
    auth_server_id: Optional[int] = Field(default=None, exclude=True)
    value: Optional[str] = None
    description: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Smart hooks
# ─────────────────────────────────────────────────────────────────────────────
class SmartHookOptions(OneLoginModel):
    risk_enabled: Optional[bool] = None
    mfa_device_info_enabled: Optional[bool] = None
    location_enabled: Optional[bool] = None


class SmartHook(OneLoginModel):
    id: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    disabled: Optional[bool] = None
    timeout: Optional[int] = None
    env_vars: Optional[List[str]] = None
    runtime: Optional[str] = None
    context_version: Optional[str] = None
    retries: Optional[int] = None
    options: Optional[SmartHookOptions] = None
    packages: Optional[Dict[str, str]] = None
    # Plain source text; base64 handling happens in the service
    function: Optional[str] = None
    conditions: Optional[List[Dict[str, Any]]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SmartHookQuery(Query):
    limit: Optional[int] = None
    page: Optional[int] = None
    cursor: Optional[str] = None
    type: Optional[str] = None


class EnvVar(OneLoginModel):
    """Smart hook environment variable; the value is write-only."""
    id: Optional[str] = None
    name: Optional[str] = None
    value: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ─────────────────────────────────────────────────────────────────────────────
# Session login tokens
# ─────────────────────────────────────────────────────────────────────────────
class SessionLoginTokenRequest(OneLoginModel):
    username_or_email: Optional[str] = None
    password: Optional[str] = None
    subdomain: Optional[str] = None
    return_to_url: Optional[str] = None
    ip_address: Optional[str] = None
    browser_id: Optional[str] = None


class SessionLoginToken(OneLoginModel):
    status: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    return_to_url: Optional[str] = None
    expires_at: Optional[str] = None
    session_token: Optional[str] = None
    state_token: Optional[str] = None
    callback_url: Optional[str] = None
    devices: Optional[List[Dict[str, Any]]] = None
