"""Read-only smoke tests against a real OneLogin tenant.

Skipped unless ONELOGIN_CLIENT_ID and ONELOGIN_CLIENT_SECRET are set.
"""
import os

import pytest

from onelogin_sdk import APIClient, load_settings
from onelogin_sdk.core.models import AppQuery, UserQuery

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (os.environ.get("ONELOGIN_CLIENT_ID") and os.environ.get("ONELOGIN_CLIENT_SECRET")),
        reason="OneLogin credentials not configured",
    ),
]


@pytest.fixture(scope="module")
def client():
    with APIClient(load_settings()) as client:
        yield client


def test_list_users(client):
    users = client.services.users.query(UserQuery(limit=1))
    assert len(users) <= 1


def test_list_apps(client):
    apps = client.services.apps.query(AppQuery(limit=1))
    assert len(apps) <= 1


def test_list_user_mapping_conditions(client):
    conditions = client.services.user_mappings.list_conditions()
    assert all(c.value for c in conditions)
