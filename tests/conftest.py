"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

import pytest

from ecobreak.adapters.firebase_auth import AuthUser
from ecobreak.adapters.messaging_client import PushResult
from ecobreak.models.user import Identity, Role
from tests.utils import InMemoryFirestore

TEST_ENV = {
    "FIREBASE_PROJECT_ID": "test-project",
    "ADMIN_EMAIL": "admin@ecobreak.test",
    "ADMIN_PASSWORD": "admin-secret",
    "FIRESTORE_EMULATOR_HOST": "localhost:8086",
    "LOG_JSON": "false",
}

# ecobreak.api.main reads settings at import time
for _key, _value in TEST_ENV.items():
    os.environ.setdefault(_key, _value)


@pytest.fixture(autouse=True)
def set_test_env() -> None:
    """Set test environment variables."""
    for key, value in TEST_ENV.items():
        os.environ.setdefault(key, value)


@pytest.fixture
def fake_firestore() -> InMemoryFirestore:
    """Empty in-memory Firestore."""
    return InMemoryFirestore()


@pytest.fixture
def mock_auth_client() -> MagicMock:
    """Mock FirebaseAuthClient."""
    client = MagicMock()
    client.verify_id_token.return_value = {"uid": "user_001"}
    client.get_user.return_value = AuthUser(uid="user_001", email="ana@ecobreak.test")
    return client


@pytest.fixture
def mock_messaging_client() -> MagicMock:
    """Mock MessagingClient that reports every token as delivered."""
    client = MagicMock()
    client.send_multicast.side_effect = lambda tokens, **kwargs: PushResult(
        success_count=len(tokens)
    )
    return client


@pytest.fixture
def user_identity() -> Identity:
    """Authenticated app user."""
    return Identity(uid="user_001", email="ana@ecobreak.test", role=Role.USER)


@pytest.fixture
def admin_identity() -> Identity:
    """Authenticated admin."""
    return Identity(uid="admin_001", email="admin@ecobreak.test", role=Role.ADMIN)
