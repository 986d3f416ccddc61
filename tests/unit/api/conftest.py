"""Fixtures for router tests."""

from unittest.mock import MagicMock

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from ecobreak.api.auth import get_current_user
from ecobreak.api.errors import register_exception_handlers
from ecobreak.config.settings import Settings
from ecobreak.models.user import Identity
from tests.utils import ClientFactory


@pytest.fixture
def make_client(mock_auth_client: MagicMock) -> ClientFactory:
    """Build a TestClient for some routers.

    The app carries the error handlers and a mock auth client. Passing an
    identity bypasses token verification.
    """

    def build(*routers: APIRouter, identity: Identity | None = None) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)
        app.state.settings = Settings()
        app.state.auth = mock_auth_client
        for router in routers:
            app.include_router(router)
        if identity is not None:
            app.dependency_overrides[get_current_user] = lambda: identity
        return TestClient(app, raise_server_exceptions=False)

    return build
