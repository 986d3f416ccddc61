"""Authentication dependency for protected routes."""

import structlog
from fastapi import Request

from ecobreak.api.dependencies import get_app_settings, get_auth_client
from ecobreak.models.user import Identity
from ecobreak.services.identity_service import IdentityService


def get_identity_service(request: Request | None = None) -> IdentityService:
    """Create an IdentityService for the request."""
    settings = get_app_settings(request)
    return IdentityService(get_auth_client(request), settings.ADMIN_EMAIL)


async def get_current_user(request: Request) -> Identity:
    """Resolve the caller from the ``Authorization`` header.

    Used with ``Depends`` on every protected router. Failures raise
    ``UnauthorizedError`` which the error handlers turn into 401.
    """
    identity = get_identity_service(request).resolve(request.headers.get("Authorization"))
    request.state.user = identity
    structlog.contextvars.bind_contextvars(uid=identity.uid, role=identity.role.value)
    return identity
