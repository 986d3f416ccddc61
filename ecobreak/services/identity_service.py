"""Resolves bearer tokens into caller identities."""

import structlog
from firebase_admin import auth

from ecobreak.adapters.firebase_auth import FirebaseAuthClient
from ecobreak.models.user import Identity, Role
from ecobreak.services.exceptions import UnauthorizedError

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "


def strip_bearer(header: str) -> str:
    """Raw token from an ``Authorization`` header; the prefix is optional."""
    value = header.lstrip()
    if value.startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX) :]
    return value.strip()


class IdentityService:
    """Verifies Firebase ID tokens and assigns a role."""

    def __init__(self, auth_client: FirebaseAuthClient, admin_email: str) -> None:
        """IdentityService initialization.

        Args:
            auth_client: Firebase Auth client
            admin_email: Email of the admin account
        """
        self.auth_client = auth_client
        self.admin_email = admin_email

    def resolve(self, authorization: str | None) -> Identity:
        """Turn an ``Authorization`` header into the caller identity.

        Args:
            authorization: Header value, with or without ``Bearer``.

        Returns:
            The caller identity.

        Raises:
            UnauthorizedError: No token, an invalid token or a disabled user.
        """
        if not authorization or not strip_bearer(authorization):
            raise UnauthorizedError("No token provided")
        token = strip_bearer(authorization)

        try:
            claims = self.auth_client.verify_id_token(token)
            user = self.auth_client.get_user(claims["uid"])
        except (auth.InvalidIdTokenError, auth.UserNotFoundError, ValueError) as e:
            logger.warning("token_rejected", error=str(e))
            raise UnauthorizedError(f"Invalid token: {e}") from e

        if user.disabled:
            logger.warning("disabled_user_rejected", uid=user.uid)
            raise UnauthorizedError("User account is disabled")

        role = Role.ADMIN if user.email and user.email == self.admin_email else Role.USER
        return Identity(
            uid=user.uid,
            email=user.email,
            role=role,
            disabled=user.disabled,
            email_verified=user.email_verified,
        )
