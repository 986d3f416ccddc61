"""Firebase Authentication client."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import firebase_admin
from firebase_admin import auth


@dataclass
class AuthUser:
    """A Firebase Auth user record."""

    uid: str
    email: str | None
    display_name: str | None = None
    photo_url: str | None = None
    disabled: bool = False
    email_verified: bool = False
    creation_time: str | None = None
    last_sign_in_time: str | None = None


def _millis_to_iso(value: int | None) -> str | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=UTC).isoformat()


def _to_auth_user(record: Any) -> AuthUser:
    metadata = record.user_metadata
    return AuthUser(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        photo_url=record.photo_url,
        disabled=bool(record.disabled),
        email_verified=bool(record.email_verified),
        creation_time=_millis_to_iso(metadata.creation_timestamp if metadata else None),
        last_sign_in_time=_millis_to_iso(
            metadata.last_sign_in_timestamp if metadata else None
        ),
    )


class FirebaseAuthClient:
    """Thin wrapper over ``firebase_admin.auth``.

    SDK errors (``auth.InvalidIdTokenError``, ``auth.UserNotFoundError``,
    ``auth.EmailAlreadyExistsError`` ...) propagate to the caller.
    """

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        """Initialize auth client.

        Args:
            app: Firebase app (default app when None).
        """
        self._app = app

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """Verify a Firebase ID token.

        Args:
            token: Raw ID token.

        Returns:
            Decoded token claims.
        """
        claims: dict[str, Any] = auth.verify_id_token(token, app=self._app)
        return claims

    def get_user(self, uid: str) -> AuthUser:
        """Get a user by UID."""
        return _to_auth_user(auth.get_user(uid, app=self._app))

    def iter_users(self) -> Iterator[AuthUser]:
        """Iterate over every Auth user, following pagination."""
        page = auth.list_users(app=self._app)
        for record in page.iterate_all():
            yield _to_auth_user(record)

    def create_user(
        self, email: str, password: str, display_name: str | None = None
    ) -> AuthUser:
        """Create an email/password user.

        Args:
            email: User email.
            password: Initial password.
            display_name: Optional display name.

        Returns:
            The created user.
        """
        record = auth.create_user(
            email=email,
            password=password,
            display_name=display_name,
            app=self._app,
        )
        return _to_auth_user(record)

    def update_user(self, uid: str, **fields: Any) -> AuthUser:
        """Update Auth user fields (email, display_name, disabled...)."""
        return _to_auth_user(auth.update_user(uid, app=self._app, **fields))

    def delete_user(self, uid: str) -> None:
        """Delete an Auth user."""
        auth.delete_user(uid, app=self._app)

    def create_custom_token(self, uid: str, claims: dict[str, Any]) -> str:
        """Mint a custom token that clients exchange for an ID token.

        Args:
            uid: Subject UID.
            claims: Developer claims embedded in the token.

        Returns:
            The encoded token.
        """
        token = auth.create_custom_token(uid, claims, app=self._app)
        if isinstance(token, bytes):
            return token.decode("utf-8")
        return str(token)

    def generate_password_reset_link(self, email: str) -> str:
        """Generate a password reset link for an email."""
        return str(auth.generate_password_reset_link(email, app=self._app))
