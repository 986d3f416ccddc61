"""Admin login and user directory."""

import hmac
import time
from typing import Any

import structlog

from ecobreak.adapters.firebase_auth import FirebaseAuthClient
from ecobreak.config.settings import Settings
from ecobreak.models.base import utc_now_iso
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.exceptions import UnauthorizedError

logger = structlog.get_logger(__name__)


class AdminService:
    """Authenticates the admin account and lists app users."""

    def __init__(
        self,
        settings: Settings,
        auth_client: FirebaseAuthClient,
        user_repo: UserRepository,
    ) -> None:
        self.settings = settings
        self.auth_client = auth_client
        self.user_repo = user_repo

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Check admin credentials and mint a custom token.

        Args:
            email: Submitted email.
            password: Submitted password.

        Returns:
            Admin session payload with the custom token.

        Raises:
            UnauthorizedError: The credentials do not match.
        """
        valid_email = hmac.compare_digest(email, self.settings.ADMIN_EMAIL)
        valid_password = hmac.compare_digest(password, self.settings.ADMIN_PASSWORD)
        if not (valid_email and valid_password):
            logger.warning("admin_login_rejected", email=email)
            raise UnauthorizedError("Credenciales inválidas")

        uid = f"admin-{int(time.time() * 1000)}"
        token = self.auth_client.create_custom_token(uid, {"admin": True, "email": email})

        logger.info("admin_logged_in", uid=uid)
        return {
            "email": email,
            "role": "admin",
            "permissions": ["full_access"],
            "token": token,
            "timestamp": utc_now_iso(),
        }

    def list_users(self) -> list[dict[str, Any]]:
        """Every Auth user joined with its profile document."""
        auth_users = list(self.auth_client.iter_users())
        profiles = {
            profile.id: profile
            for profile in self.user_repo.get_many([user.uid for user in auth_users])
        }

        users = []
        for auth_user in auth_users:
            profile = profiles.get(auth_user.uid)
            display_name = (profile.full_name if profile else "") or auth_user.display_name
            users.append(
                {
                    "uid": auth_user.uid,
                    "email": auth_user.email,
                    "displayName": display_name,
                    "photoURL": auth_user.photo_url,
                    "disabled": auth_user.disabled,
                    "status": "disabled" if auth_user.disabled else "active",
                    "creationTime": auth_user.creation_time,
                    "lastSignInTime": auth_user.last_sign_in_time,
                    "groupId": profile.group_id if profile else None,
                }
            )
        logger.info("admin_users_listed", count=len(users))
        return users
