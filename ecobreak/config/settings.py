"""Application settings using Pydantic Settings."""

import base64
import json
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables.

    All required settings must be provided via environment variables or .env file.
    Optional settings have default values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Firebase
    # -------------------------------------------------------------------------
    FIREBASE_PROJECT_ID: str
    FIREBASE_CLIENT_EMAIL: str | None = None
    FIREBASE_PRIVATE_KEY: str | None = None

    # Base64-encoded service account JSON (Drive API, Firebase fallback)
    FIREBASE_CONFIG_BASE64: str | None = None

    # Firestore Emulator (local development)
    FIRESTORE_EMULATOR_HOST: str | None = None

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------
    ADMIN_EMAIL: str
    ADMIN_PASSWORD: str

    # -------------------------------------------------------------------------
    # Google Drive
    # -------------------------------------------------------------------------
    DRIVE_VIDEO_FOLDER_IDS: list[str] = [
        "1iSJMKnKE0oXp3QxlY03nsKQsv1KHMbhc",
        "1PKmm05PopK40UjKrQaBQpiAL8bb2Nx-V",
    ]
    """Folders whose videos may back an activity"""

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------
    NOTIFICATION_TIMEZONE: str = "America/Bogota"

    REMINDER_LEAD_MINUTES: int = 60
    """How long before a plan slot the reminder goes out"""

    REMINDER_WINDOW_MINUTES: int = 5
    """Tolerance around the reminder time (matches the scheduler period)"""

    ACTIVITY_REMINDER_MINUTE_WINDOW: int = 4
    """Activity reminders only fire in the first minutes of the hour"""

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    ENVIRONMENT: str = "development"
    PORT: int = 4300
    LOG_JSON: bool = True
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:4200",
        "http://localhost:4300",
        "http://localhost:*",
        "http://127.0.0.1:*",
    ]

    @property
    def is_local(self) -> bool:
        """Check if running in local development mode."""
        return self.FIRESTORE_EMULATOR_HOST is not None

    @property
    def private_key(self) -> str | None:
        """Private key with escaped newlines expanded."""
        if self.FIREBASE_PRIVATE_KEY is None:
            return None
        return self.FIREBASE_PRIVATE_KEY.replace("\\n", "\n")

    def service_account_info(self) -> dict[str, Any] | None:
        """Build service account info for Google credentials.

        Explicit FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY win over the
        base64 JSON bundle.

        Returns:
            Service account dict, or None when no credentials are configured.
        """
        if self.FIREBASE_CLIENT_EMAIL and self.private_key:
            return {
                "type": "service_account",
                "project_id": self.FIREBASE_PROJECT_ID,
                "client_email": self.FIREBASE_CLIENT_EMAIL,
                "private_key": self.private_key,
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        if self.FIREBASE_CONFIG_BASE64:
            decoded = base64.b64decode(self.FIREBASE_CONFIG_BASE64).decode("utf-8")
            info: dict[str, Any] = json.loads(decoded)
            return info
        return None


# Singleton instance (lazy initialization)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
