"""Tests for Settings configuration."""

import base64
import json

import pytest
from pydantic import ValidationError


class TestSettings:
    """Test Settings class."""

    def test_settings_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should load values from environment variables."""
        monkeypatch.setenv("FIREBASE_PROJECT_ID", "ecobreak-test")
        monkeypatch.setenv("ADMIN_EMAIL", "admin@ecobreak.test")
        monkeypatch.setenv("ADMIN_PASSWORD", "secret")

        from ecobreak.config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.FIREBASE_PROJECT_ID == "ecobreak-test"
        assert settings.ADMIN_EMAIL == "admin@ecobreak.test"
        assert settings.ADMIN_PASSWORD == "secret"

    def test_settings_missing_required_raises_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Settings should raise ValidationError when required vars are missing."""
        monkeypatch.delenv("FIREBASE_PROJECT_ID", raising=False)
        monkeypatch.delenv("ADMIN_EMAIL", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        from ecobreak.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_settings_defaults(self) -> None:
        """Optional settings should fall back to their defaults."""
        from ecobreak.config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.PORT == 4300
        assert settings.NOTIFICATION_TIMEZONE == "America/Bogota"
        assert settings.REMINDER_LEAD_MINUTES == 60
        assert len(settings.DRIVE_VIDEO_FOLDER_IDS) == 2

    def test_settings_is_local_property(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """is_local should return True when FIRESTORE_EMULATOR_HOST is set."""
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8086")

        from ecobreak.config.settings import Settings

        assert Settings(_env_file=None).is_local is True

    def test_settings_is_local_false_when_no_emulator(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """is_local should return False when FIRESTORE_EMULATOR_HOST is not set."""
        monkeypatch.delenv("FIRESTORE_EMULATOR_HOST", raising=False)

        from ecobreak.config.settings import Settings

        assert Settings(_env_file=None).is_local is False

    def test_cors_origins_parsed_from_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CORS_ORIGINS should accept a JSON list."""
        monkeypatch.setenv("CORS_ORIGINS", '["https://admin.ecobreak.app"]')

        from ecobreak.config.settings import Settings

        assert Settings(_env_file=None).CORS_ORIGINS == ["https://admin.ecobreak.app"]


class TestServiceAccountInfo:
    """Test service account resolution."""

    def test_explicit_credentials_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Client email and private key should build the account info."""
        monkeypatch.setenv("FIREBASE_CLIENT_EMAIL", "sa@ecobreak.iam.gserviceaccount.com")
        monkeypatch.setenv("FIREBASE_PRIVATE_KEY", "-----BEGIN-----\\nabc\\n-----END-----")
        monkeypatch.setenv("FIREBASE_CONFIG_BASE64", base64.b64encode(b"{}").decode())

        from ecobreak.config.settings import Settings

        info = Settings(_env_file=None).service_account_info()

        assert info is not None
        assert info["client_email"] == "sa@ecobreak.iam.gserviceaccount.com"
        assert info["private_key"] == "-----BEGIN-----\nabc\n-----END-----"
        assert info["project_id"] == "test-project"

    def test_base64_bundle(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """FIREBASE_CONFIG_BASE64 should be decoded when no explicit key is set."""
        bundle = {"type": "service_account", "client_email": "bundle@ecobreak.test"}
        monkeypatch.delenv("FIREBASE_CLIENT_EMAIL", raising=False)
        monkeypatch.delenv("FIREBASE_PRIVATE_KEY", raising=False)
        monkeypatch.setenv(
            "FIREBASE_CONFIG_BASE64", base64.b64encode(json.dumps(bundle).encode()).decode()
        )

        from ecobreak.config.settings import Settings

        assert Settings(_env_file=None).service_account_info() == bundle

    def test_no_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without credentials the info should be None."""
        monkeypatch.delenv("FIREBASE_CLIENT_EMAIL", raising=False)
        monkeypatch.delenv("FIREBASE_PRIVATE_KEY", raising=False)
        monkeypatch.delenv("FIREBASE_CONFIG_BASE64", raising=False)

        from ecobreak.config.settings import Settings

        assert Settings(_env_file=None).service_account_info() is None
