"""Firebase Admin app initialization."""

import firebase_admin
import structlog
from firebase_admin import credentials
from google.auth.credentials import Credentials

from ecobreak.config.settings import Settings

logger = structlog.get_logger(__name__)


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase Admin app.

    Service account credentials come from FIREBASE_CLIENT_EMAIL /
    FIREBASE_PRIVATE_KEY or FIREBASE_CONFIG_BASE64. Without either the app
    falls back to Application Default Credentials, which is also what the
    emulators expect.

    Args:
        settings: Application settings.

    Returns:
        The default Firebase app.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    info = settings.service_account_info()
    credential: credentials.Base | None = None
    if info is not None:
        credential = credentials.Certificate(info)

    app = firebase_admin.initialize_app(
        credential=credential,
        options={"projectId": settings.FIREBASE_PROJECT_ID},
    )
    logger.info(
        "firebase_initialized",
        project_id=settings.FIREBASE_PROJECT_ID,
        service_account=info is not None,
    )
    return app


def google_credentials(app: firebase_admin.App) -> Credentials | None:
    """Return the google-auth credentials behind a Firebase app.

    Args:
        app: Initialized Firebase app.

    Returns:
        Credentials for Google Cloud clients, or None for ADC.
    """
    if isinstance(app.credential, credentials.Certificate):
        return app.credential.get_credential()
    return None
