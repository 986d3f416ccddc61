"""Shared clients for request handlers.

Clients are created once in the application lifespan and stored on
``app.state``. When a handler runs outside the lifespan (scripts, some
tests) they are built from settings instead.
"""

from fastapi import Request

from ecobreak.adapters.drive_client import DriveClient
from ecobreak.adapters.firebase_app import google_credentials, initialize_firebase
from ecobreak.adapters.firebase_auth import FirebaseAuthClient
from ecobreak.adapters.firestore_client import FirestoreClient
from ecobreak.adapters.messaging_client import MessagingClient
from ecobreak.config.settings import Settings, get_settings


def get_app_settings(request: Request | None = None) -> Settings:
    """Settings stored on the app, or the process singleton."""
    if request and hasattr(request.app.state, "settings"):
        settings: Settings = request.app.state.settings
        return settings
    return get_settings()


def get_firestore(request: Request | None = None) -> FirestoreClient:
    """FirestoreClient from ``app.state`` or a new one."""
    if request and hasattr(request.app.state, "firestore"):
        firestore: FirestoreClient = request.app.state.firestore
        return firestore

    settings = get_app_settings(request)
    app = initialize_firebase(settings)
    return FirestoreClient(
        project_id=settings.FIREBASE_PROJECT_ID, credentials=google_credentials(app)
    )


def get_auth_client(request: Request | None = None) -> FirebaseAuthClient:
    """FirebaseAuthClient from ``app.state`` or a new one."""
    if request and hasattr(request.app.state, "auth"):
        auth_client: FirebaseAuthClient = request.app.state.auth
        return auth_client
    return FirebaseAuthClient(initialize_firebase(get_app_settings(request)))


def get_messaging_client(request: Request | None = None) -> MessagingClient:
    """MessagingClient from ``app.state`` or a new one."""
    if request and hasattr(request.app.state, "messaging"):
        messaging: MessagingClient = request.app.state.messaging
        return messaging
    return MessagingClient(initialize_firebase(get_app_settings(request)))


def get_drive_client(request: Request | None = None) -> DriveClient | None:
    """DriveClient from ``app.state``; None when no service account is set."""
    if request and hasattr(request.app.state, "drive"):
        drive: DriveClient | None = request.app.state.drive
        return drive

    info = get_app_settings(request).service_account_info()
    return DriveClient(info) if info else None
