"""External service adapters."""

from ecobreak.adapters.drive_client import DriveClient
from ecobreak.adapters.firebase_app import initialize_firebase
from ecobreak.adapters.firebase_auth import AuthUser, FirebaseAuthClient
from ecobreak.adapters.firestore_client import FirestoreClient, WriteOp
from ecobreak.adapters.messaging_client import MessagingClient, PushResult

__all__ = [
    "AuthUser",
    "DriveClient",
    "FirebaseAuthClient",
    "FirestoreClient",
    "MessagingClient",
    "PushResult",
    "WriteOp",
    "initialize_firebase",
]
