"""Firebase Cloud Messaging client."""

from dataclasses import dataclass, field

import firebase_admin
import structlog
from firebase_admin import messaging

logger = structlog.get_logger(__name__)

# FCM accepts at most 500 tokens per multicast
MULTICAST_LIMIT = 500


@dataclass
class PushResult:
    """Outcome of a multicast push."""

    success_count: int = 0
    failure_count: int = 0
    invalid_tokens: list[str] = field(default_factory=list)


class MessagingClient:
    """Client for sending push notifications through FCM."""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        """Initialize messaging client.

        Args:
            app: Firebase app (default app when None).
        """
        self._app = app

    def send_multicast(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> PushResult:
        """Send the same notification to many devices.

        Args:
            tokens: FCM registration tokens.
            title: Notification title.
            body: Notification body.
            data: Optional data payload (values must be strings).

        Returns:
            Aggregated delivery result.
        """
        result = PushResult()
        unique_tokens = list(dict.fromkeys(t for t in tokens if t))
        if not unique_tokens:
            return result

        payload = {k: str(v) for k, v in (data or {}).items()}
        for start in range(0, len(unique_tokens), MULTICAST_LIMIT):
            chunk = unique_tokens[start : start + MULTICAST_LIMIT]
            message = messaging.MulticastMessage(
                tokens=chunk,
                notification=messaging.Notification(title=title, body=body),
                data=payload,
            )
            response = messaging.send_each_for_multicast(message, app=self._app)
            result.success_count += response.success_count
            result.failure_count += response.failure_count
            for token, send_response in zip(chunk, response.responses, strict=True):
                if not send_response.success and isinstance(
                    send_response.exception, messaging.UnregisteredError
                ):
                    result.invalid_tokens.append(token)

        logger.info(
            "push_sent",
            title=title,
            success_count=result.success_count,
            failure_count=result.failure_count,
        )
        return result
