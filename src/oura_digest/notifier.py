"""Digest delivery via the LINE Messaging API push endpoint."""

import httpx
import structlog

from .config import LineSettings
from .errors import TransportError, UpstreamError
from .metrics import DELIVERIES

logger = structlog.get_logger(__name__)


def build_push_payload(recipient_id: str, text: str) -> dict:
    """Build the push request body for a single text message."""
    return {
        "to": recipient_id,
        "messages": [{"type": "text", "text": text}],
    }


class LineNotifier:
    """Pushes one text message to one fixed LINE user."""

    def __init__(self, settings: LineSettings, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the notifier.

        Args:
            settings: LINE settings carrying token and recipient.
            client: Optional shared HTTP client.
        """
        self._settings = settings
        self._client = client

    async def notify(self, text: str, kind: str = "report") -> None:
        """Send ``text`` to the configured recipient.

        Exactly one request is made; failures are not retried.

        Args:
            text: Message body.
            kind: Label for metrics and logs (``report`` or ``fallback``).

        Raises:
            UpstreamError: If LINE answers with anything but 200.
            TransportError: On connection failure or timeout.
        """
        payload = build_push_payload(self._settings.recipient_id, text)
        headers = {
            "Authorization": f"Bearer {self._settings.api_token}",
            "Content-Type": "application/json",
        }

        try:
            if self._client is not None:
                response = await self._client.post(
                    self._settings.push_url, json=payload, headers=headers
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self._settings.push_url, json=payload, headers=headers
                    )
        except httpx.TransportError as e:
            DELIVERIES.labels(kind=kind, status="transport_error").inc()
            logger.error("line_push_unreachable", kind=kind, error=repr(e))
            raise TransportError(self._settings.push_url, repr(e)) from e

        if response.status_code != 200:
            DELIVERIES.labels(kind=kind, status="http_error").inc()
            logger.error(
                "line_push_failed",
                kind=kind,
                status=response.status_code,
                body=response.text[:200],
            )
            raise UpstreamError(response.status_code, self._settings.push_url)

        DELIVERIES.labels(kind=kind, status="success").inc()
        logger.info("line_push_delivered", kind=kind, message_length=len(text))
