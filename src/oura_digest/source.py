"""Oura v2 usercollection client."""

import time

import httpx
import structlog

from .config import OuraSettings
from .errors import TransportError, UpstreamError
from .metrics import FETCH_DURATION, FETCHES
from .timefmt import DateWindow

logger = structlog.get_logger(__name__)

DAILY_ACTIVITY = "daily_activity"
SLEEP = "sleep"
DAILY_SLEEP = "daily_sleep"


class OuraClient:
    """Fetches raw usercollection pages from the Oura API."""

    def __init__(self, settings: OuraSettings, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the Oura client.

        Args:
            settings: Oura API settings.
            client: Optional shared HTTP client. A short-lived client is
                opened per request when omitted.
        """
        self._settings = settings
        self._client = client

    def endpoint(self, category: str) -> str:
        """Return the absolute URL of a usercollection category."""
        return f"{self._settings.base_url}/{category}"

    async def fetch(self, endpoint: str, start_date: str, end_date: str) -> bytes:
        """Fetch one page for an inclusive date range.

        Args:
            endpoint: Absolute endpoint URL.
            start_date: First day, ``YYYY-MM-DD``.
            end_date: Last day, ``YYYY-MM-DD``.

        Returns:
            The raw response body.

        Raises:
            UpstreamError: If the API answers with anything but 200.
            TransportError: On connection failure or timeout.
        """
        category = endpoint.rsplit("/", 1)[-1]
        params = {"start_date": start_date, "end_date": end_date}
        headers = {"Authorization": f"Bearer {self._settings.api_token}"}

        logger.info("oura_fetch_started", category=category, **params)
        started = time.monotonic()
        try:
            if self._client is not None:
                response = await self._client.get(
                    endpoint,
                    params=params,
                    headers=headers,
                    timeout=self._settings.timeout_seconds,
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        endpoint,
                        params=params,
                        headers=headers,
                        timeout=self._settings.timeout_seconds,
                    )
        except httpx.TransportError as e:
            FETCHES.labels(category=category, status="transport_error").inc()
            logger.error("oura_fetch_unreachable", category=category, error=repr(e))
            raise TransportError(endpoint, repr(e)) from e
        finally:
            FETCH_DURATION.labels(category=category).observe(time.monotonic() - started)

        if response.status_code != 200:
            FETCHES.labels(category=category, status="http_error").inc()
            logger.error("oura_fetch_http_error", category=category, status=response.status_code)
            raise UpstreamError(response.status_code, endpoint)

        FETCHES.labels(category=category, status="success").inc()
        logger.info("oura_fetch_completed", category=category, size=len(response.content))
        return response.content

    async def fetch_daily_activity(self, window: DateWindow) -> bytes:
        return await self.fetch(self.endpoint(DAILY_ACTIVITY), window.start, window.end)

    async def fetch_sleep(self, window: DateWindow) -> bytes:
        return await self.fetch(self.endpoint(SLEEP), window.start, window.end)

    async def fetch_daily_sleep(self, window: DateWindow) -> bytes:
        return await self.fetch(self.endpoint(DAILY_SLEEP), window.start, window.end)
