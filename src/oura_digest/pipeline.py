"""Daily digest pipeline: fetch, decode, compose or fall back, deliver."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

import structlog
from opentelemetry import trace

from .composer import NO_DATA_MESSAGE, compose
from .config import Settings
from .decoder import decode_activity, decode_sleep, decode_sleep_score, select_authoritative
from .notifier import LineNotifier
from .source import OuraClient
from .timefmt import DateWindow, date_window

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


def _window_attributes(window: DateWindow) -> dict[str, str]:
    return {"digest.window.start": window.start, "digest.window.end": window.end}


class Outcome(str, Enum):
    """How a successful run ended."""

    REPORT_SENT = "report_sent"
    FALLBACK_SENT = "fallback_sent"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class DigestResult:
    """Result of one pipeline run."""

    outcome: Outcome
    message: str
    has_data: bool


class DigestPipeline:
    """Sequences the daily digest.

    Fetches run one after another. Any fetch or decode error propagates
    before a message is sent; only an empty but valid page leads to the
    fallback message.
    """

    def __init__(
        self,
        settings: Settings,
        oura: OuraClient | None = None,
        notifier: LineNotifier | None = None,
    ) -> None:
        self._settings = settings
        self._oura = oura or OuraClient(settings.oura)
        self._notifier = notifier or LineNotifier(settings.line)

    async def run(self, now: datetime | None = None, dry_run: bool = False) -> DigestResult:
        """Run the pipeline once.

        Args:
            now: Reference instant. Defaults to the current time.
            dry_run: Build the message but do not send it.

        Returns:
            DigestResult describing what was (or would have been) sent.

        Raises:
            DigestError: On any configuration, transport, upstream or decode
                failure. Nothing is sent in that case.
        """
        if now is None:
            now = datetime.now(UTC)

        tz_name = self._settings.app.timezone
        # Sleep score is assigned on waking, so it is looked up for today only.
        two_day_window = date_window(now, days_back=1, tz_name=tz_name)
        today_window = date_window(now, days_back=0, tz_name=tz_name)

        logger.info(
            "digest_started",
            reference_time=now.isoformat(),
            window_start=two_day_window.start,
            window_end=two_day_window.end,
            dry_run=dry_run,
        )

        with tracer.start_as_current_span(
            "digest.fetch.daily_activity", attributes=_window_attributes(two_day_window)
        ):
            activity_body = await self._oura.fetch_daily_activity(two_day_window)
        with tracer.start_as_current_span(
            "digest.fetch.sleep", attributes=_window_attributes(two_day_window)
        ):
            sleep_body = await self._oura.fetch_sleep(two_day_window)
        with tracer.start_as_current_span(
            "digest.fetch.daily_sleep", attributes=_window_attributes(today_window)
        ):
            sleep_score_body = await self._oura.fetch_daily_sleep(today_window)

        activity = select_authoritative(decode_activity(activity_body))
        sleep = select_authoritative(decode_sleep(sleep_body))
        sleep_score = select_authoritative(decode_sleep_score(sleep_score_body))

        if activity is None or sleep is None or sleep_score is None:
            logger.warning(
                "digest_no_data",
                activity=activity is not None,
                sleep=sleep is not None,
                sleep_score=sleep_score is not None,
            )
            return await self._deliver(NO_DATA_MESSAGE, Outcome.FALLBACK_SENT, False, dry_run)

        message = compose(activity, sleep, sleep_score)
        return await self._deliver(message, Outcome.REPORT_SENT, True, dry_run)

    async def _deliver(
        self, message: str, outcome: Outcome, has_data: bool, dry_run: bool
    ) -> DigestResult:
        kind = "report" if has_data else "fallback"
        if dry_run:
            logger.info("digest_dry_run", kind=kind, message_length=len(message))
            return DigestResult(outcome=Outcome.DRY_RUN, message=message, has_data=has_data)

        with tracer.start_as_current_span("digest.deliver", attributes={"digest.kind": kind}):
            await self._notifier.notify(message, kind=kind)

        logger.info("digest_completed", outcome=outcome.value)
        return DigestResult(outcome=outcome, message=message, has_data=has_data)
