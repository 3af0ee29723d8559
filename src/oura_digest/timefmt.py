"""Date and duration formatting."""

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import DEFAULT_TIMEZONE
from .errors import ConfigError

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-date range sent as ``start_date``/``end_date``."""

    start: str
    end: str


def load_timezone(name: str = DEFAULT_TIMEZONE) -> tzinfo:
    """Load a timezone from the tz database.

    Raises:
        ConfigError: If the zone is not available on this host.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Timezone '{name}' is not available: {e}") from e


def format_date(instant: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Render the calendar date of ``instant`` in the reference timezone."""
    return instant.astimezone(load_timezone(tz_name)).strftime(DATE_FORMAT)


def format_duration(seconds: int) -> str:
    """Render a second count as ``HHh:MMm:SSs``.

    Hours are not wrapped at 24. Callers must pass a non-negative value.
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}h:{minutes:02d}m:{secs:02d}s"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ``YYYY-MM-DD HH:MM:SS`` in its own offset."""
    return value.strftime(TIMESTAMP_FORMAT)


def date_window(now: datetime, days_back: int, tz_name: str = DEFAULT_TIMEZONE) -> DateWindow:
    """Build the window from ``days_back`` days before ``now`` through ``now``.

    Each bound is the reference-timezone date of the shifted instant, so a
    24 hour step is taken before the timezone conversion.
    """
    start = now - timedelta(hours=24 * days_back)
    return DateWindow(start=format_date(start, tz_name), end=format_date(now, tz_name))
