"""Daily Oura ring digest delivered over LINE.

Fetches yesterday's activity, sleep and sleep score from the Oura v2 API,
composes a fixed-format report, and pushes it to one LINE user. When any
category has no data for the window a fixed warning is sent instead.

Modules:
    config: Configuration management using pydantic-settings
    source: Oura usercollection client
    decoder: Response decoding and authoritative record selection
    composer: Report template
    notifier: LINE push delivery
    pipeline: Orchestration of one run

Example:
    Run once (typically from cron)::

        $ oura-digest

    Preview without sending::

        $ oura-digest --dry-run
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .errors import ConfigError, DecodeError, DigestError, TransportError, UpstreamError
from .pipeline import DigestPipeline, DigestResult, Outcome

__all__ = [
    "ConfigError",
    "DecodeError",
    "DigestError",
    "DigestPipeline",
    "DigestResult",
    "Outcome",
    "Settings",
    "TransportError",
    "UpstreamError",
    "get_settings",
    "__version__",
]
