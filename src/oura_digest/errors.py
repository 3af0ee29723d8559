"""Error taxonomy for the digest pipeline.

Every error here is fatal: the CLI logs it and exits non-zero. An empty
category is not an error and never raises; it routes to the fallback message.
"""


class DigestError(Exception):
    """Base class for all digest pipeline failures."""

    pass


class ConfigError(DigestError):
    """Raised when required configuration or timezone data is unavailable."""

    pass


class TransportError(DigestError):
    """Raised when an API cannot be reached (connection failure or timeout)."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Transport failure calling {endpoint}: {reason}")


class UpstreamError(DigestError):
    """Raised when an API answers with a non-200 status."""

    def __init__(self, status: int, endpoint: str) -> None:
        self.status = status
        self.endpoint = endpoint
        super().__init__(f"HTTP {status} from {endpoint}")


class DecodeError(DigestError):
    """Raised when a response body is not JSON or does not match its shape."""

    def __init__(self, category: str, reason: str) -> None:
        self.category = category
        self.reason = reason
        super().__init__(f"Failed to decode {category} response: {reason}")
