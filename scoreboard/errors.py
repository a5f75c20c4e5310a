"""
Exception hierarchy for the scoreboard client.

Both failure kinds are handled inside a polling cycle; they are raised by the
lower layers (HTTP fetch, decoder) and never reach subscribers.
"""
from typing import Optional


class ScoreboardError(Exception):
    """Base class for all scoreboard client errors."""


class NetworkError(ScoreboardError):
    """Connection failure, timeout or non-2xx response."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(ScoreboardError):
    """Payload could not be turned into score events."""


class MalformedPayloadError(DecodeError):
    """Invalid JSON, or a required field is missing or has the wrong type."""

    def __init__(self, reason: str):
        super().__init__(f"Malformed scoreboard payload: {reason}")
        self.reason = reason
