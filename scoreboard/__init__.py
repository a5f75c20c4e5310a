"""
Scoreboard polling client.

Polls the public scoreboard API for one or more leagues and publishes the
latest decoded events to subscribers.
"""
import logging
from typing import Optional

from config.settings import settings
from .decoder import decode, encode
from .errors import DecodeError, MalformedPayloadError, NetworkError, ScoreboardError
from .hub import ScoreboardHub
from .models import ScoreEvent
from .polling import CycleOutcome, PollingClient
from .sports import SPORTS, resolve_sport_path, scoreboard_url

__version__ = "0.1.0"


def configure_logging(level: Optional[str] = None) -> None:
    """Console logging for hosts that do not configure it themselves."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "ScoreEvent",
    "decode",
    "encode",
    "PollingClient",
    "CycleOutcome",
    "ScoreboardHub",
    "SPORTS",
    "resolve_sport_path",
    "scoreboard_url",
    "ScoreboardError",
    "NetworkError",
    "DecodeError",
    "MalformedPayloadError",
    "configure_logging",
]
