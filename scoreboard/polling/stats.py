"""
Cycle outcomes and per-client diagnostics.
"""
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class CycleOutcome(Enum):
    """Result of one fetch-decode-publish cycle."""
    PUBLISHED = "published"
    NETWORK_ERROR = "network_error"
    DECODE_ERROR = "decode_error"
    DISCARDED = "discarded"  # finished after stop() or behind a newer publish
    INERT = "inert"          # client has no valid endpoint


@dataclass
class PollerStats:
    """Counters for one polling client."""
    cycles: int = 0
    publishes: int = 0
    network_errors: int = 0
    decode_errors: int = 0
    discarded: int = 0
    consecutive_failures: int = 0
    last_error: Optional[str] = None
    last_success_at: Optional[str] = None  # ISO timestamp

    def record(self, outcome: CycleOutcome, error: Optional[Exception] = None) -> None:
        self.cycles += 1
        if outcome is CycleOutcome.PUBLISHED:
            self.publishes += 1
            self.consecutive_failures = 0
            self.last_success_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        elif outcome is CycleOutcome.NETWORK_ERROR:
            self.network_errors += 1
            self.consecutive_failures += 1
        elif outcome is CycleOutcome.DECODE_ERROR:
            self.decode_errors += 1
            self.consecutive_failures += 1
        elif outcome is CycleOutcome.DISCARDED:
            self.discarded += 1

        if error is not None:
            self.last_error = str(error)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
