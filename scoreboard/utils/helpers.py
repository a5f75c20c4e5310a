"""
Utility helper functions for safe data handling.
"""
from datetime import datetime, timezone
from typing import Any, Optional


def safe_lower(value: Any) -> str:
    """
    Safely lowercase a value, handling None.

    Args:
        value: Any value to lowercase

    Returns:
        Lowercased string or empty string if None
    """
    if value is None:
        return ""
    return str(value).lower()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse the API's ISO-8601 timestamps into an aware datetime.

    The scoreboard feed emits minute precision without seconds
    ("2024-01-01T18:00Z"), which fromisoformat rejects on older
    interpreters, so the common shapes are tried explicitly.

    Args:
        value: ISO-8601 string or None

    Returns:
        UTC-aware datetime, or None if the value is empty or unparseable
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    for fmt in ("%Y-%m-%dT%H:%M%z", "%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z"):
        try:
            return datetime.strptime(text, fmt).astimezone(timezone.utc)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
