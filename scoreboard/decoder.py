"""
Scoreboard payload decoder.

Turns the raw body of a scoreboard response into a tuple of ScoreEvent
records. Optional fields decode to None when absent, unknown fields are
dropped; anything that violates the required shape raises
MalformedPayloadError.
"""
import logging
from typing import Any, Dict, Iterable, Tuple, Union

from pydantic import ValidationError

from scoreboard.errors import MalformedPayloadError
from scoreboard.models import ApiModel, ScoreEvent

logger = logging.getLogger("scoreboard.decoder")


class Scoreboard(ApiModel):
    """Top-level response envelope: {"events": [...]}."""
    events: Tuple[ScoreEvent, ...]


def _describe(error: ValidationError) -> str:
    """First validation problem as 'location: message'."""
    first = error.errors()[0]
    if first.get("type") == "json_invalid":
        return f"invalid JSON ({first.get('ctx', {}).get('error', first['msg'])})"
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first['msg']}"


def decode(raw_payload: Union[bytes, str]) -> Tuple[ScoreEvent, ...]:
    """
    Decode a scoreboard response body.

    Args:
        raw_payload: UTF-8 JSON bytes (or an already-decoded str)

    Returns:
        Events in payload order; empty when no games are scheduled

    Raises:
        MalformedPayloadError: invalid JSON, a missing/mistyped required
            field, or two events sharing an id
    """
    try:
        scoreboard = Scoreboard.model_validate_json(raw_payload)
    except ValidationError as e:
        raise MalformedPayloadError(_describe(e)) from e

    seen = set()
    for index, event in enumerate(scoreboard.events):
        if event.id in seen:
            raise MalformedPayloadError(f"events.{index}.id: duplicate event id {event.id!r}")
        seen.add(event.id)

    logger.debug(f"Decoded {len(scoreboard.events)} events")
    return scoreboard.events


def encode(events: Iterable[ScoreEvent]) -> Dict[str, Any]:
    """
    Encode events back into the response's JSON shape.

    Absent optional fields are omitted, so decoding the result yields
    values equal to the input.
    """
    return {
        "events": [
            event.model_dump(mode="json", by_alias=True, exclude_none=True)
            for event in events
        ]
    }
