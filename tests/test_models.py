"""
Tests for ScoreEvent model helpers and immutability.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from scoreboard.decoder import decode
from scoreboard.models import Competition, Competitor, Status, StatusType, Team, Ticket
from scoreboard.utils.helpers import parse_iso_datetime, safe_lower

from conftest import make_event, make_payload


def _competitor(name, home_away=None, score=None):
    return Competitor(team=Team(display_name=name), home_away=home_away, score=score)


def _status(description, **kwargs):
    return Status(type=StatusType(description=description, **kwargs))


def test_events_are_frozen(scenario_payload):
    (event,) = decode(scenario_payload)
    with pytest.raises(ValidationError):
        event.name = "changed"


def test_sequences_are_tuples(scenario_payload):
    (event,) = decode(scenario_payload)
    assert isinstance(event.competitions, tuple)
    assert isinstance(event.competitions[0].competitors, tuple)


def test_start_time_parses_minute_precision(scenario_payload):
    (event,) = decode(scenario_payload)
    assert event.start_time == datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc)


def test_start_time_unparseable_is_none():
    event = make_event()
    event["date"] = "tomorrow-ish"
    (decoded,) = decode(make_payload(event))
    assert decoded.start_time is None


def test_competition_and_status_shortcuts(scenario_payload):
    (event,) = decode(scenario_payload)
    assert event.competition is event.competitions[0]
    assert event.status.type.description == "Final"


def test_event_without_competitions():
    event = make_event()
    event["competitions"] = []
    (decoded,) = decode(make_payload(event))
    assert decoded.competition is None
    assert decoded.status is None


def test_home_away_by_position_when_untagged():
    competition = Competition(
        competitors=(_competitor("Home"), _competitor("Away")),
        status=_status("Scheduled"),
    )
    assert competition.home.team.display_name == "Home"
    assert competition.away.team.display_name == "Away"


def test_home_away_by_tag():
    competition = Competition(
        competitors=(_competitor("Visitors", "away"), _competitor("Hosts", "home")),
        status=_status("Scheduled"),
    )
    assert competition.home.team.display_name == "Hosts"
    assert competition.away.team.display_name == "Visitors"


def test_status_flags_from_state():
    assert _status("In Progress", state="in").is_live
    assert not _status("In Progress", state="in").is_final
    assert _status("Final", state="post", completed=True).is_final


def test_status_flags_from_description_only():
    assert _status("In Progress").is_live
    assert _status("Final/OT").is_final
    assert not _status("Scheduled").is_live
    assert not _status("Scheduled").is_final


def test_overall_record(full_payload):
    (event,) = decode(full_payload)
    assert event.competition.home.overall_record == "46-36"
    assert _competitor("No Records").overall_record is None


def test_ticket_identity_is_href():
    a = Ticket(summary="From $20", href="https://t/1")
    b = Ticket(summary="From $25", href="https://t/1")
    c = Ticket(summary="From $20", href="https://t/2")
    assert a == b
    assert a != c
    assert len({a, b, c}) == 2


def test_parse_iso_datetime_variants():
    assert parse_iso_datetime("2024-01-01T18:00:30Z").second == 30
    assert parse_iso_datetime("2024-01-01T18:00:00+02:00").hour == 16
    assert parse_iso_datetime("") is None
    assert parse_iso_datetime(None) is None


def test_safe_lower():
    assert safe_lower(None) == ""
    assert safe_lower("FINAL") == "final"
