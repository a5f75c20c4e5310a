"""
Shared fixtures: scoreboard payloads and fake HTTP sessions.
"""
import json
import threading
from unittest.mock import MagicMock

import pytest
import requests


# =============================================================================
# Payloads
# =============================================================================

SCENARIO_PAYLOAD = (
    '{"events":[{"id":"401","name":"Team A at Team B","date":"2024-01-01T18:00Z",'
    '"competitions":[{"competitors":[{"team":{"displayName":"Team A","logo":"http://x/a.png",'
    '"abbreviation":"A","location":"City A"},"score":"10"},{"team":{"displayName":"Team B",'
    '"logo":"http://x/b.png","abbreviation":"B","location":"City B"},"score":"7"}],'
    '"status":{"type":{"description":"Final"}}}]}]}'
)


def make_event(event_id="401", name="Team A at Team B", home_score="7", away_score="10"):
    """A minimal valid event dict."""
    return {
        "id": event_id,
        "name": name,
        "date": "2024-01-01T18:00Z",
        "competitions": [{
            "competitors": [
                {"team": {"displayName": "Team B"}, "score": home_score},
                {"team": {"displayName": "Team A"}, "score": away_score},
            ],
            "status": {"type": {"description": "Final"}},
        }],
    }


def make_payload(*events) -> bytes:
    return json.dumps({"events": list(events)}).encode("utf-8")


@pytest.fixture
def scenario_payload():
    return SCENARIO_PAYLOAD.encode("utf-8")


@pytest.fixture
def full_payload():
    """An event carrying every optional field, shaped like the live feed."""
    event = {
        "id": "401584701",
        "uid": "s:40~l:46~e:401584701",
        "name": "Boston Celtics at Miami Heat",
        "shortName": "BOS @ MIA",
        "date": "2024-04-21T17:00Z",
        "season": {"year": 2024, "type": 3},
        "competitions": [{
            "id": "401584701",
            "attendance": 19600,
            "venue": {
                "id": "3435",
                "fullName": "Kaseya Center",
                "address": {"city": "Miami", "state": "FL", "country": "USA"},
                "indoor": True,
            },
            "competitors": [
                {
                    "id": "14",
                    "homeAway": "home",
                    "winner": False,
                    "team": {
                        "id": "14",
                        "displayName": "Miami Heat",
                        "abbreviation": "MIA",
                        "location": "Miami",
                        "logo": "https://a.espncdn.com/i/teamlogos/nba/500/mia.png",
                        "color": "98002e",
                    },
                    "score": "94",
                    "records": [
                        {"name": "overall", "type": "total", "summary": "46-36"},
                        {"name": "Home", "type": "home", "summary": "22-19"},
                    ],
                },
                {
                    "id": "2",
                    "homeAway": "away",
                    "winner": True,
                    "team": {
                        "id": "2",
                        "displayName": "Boston Celtics",
                        "abbreviation": "BOS",
                        "location": "Boston",
                        "logo": "https://a.espncdn.com/i/teamlogos/nba/500/bos.png",
                    },
                    "score": "114",
                    "records": [{"name": "overall", "type": "total", "summary": "64-18"}],
                },
            ],
            "status": {
                "clock": 0.0,
                "displayClock": "0.0",
                "period": 4,
                "type": {
                    "id": "3",
                    "name": "STATUS_FINAL",
                    "state": "post",
                    "completed": True,
                    "description": "Final",
                    "detail": "Final",
                    "shortDetail": "Final",
                },
            },
            "broadcasts": [{"market": "national", "names": ["ABC"]}],
            "tickets": [{
                "summary": "Tickets as low as $45",
                "numberAvailable": 1200,
                "links": [{"href": "https://tickets.example.com/event/401584701"}],
            }],
        }],
    }
    return json.dumps({"leagues": [{"abbreviation": "NBA"}], "events": [event]}).encode("utf-8")


# =============================================================================
# Fake HTTP sessions
# =============================================================================

def make_response(content: bytes, status_code: int = 200):
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def session():
    """Session whose get() returns the response set on session.get.return_value."""
    fake = MagicMock(spec=requests.Session)
    fake.get.return_value = make_response(make_payload(make_event()))
    return fake


class GatedSession:
    """
    Session whose get() blocks until released, one gate per call.

    Tracks how many requests are in flight at once.
    """

    def __init__(self, bodies):
        self._bodies = list(bodies)
        self._lock = threading.Lock()
        self.calls = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.entered = [threading.Event() for _ in self._bodies]
        self.release = [threading.Event() for _ in self._bodies]

    def get(self, url, timeout=None, **kwargs):
        with self._lock:
            index = self.calls
            self.calls += 1
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.entered[index].set()
        self.release[index].wait(timeout=5)
        with self._lock:
            self.in_flight -= 1
        return make_response(self._bodies[index])

    def close(self):
        pass


@pytest.fixture
def gated_session_factory():
    return GatedSession
