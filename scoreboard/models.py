"""
Data models for scoreboard events.

These models mirror the shape of the scoreboard API's JSON and are the
canonical, immutable representation handed to subscribers. Every model is
frozen and stores sequences as tuples, so a published snapshot can be shared
between observers without copying.

Unknown fields are ignored so that additions to the upstream schema never
break decoding.
"""
from datetime import datetime
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from scoreboard.utils.helpers import parse_iso_datetime, safe_lower


class ApiModel(BaseModel):
    """Base model: frozen, camelCase on the wire, extra fields dropped."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ===== TEAM / COMPETITOR =====

class Team(ApiModel):
    """Team identity as shown on the scoreboard."""
    display_name: str
    id: Optional[str] = None
    abbreviation: Optional[str] = None
    location: Optional[str] = None
    logo: Optional[str] = None  # URL


class Record(ApiModel):
    """A season record line, e.g. type "total" / summary "10-5"."""
    type: str
    summary: str
    name: Optional[str] = None


class Competitor(ApiModel):
    """One team's participation in a competition."""
    team: Team
    score: Optional[str] = None  # absent before the game starts
    home_away: Optional[str] = None  # "home" / "away"
    winner: Optional[bool] = None
    records: Optional[Tuple[Record, ...]] = None

    @property
    def overall_record(self) -> Optional[str]:
        """Summary of the "total" record, if one was reported."""
        for record in self.records or ():
            if safe_lower(record.type) == "total":
                return record.summary
        return None


# ===== STATUS =====

class StatusType(ApiModel):
    description: str  # "Final", "In Progress", "Scheduled", ...
    state: Optional[str] = None  # "pre", "in", "post"
    completed: Optional[bool] = None
    detail: Optional[str] = None
    short_detail: Optional[str] = None


class Status(ApiModel):
    """Game status: description plus clock and period while in progress."""
    type: StatusType
    clock: Optional[float] = None  # seconds remaining in the period
    display_clock: Optional[str] = None
    period: Optional[int] = None

    @property
    def is_live(self) -> bool:
        if self.type.state is not None:
            return safe_lower(self.type.state) == "in"
        return safe_lower(self.type.description) == "in progress"

    @property
    def is_final(self) -> bool:
        if self.type.completed is not None:
            return self.type.completed
        if self.type.state is not None:
            return safe_lower(self.type.state) == "post"
        return safe_lower(self.type.description).startswith("final")


# ===== VENUE / BROADCAST / TICKETS =====

class Address(ApiModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class Venue(ApiModel):
    full_name: str
    address: Optional[Address] = None
    indoor: Optional[bool] = None


class Broadcast(ApiModel):
    """Broadcast networks for a market, e.g. market "national", names ("ESPN",)."""
    market: Optional[str] = None
    names: Tuple[str, ...] = ()


class Ticket(ApiModel):
    """
    Ticket offer. Identity is the href: two tickets pointing at the same
    URL compare equal even if the summary text changed.
    """
    summary: str
    href: str

    @model_validator(mode="before")
    @classmethod
    def _href_from_links(cls, data: Any) -> Any:
        # The live feed nests the URL under links[0].href
        if isinstance(data, dict) and "href" not in data:
            links = data.get("links")
            if isinstance(links, list) and links and isinstance(links[0], dict) and "href" in links[0]:
                data = {**data, "href": links[0]["href"]}
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ticket):
            return NotImplemented
        return self.href == other.href

    def __hash__(self) -> int:
        return hash(self.href)


# ===== COMPETITION / EVENT =====

class Competition(ApiModel):
    """A single contest within an event: competitors, status, venue."""
    competitors: Tuple[Competitor, ...]
    status: Status
    venue: Optional[Venue] = None
    attendance: Optional[int] = None
    broadcasts: Optional[Tuple[Broadcast, ...]] = None
    tickets: Optional[Tuple[Ticket, ...]] = None

    def _side(self, side: str, position: int) -> Optional[Competitor]:
        for competitor in self.competitors:
            if safe_lower(competitor.home_away) == side:
                return competitor
        if any(c.home_away for c in self.competitors):
            return None
        if len(self.competitors) > position:
            return self.competitors[position]
        return None

    @property
    def home(self) -> Optional[Competitor]:
        """Home competitor by tag, falling back to the first position."""
        return self._side("home", 0)

    @property
    def away(self) -> Optional[Competitor]:
        """Away competitor by tag, falling back to the second position."""
        return self._side("away", 1)


class ScoreEvent(ApiModel):
    """
    One sporting event's current state as reported by the scoreboard API.

    Constructed fresh on every decode; a newer fetch supersedes the whole
    event rather than patching it.
    """
    id: str
    name: str
    date: str  # ISO-8601, as received
    competitions: Tuple[Competition, ...]
    short_name: Optional[str] = None

    @property
    def start_time(self) -> Optional[datetime]:
        """Scheduled start as an aware UTC datetime, None if unparseable."""
        return parse_iso_datetime(self.date)

    @property
    def competition(self) -> Optional[Competition]:
        """The first (and in practice only) competition of the event."""
        return self.competitions[0] if self.competitions else None

    @property
    def status(self) -> Optional[Status]:
        competition = self.competition
        return competition.status if competition else None
