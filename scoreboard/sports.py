"""
Sport registry and scoreboard endpoint derivation.

A sport is identified on the API by its sportPath ("basketball/nba");
the registry adds short keys and display labels for the leagues the app
ships with.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from config.settings import settings

SCOREBOARD_PATH_TEMPLATE = "/apis/site/v2/sports/{sport_path}/scoreboard"

# <sport>/<league>, e.g. "football/college-football"
_SPORT_PATH_RE = re.compile(r"^[a-z0-9][a-z0-9.\-]*/[a-z0-9][a-z0-9.\-]*$")


@dataclass(frozen=True)
class Sport:
    """A supported league."""
    key: str
    path: str
    label: str


SPORTS: Dict[str, Sport] = {
    "nfl": Sport("nfl", "football/nfl", "NFL"),
    "nba": Sport("nba", "basketball/nba", "NBA"),
    "mlb": Sport("mlb", "baseball/mlb", "MLB"),
    "wnba": Sport("wnba", "basketball/wnba", "WNBA"),
    "nhl": Sport("nhl", "hockey/nhl", "NHL"),
}

_REGISTRY_PATHS = {sport.path for sport in SPORTS.values()}


def is_valid_sport_path(value: str) -> bool:
    """Check that a sportPath has the '<sport>/<league>' shape."""
    return bool(_SPORT_PATH_RE.match(value))


def resolve_sport_path(value: Optional[str], extra_paths: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Map a registry key or a known sportPath to a sportPath.

    Known paths are the registry's own plus the allow-list (extra_paths,
    default settings.extra_sport_paths). A well-formed path outside both is
    still unknown and yields None, as does anything malformed.
    """
    if not value or not isinstance(value, str):
        return None
    candidate = value.strip().strip("/").lower()
    sport = SPORTS.get(candidate)
    if sport:
        return sport.path
    if candidate in _REGISTRY_PATHS:
        return candidate

    allowed = settings.extra_sport_paths if extra_paths is None else extra_paths
    if is_valid_sport_path(candidate) and candidate in {p.strip("/").lower() for p in allowed}:
        return candidate
    return None


def scoreboard_url(sport_path: str, base_url: Optional[str] = None) -> str:
    """Build the scoreboard endpoint URL for a sportPath."""
    base = (base_url or settings.base_url).rstrip("/")
    return base + SCOREBOARD_PATH_TEMPLATE.format(sport_path=sport_path)
