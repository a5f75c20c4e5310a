"""
One polling client per league, managed together.

The hub replaces per-sport fetcher classes: every league gets the same
PollingClient, parameterized by its sportPath, and all clients deliver
notifications through one shared dispatcher.
"""
import logging
from typing import Any, Dict, Iterable, Iterator, Optional

from config.settings import settings
from scoreboard.polling import PollingClient, SerialDispatcher
from scoreboard.polling.dispatch import Dispatcher
from scoreboard.sports import SPORTS, Sport

logger = logging.getLogger("scoreboard.hub")


class ScoreboardHub:
    """
    Polling clients keyed by sport.

    Usage:
        with ScoreboardHub(["nba", "nhl"]) as hub:
            hub["nba"].subscribe(on_nba_update)
            hub.start_all()
    """

    def __init__(
        self,
        sports: Optional[Iterable[str]] = None,
        dispatcher: Optional[Dispatcher] = None,
        **client_kwargs: Any,
    ):
        """
        Args:
            sports: Registry keys or sportPaths (default: settings.enabled_sports)
            dispatcher: Shared delivery context (default: one SerialDispatcher)
            client_kwargs: Passed through to every PollingClient
        """
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher or SerialDispatcher()
        self._clients: Dict[str, PollingClient] = {}

        for key in (settings.enabled_sports if sports is None else sports):
            if key in self._clients:
                continue
            self._clients[key] = PollingClient(key, dispatcher=self.dispatcher, **client_kwargs)

        logger.debug(f"Hub created for {list(self._clients)}")

    def __getitem__(self, key: str) -> PollingClient:
        return self._clients[key]

    def __contains__(self, key: object) -> bool:
        return key in self._clients

    def __iter__(self) -> Iterator[str]:
        return iter(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    def client(self, key: str) -> Optional[PollingClient]:
        return self._clients.get(key)

    def sport(self, key: str) -> Optional[Sport]:
        """Registry entry for a key, None for ad-hoc sportPaths."""
        return SPORTS.get(key)

    def start_all(self) -> None:
        for client in self._clients.values():
            client.start()

    def stop_all(self) -> None:
        for client in self._clients.values():
            client.stop()

    def refresh_all(self) -> Dict[str, str]:
        """Run one cycle per client now. Returns outcome values by key."""
        return {key: client.fetch_once().value for key, client in self._clients.items()}

    def close(self) -> None:
        for client in self._clients.values():
            client.close()
        if self._owns_dispatcher:
            self.dispatcher.shutdown()

    def __enter__(self) -> "ScoreboardHub":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        return {key: client.get_stats() for key, client in self._clients.items()}
