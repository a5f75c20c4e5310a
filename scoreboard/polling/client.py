"""
Polling client for one sport's scoreboard.

One client per sportPath. A background timer thread runs one
fetch-decode-publish cycle per tick; fetch_once() runs the same cycle on
demand. Cycles of a client never overlap, and results that complete after
stop() are dropped instead of published.
"""
import logging
import threading
import time
from typing import Callable, Dict, Any, Iterable, Optional, Tuple, Union

import requests

from config.settings import settings
from scoreboard.decoder import decode
from scoreboard.errors import DecodeError, NetworkError
from scoreboard.models import ScoreEvent
from scoreboard.sports import resolve_sport_path, scoreboard_url
from .dispatch import Dispatcher
from .stats import CycleOutcome, PollerStats
from .subscriptions import Callback, Snapshot, Subscriptions

logger = logging.getLogger("scoreboard.polling.client")

Decoder = Callable[[Union[bytes, str]], Tuple[ScoreEvent, ...]]


class PollingClient:
    """
    Periodically fetches a scoreboard endpoint and publishes the latest events.

    Pattern:
    - start() spawns a daemon timer thread; the first tick fires immediately
    - every cycle holds the client's cycle lock, so a tick or fetch_once()
      waits for any cycle still in flight instead of overlapping it
    - failures (network or decode) keep the last good snapshot and are
      logged and counted in stats
    - stop() bumps the generation; a cycle finishing under an older
      generation is discarded

    Usage:
        client = PollingClient("basketball/nba")
        token = client.subscribe(lambda events: print(len(events)))
        client.start()
        ...
        client.stop()
    """

    def __init__(
        self,
        sport_path: str,
        *,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        dispatcher: Optional[Dispatcher] = None,
        base_url: Optional[str] = None,
        decoder: Decoder = decode,
        extra_paths: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the client.

        Args:
            sport_path: API sportPath ("basketball/nba") or registry key ("nba")
            interval: Seconds between ticks (default from settings)
            timeout: Per-request timeout in seconds (default from settings)
            session: requests session to use; one is created and owned if omitted
            dispatcher: Delivery context for notifications (default: SerialDispatcher)
            base_url: API host override
            decoder: Payload decoder
            extra_paths: sportPaths allowed beyond the registry
                (default from settings)
        """
        self.requested_path = sport_path
        self.sport_path = resolve_sport_path(sport_path, extra_paths)
        self.url = scoreboard_url(self.sport_path, base_url) if self.sport_path else None
        if self.url is None:
            logger.warning(f"Unknown sport path {sport_path!r}; client will not fetch")

        self.interval = settings.poll_interval_seconds if interval is None else interval
        self.timeout = settings.request_timeout_seconds if timeout is None else timeout

        self._owns_session = session is None
        self._session = session if session is not None else self._make_session()
        self._decode = decoder

        self._owns_dispatcher = dispatcher is None
        self._subscriptions = Subscriptions(dispatcher, name=self.sport_path or str(sport_path))

        # Held for the whole fetch-decode-publish cycle
        self._cycle_lock = threading.Lock()
        # Guards generation, sequence numbers, the stop event and stats
        self._state_lock = threading.RLock()
        self._generation = 0
        self._issued_seq = 0
        self._published_seq = 0
        self._stop_event: Optional[threading.Event] = None

        self.stats = PollerStats()

    @staticmethod
    def _make_session() -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        })
        return session

    def __repr__(self) -> str:
        return f"PollingClient(sport_path={self.sport_path!r}, running={self.is_running})"

    # ------------------------------------------------------------------
    # Subscription surface
    # ------------------------------------------------------------------

    @property
    def subscriptions(self) -> Subscriptions:
        return self._subscriptions

    def subscribe(self, callback: Callback) -> str:
        return self._subscriptions.subscribe(callback)

    def unsubscribe(self, token: str) -> bool:
        return self._subscriptions.unsubscribe(token)

    def current_events(self) -> Snapshot:
        return self._subscriptions.current_events()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_inert(self) -> bool:
        """True when the sport path was invalid and nothing will be fetched."""
        return self.url is None

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Start the timer. No-op if already running or inert."""
        if self.is_inert:
            logger.debug(f"start() ignored for inert client {self.requested_path!r}")
            return

        with self._state_lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return
            stop_event = threading.Event()
            generation = self._generation
            thread = threading.Thread(
                target=self._run,
                args=(stop_event, generation),
                name=f"scoreboard-poll-{self.sport_path}",
                daemon=True,
            )
            self._stop_event = stop_event

        logger.info(f"Polling {self.url} every {self.interval}s")
        thread.start()

    def stop(self) -> None:
        """
        Stop the timer and drop the result of any in-flight cycle.

        Safe to call repeatedly. The in-flight HTTP request itself is not
        aborted (requests cannot interrupt a blocking call from another
        thread) and its socket is not closed early: the request runs until it
        completes or hits the client's timeout, and its result is then
        discarded without publishing.
        """
        with self._state_lock:
            self._generation += 1
            stop_event = self._stop_event
            self._stop_event = None

        if stop_event is not None:
            stop_event.set()
            logger.info(f"Stopped polling {self.url}")

    def close(self) -> None:
        """Stop polling and release the owned HTTP session and dispatcher."""
        self.stop()
        if self._owns_session:
            self._session.close()
        if self._owns_dispatcher:
            self._subscriptions.dispatcher.shutdown()

    def __enter__(self) -> "PollingClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_once(self) -> CycleOutcome:
        """
        Run one fetch-decode-publish cycle now, outside the timer.

        Waits for an in-flight cycle of this client to finish first.
        """
        if self.is_inert:
            return CycleOutcome.INERT
        with self._state_lock:
            generation = self._generation
        return self._cycle(generation)

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def _run(self, stop_event: threading.Event, generation: int) -> None:
        """Timer loop: fixed-rate ticks, late ticks collapse into one."""
        next_tick = time.monotonic()
        while not stop_event.is_set():
            try:
                self._cycle(generation)
            except Exception:
                logger.exception(f"Unexpected error polling {self.url}")

            next_tick += self.interval
            delay = next_tick - time.monotonic()
            if delay < 0:
                next_tick = time.monotonic()
                delay = 0
            if stop_event.wait(delay):
                break

    def _fetch(self) -> bytes:
        """GET the scoreboard. Raises NetworkError on any transport failure."""
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise NetworkError(f"Request timed out after {self.timeout}s", url=self.url) from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NetworkError(f"HTTP {status} from scoreboard", url=self.url, status_code=status) from e
        except requests.RequestException as e:
            raise NetworkError(f"Request failed: {e}", url=self.url) from e
        return response.content

    def _record(self, outcome: CycleOutcome, error: Optional[Exception] = None) -> CycleOutcome:
        with self._state_lock:
            self.stats.record(outcome, error)
        return outcome

    def _cycle(self, generation: int) -> CycleOutcome:
        with self._cycle_lock:
            outcome, notify = self._attempt(generation)
        # Delivered with no lock held, so a callback may call fetch_once() or stop()
        if notify is not None:
            self._subscriptions.dispatch(notify)
        return outcome

    def _attempt(self, generation: int) -> Tuple[CycleOutcome, Optional[Callable[[], None]]]:
        """Fetch, decode and swap the snapshot. Caller holds the cycle lock."""
        with self._state_lock:
            if generation != self._generation:
                # stopped while waiting for the previous cycle
                return self._record(CycleOutcome.DISCARDED), None
            self._issued_seq += 1
            seq = self._issued_seq

        try:
            payload = self._fetch()
        except NetworkError as e:
            logger.warning(f"[{self.sport_path}] fetch failed: {e}")
            return self._record(CycleOutcome.NETWORK_ERROR, e), None

        try:
            events = self._decode(payload)
        except DecodeError as e:
            logger.warning(f"[{self.sport_path}] decode failed: {e}")
            return self._record(CycleOutcome.DECODE_ERROR, e), None

        with self._state_lock:
            if generation != self._generation or seq <= self._published_seq:
                logger.debug(f"[{self.sport_path}] discarding result of cycle {seq}")
                return self._record(CycleOutcome.DISCARDED), None
            self._published_seq = seq
            notify = self._subscriptions.swap(events)
            logger.debug(f"[{self.sport_path}] published {len(events)} events (cycle {seq})")
            return self._record(CycleOutcome.PUBLISHED), notify

    def get_stats(self) -> Dict[str, Any]:
        """Diagnostics for this client."""
        with self._state_lock:
            data = self.stats.to_dict()
        data.update({
            "sport_path": self.sport_path,
            "url": self.url,
            "running": self.is_running,
            "subscribers": self._subscriptions.subscriber_count,
            "events": len(self.current_events()),
        })
        return data
