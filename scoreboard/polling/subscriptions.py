"""
Subscription surface: latest snapshot plus change notifications.
"""
import logging
import threading
import uuid
from typing import Callable, Dict, Optional, Tuple

from scoreboard.models import ScoreEvent
from .dispatch import Dispatcher, SerialDispatcher

logger = logging.getLogger("scoreboard.polling.subscriptions")

Snapshot = Tuple[ScoreEvent, ...]
Callback = Callable[[Snapshot], None]


class Subscriptions:
    """
    Holds the published snapshot and the observers interested in it.

    Pattern:
    - publish() swaps the snapshot under a lock, then hands one
      notification to the dispatcher (swap() and dispatch() split the two
      steps for callers that hold their own locks)
    - notifications never go backwards: one that arrives after a newer
      snapshot was delivered is dropped
    - the notification calls every observer registered at publish time
      with the same tuple
    - current_events() never blocks on the poll loop

    Usage:
        subs = Subscriptions()
        token = subs.subscribe(lambda events: render(events))
        subs.current_events()  # () until the first publish
        subs.unsubscribe(token)
    """

    def __init__(self, dispatcher: Optional[Dispatcher] = None, name: str = "scoreboard"):
        self._dispatcher = dispatcher or SerialDispatcher()
        self._name = name
        self._snapshot: Snapshot = ()
        self._callbacks: Dict[str, Callback] = {}
        self._lock = threading.Lock()
        self._version = 0
        self._delivered_version = 0

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def version(self) -> int:
        """Number of publishes so far."""
        with self._lock:
            return self._version

    def subscribe(self, callback: Callback) -> str:
        """Register an observer. Returns an opaque token for unsubscribe()."""
        token = uuid.uuid4().hex
        with self._lock:
            self._callbacks[token] = callback
        logger.debug(f"[{self._name}] subscriber added ({len(self._callbacks)} total)")
        return token

    def unsubscribe(self, token: str) -> bool:
        """Remove an observer. Returns False if the token was not registered."""
        with self._lock:
            removed = self._callbacks.pop(token, None) is not None
        return removed

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def current_events(self) -> Snapshot:
        """Latest published snapshot; empty before the first publish."""
        with self._lock:
            return self._snapshot

    def swap(self, events: Snapshot) -> Optional[Callable[[], None]]:
        """
        Replace the snapshot without notifying anyone yet.

        Returns the notification for this publish (None when there are no
        subscribers); hand it to dispatch() once no caller locks are held.
        """
        snapshot = tuple(events)
        with self._lock:
            self._snapshot = snapshot
            self._version += 1
            version = self._version
            callbacks = list(self._callbacks.items())

        if not callbacks:
            return None
        return lambda: self._notify(version, snapshot, callbacks)

    def dispatch(self, notify: Callable[[], None]) -> None:
        """Run a notification from swap() on the delivery context."""
        self._dispatcher.submit(notify)

    def publish(self, events: Snapshot) -> None:
        """Replace the snapshot and notify observers on the delivery context."""
        notify = self.swap(events)
        if notify is not None:
            self.dispatch(notify)

    def _notify(self, version: int, snapshot: Snapshot, callbacks) -> None:
        with self._lock:
            if version <= self._delivered_version:
                return
            self._delivered_version = version

        for token, callback in callbacks:
            with self._lock:
                # A newer snapshot was delivered from inside a callback
                if self._delivered_version != version:
                    return
                still_subscribed = token in self._callbacks
            if not still_subscribed:
                continue
            try:
                callback(snapshot)
            except Exception:
                logger.exception(f"[{self._name}] subscriber callback failed")
