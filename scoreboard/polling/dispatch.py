"""
Delivery contexts for subscriber notifications.

Fetch and decode run on the polling thread; callbacks must run on a single
logical "main" context instead. A dispatcher is that context: publishing
submits a notification to it and returns immediately.
"""
import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Protocol

logger = logging.getLogger("scoreboard.polling.dispatch")


class Dispatcher(Protocol):
    """
    Interface for notification delivery contexts.

    Implementations:
    - SerialDispatcher: dedicated single thread, FIFO (default)
    - QueueDispatcher: drained by the host's own main loop
    - ImmediateDispatcher: runs inline on the caller's thread
    """

    def submit(self, fn: Callable[[], None]) -> None:
        """Schedule fn to run on the delivery context."""
        ...

    def shutdown(self) -> None:
        """Release the context's resources."""
        ...


class SerialDispatcher:
    """
    Runs callbacks one at a time, in submission order, on one named thread.

    Shared by several clients it still serializes all their notifications,
    which is what a UI main thread does.
    """

    def __init__(self, thread_name: str = "scoreboard-main"):
        self._thread_name = thread_name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name)
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, fn: Callable[[], None]) -> None:
        with self._lock:
            if self._closed:
                logger.debug("Dispatcher closed, dropping notification")
                return
            self._executor.submit(fn)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        # A callback closing its own client cannot join its own thread
        if threading.current_thread().name.startswith(self._thread_name):
            wait = False
        self._executor.shutdown(wait=wait)


class QueueDispatcher:
    """
    Collects callbacks until the host's main loop calls drain().

    Usage:
        dispatcher = QueueDispatcher()
        client = PollingClient("nba", dispatcher=dispatcher)
        ...
        # inside the host's event loop
        dispatcher.drain()
    """

    def __init__(self):
        self._pending: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()

    def submit(self, fn: Callable[[], None]) -> None:
        self._pending.put(fn)

    def drain(self) -> int:
        """Run every pending callback on the calling thread. Returns how many ran."""
        ran = 0
        while True:
            try:
                fn = self._pending.get_nowait()
            except queue.Empty:
                return ran
            fn()
            ran += 1

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    def shutdown(self) -> None:
        pass


class ImmediateDispatcher:
    """Runs callbacks inline; for synchronous hosts and tests."""

    def submit(self, fn: Callable[[], None]) -> None:
        fn()

    def shutdown(self) -> None:
        pass
