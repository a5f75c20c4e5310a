"""
Polling client, subscription surface and notification delivery contexts.
"""
from .client import PollingClient
from .dispatch import Dispatcher, ImmediateDispatcher, QueueDispatcher, SerialDispatcher
from .stats import CycleOutcome, PollerStats
from .subscriptions import Subscriptions

__all__ = [
    # Client
    "PollingClient",
    "CycleOutcome",
    "PollerStats",
    # Subscriptions
    "Subscriptions",
    # Delivery contexts
    "Dispatcher",
    "SerialDispatcher",
    "QueueDispatcher",
    "ImmediateDispatcher",
]
