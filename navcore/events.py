"""
Publish/subscribe channels used by the sensor hub, location feed and route tracker.

Each component owns its channels; there is no global registry. Subscribing
returns a Subscription handle, so removal never depends on comparing
callbacks by identity.
"""

import logging
import threading
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by Channel.subscribe(); call cancel() to stop receiving."""

    def __init__(self, channel: "Channel", callback: Callable):
        self._channel = channel
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Detach from the channel. Safe to call more than once."""
        if self._active:
            self._active = False
            self._channel._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()


class Channel(Generic[T]):
    """
    Fan-out of values to registered callbacks.

    Args:
        name: Channel name used in log messages
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []
        self.publish_count = 0

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """
        Register a callback.

        Args:
            callback: Called with every published value

        Returns:
            Subscription handle
        """
        subscription = Subscription(self, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("Subscriber added to %s (%d total)", self.name, len(self._subscriptions))
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                return
        logger.debug("Subscriber removed from %s", self.name)

    def publish(self, value: T) -> T:
        """
        Deliver a value to every active subscriber.

        Callbacks run on the caller's thread, outside the channel lock, so
        they may cancel their own subscription.

        Returns:
            The published value
        """
        with self._lock:
            subscriptions = list(self._subscriptions)
            self.publish_count += 1

        for subscription in subscriptions:
            if subscription.active:
                subscription._callback(value)

        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)
