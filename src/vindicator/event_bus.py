"""
Event Bus Module for Vindicator

In-process publish/subscribe used to deliver supervisor lifecycle
notifications. Handlers are called synchronously on the publishing thread,
in the order they were registered.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List


@dataclass
class Subscription:
    """A handler registered on a topic."""

    handler: Callable[..., Any]
    once: bool = False


class EventBus:
    """
    Named-topic publish/subscribe.

    A handler that raises is logged and skipped; it never interrupts delivery
    to the remaining handlers or the publishing thread.
    """

    def __init__(self):
        """Initialize an empty event bus."""
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def subscribe(self, topic: str, handler: Callable[..., Any]) -> None:
        """
        Register a handler for a topic.

        Args:
            topic: Name of the topic
            handler: Callable invoked with the published arguments
        """
        self._add(topic, Subscription(handler))

    def subscribe_once(self, topic: str, handler: Callable[..., Any]) -> None:
        """Register a handler that is removed after its first delivery."""
        self._add(topic, Subscription(handler, once=True))

    def unsubscribe(self, topic: str, handler: Callable[..., Any]) -> bool:
        """
        Remove the first registration of a handler from a topic.

        Returns:
            True if the handler was registered, False otherwise
        """
        with self._lock:
            subscriptions = self._subscriptions.get(topic, [])
            for index, subscription in enumerate(subscriptions):
                if subscription.handler == handler:
                    del subscriptions[index]
                    if not subscriptions:
                        del self._subscriptions[topic]
                    return True
        return False

    def has_callback(self, topic: str) -> bool:
        """Check if any handler is registered for a topic."""
        with self._lock:
            return bool(self._subscriptions.get(topic))

    def publish(self, topic: str, *args: Any) -> None:
        """
        Deliver arguments to every handler currently registered on a topic.

        Args:
            topic: Name of the topic
            *args: Arguments passed to each handler
        """
        with self._lock:
            subscriptions = list(self._subscriptions.get(topic, []))
            remaining = [s for s in subscriptions if not s.once]
            if len(remaining) != len(subscriptions):
                if remaining:
                    self._subscriptions[topic] = remaining
                else:
                    self._subscriptions.pop(topic, None)

        for subscription in subscriptions:
            try:
                subscription.handler(*args)
            except Exception:
                self.logger.exception(f"Handler for '{topic}' raised")

    def _add(self, topic: str, subscription: Subscription) -> None:
        if not callable(subscription.handler):
            raise TypeError(f"Handler for '{topic}' must be callable")

        with self._lock:
            self._subscriptions.setdefault(topic, []).append(subscription)
