"""Change notifications broadcast by the aggregator.

Observers are plain callables taking no arguments; they re-read whatever
state they care about. Delivery is synchronous, in subscription order, on
the caller's thread. Nothing is queued or replayed for late subscribers.
"""

import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class ChangeEvent(str, Enum):
    """Named change notifications."""

    GOAL_CHANGED = "goal_changed"
    DISTANCE_UNIT_CHANGED = "distance_unit_changed"


class Subscription:
    """Handle returned by ``EventChannel.subscribe``.

    Call ``unsubscribe`` when the owner goes away, or use the handle as a
    context manager to tie the subscription to a block.
    """

    def __init__(self, channel: "EventChannel", event: ChangeEvent, observer: Observer):
        self._channel = channel
        self.event = event
        self.observer = observer
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if self.active:
            self._channel._remove(self)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class EventChannel:
    """Observer list keyed by ``ChangeEvent``.

    Not thread-safe; intended for a single event loop.
    """

    def __init__(self):
        self._subscriptions: dict[ChangeEvent, list[Subscription]] = {
            event: [] for event in ChangeEvent
        }

    def subscribe(self, event: ChangeEvent, observer: Observer) -> Subscription:
        """Register an observer for one event."""
        subscription = Subscription(self, event, observer)
        self._subscriptions[event].append(subscription)
        logger.debug("Observer subscribed to %s", event.value)
        return subscription

    def emit(self, event: ChangeEvent) -> int:
        """Notify every observer of ``event``.

        A failing observer is logged and does not stop delivery to the
        rest.

        Returns:
            Number of observers notified successfully
        """
        delivered = 0
        # Copy so observers may unsubscribe while being notified
        for subscription in list(self._subscriptions[event]):
            try:
                subscription.observer()
            except Exception:
                logger.exception("Observer for %s failed", event.value)
                continue
            delivered += 1
        logger.debug("Emitted %s to %d observer(s)", event.value, delivered)
        return delivered

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions[subscription.event]:
            self._subscriptions[subscription.event].remove(subscription)
