"""In-process publish/subscribe channel for price-affecting changes.

Stands in for the backend's realtime push: listeners are called
synchronously, in subscription order, after the writer has committed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from jpe.domain.events import EventPublisher, PriceEvent

logger = logging.getLogger(__name__)

Listener = Callable[[PriceEvent], None]


class InProcessChannel(EventPublisher):

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: PriceEvent) -> None:
        logger.debug("publishing %s to %d listener(s)", event, len(self._listeners))
        for listener in list(self._listeners):
            listener(event)
