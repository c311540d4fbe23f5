"""In-process publish/subscribe routing of domain events."""

import inspect
import logging
from collections.abc import Callable, Sequence

from horsesim.application.ports import EventHandler
from horsesim.simulation import DomainEvent

logger = logging.getLogger(__name__)


class EventBus:
    """Routes domain events to registered handlers.

    Handlers may be plain functions or coroutine functions. Each is
    awaited in turn, so handlers observe events in publish order.
    """

    def __init__(self):
        # dicts used as insertion-ordered sets
        self._handlers: dict[str, dict[EventHandler, None]] = {}
        self._all_handlers: dict[EventHandler, None] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for one event type.

        Registering the same handler twice for a type has no effect.

        Args:
            event_type: Event type to listen for (e.g. ``EventType.RACE_STARTED``)
            handler: Called with each matching event

        Returns:
            Function that removes the subscription
        """
        key = _type_key(event_type)
        handlers = self._handlers.setdefault(key, {})
        handlers[handler] = None

        def unsubscribe() -> None:
            handlers.pop(handler, None)
            if not handlers and self._handlers.get(key) is handlers:
                del self._handlers[key]

        return unsubscribe

    def subscribe_all(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for every event regardless of type."""
        self._all_handlers[handler] = None

        def unsubscribe() -> None:
            self._all_handlers.pop(handler, None)

        return unsubscribe

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to type handlers first, then catch-all handlers."""
        # Snapshot so handlers may (un)subscribe while being called
        handlers = list(self._handlers.get(_type_key(event.event_type), ()))
        handlers.extend(self._all_handlers)

        logger.debug("Publishing %s to %d handler(s)", event.event_type.value, len(handlers))
        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Publish events strictly in order."""
        for event in events:
            await self.publish(event)

    def has_subscribers(self, event_type: str) -> bool:
        return bool(self._handlers.get(_type_key(event_type))) or bool(self._all_handlers)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
        self._all_handlers.clear()


def _type_key(event_type: str) -> str:
    # EventType members and their plain string values share one registry slot
    return getattr(event_type, "value", event_type)
