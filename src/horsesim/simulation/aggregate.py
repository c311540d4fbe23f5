"""Aggregate root base with a pending domain event buffer."""

from uuid import UUID

from horsesim.simulation.events import DomainEvent


class AggregateRoot:
    """Entry point to a cluster of domain objects.

    Events raised while mutating accumulate in an internal buffer until
    the caller drains them with ``clear_domain_events``.
    """

    def __init__(self, id: UUID):
        self._id = id
        self._domain_events: list[DomainEvent] = []

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Pending events, without draining them."""
        return tuple(self._domain_events)

    def _add_domain_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def clear_domain_events(self) -> list[DomainEvent]:
        """Return all pending events and empty the buffer."""
        events, self._domain_events = self._domain_events, []
        return events

    def has_domain_events(self) -> bool:
        return bool(self._domain_events)
