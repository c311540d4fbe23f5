"""Interfaces the application layer needs from its surroundings."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from horsesim.models import Horse
from horsesim.simulation import DomainEvent, Race

TimerHandle = int

# Timer callbacks may be plain functions or coroutine functions
TimerCallback = Callable[[], Awaitable[None] | None]

EventHandler = Callable[[DomainEvent], Awaitable[None] | None]


class Timer(Protocol):
    """Schedules callbacks. Cancelling an unknown handle is a no-op."""

    def schedule_repeating(self, callback: TimerCallback, interval_ms: float) -> TimerHandle: ...

    def cancel_repeating(self, handle: TimerHandle) -> None: ...

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle: ...

    def cancel_once(self, handle: TimerHandle) -> None: ...


class EventPublisher(Protocol):
    """Receives domain events in the order they were raised."""

    async def publish(self, event: DomainEvent) -> None: ...

    async def publish_all(self, events: Sequence[DomainEvent]) -> None: ...


class GameStateStore(Protocol):
    """Holds the race program and the loop's progress through it."""

    def get_horses(self) -> Sequence[Horse]: ...

    def get_races(self) -> Sequence[Race]: ...

    def get_current_race_index(self) -> int: ...

    def get_current_race(self) -> Race | None: ...

    def is_running(self) -> bool: ...

    def get_tick(self) -> int: ...

    def set_horses(self, horses: Sequence[Horse]) -> None: ...

    def set_races(self, races: Sequence[Race]) -> None: ...

    def set_current_race_index(self, index: int) -> None: ...

    def set_is_running(self, running: bool) -> None: ...

    def increment_tick(self) -> int: ...

    def reset_tick(self) -> None: ...

    def advance_to_next_race(self) -> bool:
        """Move to the next race; False if already at the last one."""
        ...

    def reset(self) -> None: ...
