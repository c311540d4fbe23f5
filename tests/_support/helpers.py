"""Shared builders and test doubles."""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Iterable, Sequence

from horsesim.models import Distance, Horse
from horsesim.simulation import DomainEvent, Race


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceRandom:
    """Random source that cycles through a list of draws."""

    def __init__(self, values: Iterable[float]):
        self._values = itertools.cycle(list(values))

    def random(self) -> float:
        return next(self._values)


class RecordingPublisher:
    """EventPublisher that keeps every event it receives."""

    def __init__(self):
        self.events: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)

    def types(self) -> list[str]:
        return [e.event_type.value for e in self.events]


_NAMES = [
    "Thunder Runner", "Silver Arrow", "Midnight Star", "Golden Spirit",
    "Wild Legend", "Royal Dancer", "Lucky Bolt", "Storm Knight",
    "Noble Heart", "Swift Glory", "Mystic Dream", "Brave Flash",
]


def make_horse(name: str = "Thunder Runner", condition: int = 50, color: str = "#aa3300") -> Horse:
    return Horse.create(uuid.uuid4(), name, color, condition)


def make_roster(count: int, condition: int = 50) -> list[Horse]:
    return [make_horse(f"{_NAMES[i % len(_NAMES)]} {i}", condition) for i in range(count)]


def make_race(
    conditions: Sequence[int],
    meters: int = 1200,
    draw: float = 0.5,
) -> Race:
    horses = [make_horse(f"Horse {i}", c) for i, c in enumerate(conditions)]
    return Race.create(horses, Distance.create(meters), rng=FixedRandom(draw))
