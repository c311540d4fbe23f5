"""Simulation engine components."""

from .aggregate import AggregateRoot
from .events import (
    DomainEvent,
    EventType,
    HorseFinished,
    HorsePosition,
    PlacingResult,
    RaceFinished,
    RaceStarted,
    TurnCompleted,
)
from .race import LeaderboardEntry, Race
from .running_horse import RunningHorse

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "EventType",
    "HorseFinished",
    "HorsePosition",
    "LeaderboardEntry",
    "PlacingResult",
    "Race",
    "RaceFinished",
    "RaceStarted",
    "RunningHorse",
    "TurnCompleted",
]
