"""Application layer: event routing and race-loop commands."""

from .commands import (
    DEFAULT_TICK_INTERVAL_MS,
    GenerateProgramCommand,
    PauseRaceCommand,
    ProgramResult,
    StartRaceCommand,
)
from .event_bus import EventBus
from .ports import EventPublisher, GameStateStore, Timer

__all__ = [
    "DEFAULT_TICK_INTERVAL_MS",
    "EventBus",
    "EventPublisher",
    "GameStateStore",
    "GenerateProgramCommand",
    "PauseRaceCommand",
    "ProgramResult",
    "StartRaceCommand",
    "Timer",
]
