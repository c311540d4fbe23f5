"""Concrete adapters for the application ports."""

from .state_store import InMemoryGameStateStore
from .timer import AsyncioTimer, ManualTimer

__all__ = ["AsyncioTimer", "InMemoryGameStateStore", "ManualTimer"]
