"""Race domain events: start, turn, finish."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Types of race events."""

    RACE_STARTED = "RaceStarted"
    TURN_COMPLETED = "TurnCompleted"
    HORSE_FINISHED = "HorseFinished"
    RACE_FINISHED = "RaceFinished"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """Immutable record of something that happened to an aggregate.

    Concrete events fix ``event_type`` and ``aggregate_type`` with
    defaults; the id and timestamp are generated on construction.
    """

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4, description="Unique event identifier")
    occurred_at: datetime = Field(default_factory=_utcnow, description="When the event was raised (UTC)")
    aggregate_id: UUID = Field(..., description="Id of the aggregate that raised the event")
    aggregate_type: str = Field(default="Race", description="Type of the raising aggregate")
    event_type: EventType

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible primitives."""
        return self.model_dump(mode="json")


class HorsePosition(BaseModel):
    """Snapshot of one horse at the end of a turn."""

    model_config = ConfigDict(frozen=True)

    horse_id: UUID
    horse_name: str
    position: int
    is_finished: bool


class PlacingResult(BaseModel):
    """One line of the final race order."""

    model_config = ConfigDict(frozen=True)

    place: int = Field(..., ge=1)
    horse_id: UUID
    horse_name: str
    finish_position: int


class RaceStarted(DomainEvent):
    event_type: EventType = EventType.RACE_STARTED
    horse_count: int = Field(..., ge=1)
    distance: int = Field(..., description="Race distance in meters")


class TurnCompleted(DomainEvent):
    event_type: EventType = EventType.TURN_COMPLETED
    turn_number: int = Field(..., ge=1)
    positions: tuple[HorsePosition, ...]


class HorseFinished(DomainEvent):
    event_type: EventType = EventType.HORSE_FINISHED
    horse_id: UUID
    horse_name: str
    finish_position: int
    place: int = Field(..., ge=1, description="1-based finishing place")


class RaceFinished(DomainEvent):
    event_type: EventType = EventType.RACE_FINISHED
    results: tuple[PlacingResult, ...]


RaceEvent = RaceStarted | TurnCompleted | HorseFinished | RaceFinished
