"""A horse's mutable state while it runs in one race."""

import math
from typing import Any, Protocol
from uuid import UUID, uuid4

from horsesim.errors import HorseAlreadyFinishedError
from horsesim.models import Horse


class RandomSource(Protocol):
    """Anything with a uniform ``random()`` in [0, 1), e.g. ``np.random.Generator``."""

    def random(self) -> float: ...


class RunningHorse:
    """Tracks a horse's position during a race.

    ``id`` identifies this entry in one race, separately from the
    horse's own id. ``position`` never decreases and never passes the
    race length; ``is_finished`` only ever goes from False to True.
    Both change only through ``run``.
    """

    def __init__(self, horse: Horse, id: UUID | None = None):
        self._horse = horse
        self._id = id if id is not None else uuid4()
        self._position = 0
        self._is_finished = False

    @classmethod
    def create(cls, horse: Horse, id: UUID | None = None) -> "RunningHorse":
        """Enter a horse at the start line."""
        return cls(horse, id)

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        horse: Horse,
        position: int,
        is_finished: bool,
    ) -> "RunningHorse":
        """Restore a running horse from saved state."""
        running = cls(horse, id)
        running._position = position
        running._is_finished = is_finished
        return running

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def horse(self) -> Horse:
        return self._horse

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_finished(self) -> bool:
        return self._is_finished

    @property
    def name(self) -> str:
        return self.horse.name

    @property
    def condition(self) -> int:
        return self.horse.condition.value

    @property
    def color(self) -> str:
        return self.horse.color

    def run(self, race_length: int, rng: RandomSource) -> int:
        """Move the horse forward for one turn.

        Movement is a uniform integer between 1 and the horse's
        condition, so every turn makes at least one meter of progress.

        Args:
            race_length: Race distance in meters
            rng: Random source

        Returns:
            Meters moved (before clamping at the finish line)

        Raises:
            HorseAlreadyFinishedError: If the horse already crossed the line
        """
        if self.is_finished:
            raise HorseAlreadyFinishedError(self.id)

        movement = math.floor(rng.random() * self.condition) + 1
        new_position = self.position + movement

        if new_position >= race_length:
            self._position = race_length
            self._is_finished = True
        else:
            self._position = new_position

        return movement

    def get_progress(self, race_length: int) -> float:
        """Progress as a percentage of the race distance (0-100)."""
        return min(self.position / race_length * 100, 100.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "horse": self.horse.to_dict(),
            "position": self.position,
            "is_finished": self.is_finished,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RunningHorse):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        suffix = " (finished)" if self.is_finished else ""
        return f"{self.name} at {self.position}m{suffix}"

    def __repr__(self) -> str:
        return (
            f"RunningHorse(id={self.id!r}, name={self.name!r}, "
            f"position={self.position}, is_finished={self.is_finished})"
        )
