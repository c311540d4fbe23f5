"""Race aggregate: lineup, turn loop and finishing order."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

import numpy as np

from horsesim.errors import NoHorsesError, RaceAlreadyFinishedError, RaceNotStartedError
from horsesim.models import Distance, Horse
from horsesim.simulation.aggregate import AggregateRoot
from horsesim.simulation.events import (
    HorseFinished,
    HorsePosition,
    PlacingResult,
    RaceFinished,
    RaceStarted,
    TurnCompleted,
)
from horsesim.simulation.running_horse import RandomSource, RunningHorse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """A horse's standing at the current point of the race."""

    horse: RunningHorse
    rank: int
    progress: float


class Race(AggregateRoot):
    """Simulates one race between a fixed lineup of horses.

    A race moves from not started, to started, to finished, and never
    back. Each mutating call queues domain events that the caller drains
    with ``clear_domain_events``.
    """

    def __init__(
        self,
        id: UUID,
        horses: Sequence[RunningHorse],
        distance: Distance,
        rng: RandomSource | None = None,
    ):
        """Initialize a race. Prefer ``Race.create`` for new races.

        Args:
            id: Race identifier
            horses: Lineup, in gate order
            distance: Race distance
            rng: Random number generator
        """
        super().__init__(id)
        self._horses: tuple[RunningHorse, ...] = tuple(horses)
        self._distance = distance
        self._results: list[RunningHorse] = []
        self._is_started = False
        self._turn_count = 0
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def create(
        cls,
        horses: Sequence[Horse],
        distance: Distance,
        id: UUID | None = None,
        rng: RandomSource | None = None,
    ) -> "Race":
        """Create a new race for the given horses.

        Args:
            horses: Horses to enter, in gate order
            distance: Race distance
            id: Optional race id (generated if omitted)
            rng: Random number generator

        Returns:
            A race that has not started yet

        Raises:
            NoHorsesError: If ``horses`` is empty
        """
        if not horses:
            raise NoHorsesError()

        running = [RunningHorse.create(horse) for horse in horses]
        return cls(id if id is not None else uuid4(), running, distance, rng=rng)

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        horses: Sequence[RunningHorse],
        distance: Distance,
        results: Sequence[RunningHorse],
        is_started: bool,
        turn_count: int,
        rng: RandomSource | None = None,
    ) -> "Race":
        """Restore a race from saved state without validation."""
        race = cls(id, horses, distance, rng=rng)
        race._results.extend(results)
        race._is_started = is_started
        race._turn_count = turn_count
        return race

    @classmethod
    def from_dict(cls, data: dict[str, Any], rng: RandomSource | None = None) -> "Race":
        """Restore a race from the output of ``to_dict``.

        Horses and the distance are validated again, since the data may
        have come from outside the process. Race progress (positions,
        results, turn count) is restored as saved.

        Raises:
            pydantic.ValidationError: If a horse or the distance is invalid
        """
        horses = [
            RunningHorse.reconstitute(
                id=UUID(h["id"]),
                horse=Horse.from_dict(h["horse"]),
                position=h["position"],
                is_finished=h["is_finished"],
            )
            for h in data["horses"]
        ]
        by_id = {h.id: h for h in horses}
        results = [by_id[UUID(r["id"])] for r in data["results"]]

        return cls.reconstitute(
            id=UUID(data["id"]),
            horses=horses,
            distance=Distance.create(data["distance"]),
            results=results,
            is_started=data["is_started"],
            turn_count=data["turn_count"],
            rng=rng,
        )

    @property
    def distance(self) -> Distance:
        return self._distance

    @property
    def horses(self) -> tuple[RunningHorse, ...]:
        """Lineup in gate order."""
        return self._horses

    @property
    def results(self) -> tuple[RunningHorse, ...]:
        """Finished horses, winner first."""
        return tuple(self._results)

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def is_finished(self) -> bool:
        return len(self._results) == len(self._horses)

    @property
    def turn_count(self) -> int:
        return self._turn_count

    @property
    def race_length(self) -> int:
        return self._distance.meters

    def start(self) -> None:
        """Start the race.

        Calling start on a race that is already running is a no-op and
        raises no second RaceStarted event.

        Raises:
            RaceAlreadyFinishedError: If every horse has already finished
        """
        if self.is_finished:
            raise RaceAlreadyFinishedError(self.id)

        if not self._is_started:
            self._is_started = True
            self._add_domain_event(
                RaceStarted(
                    aggregate_id=self.id,
                    horse_count=len(self._horses),
                    distance=self._distance.value,
                )
            )
            logger.debug("Race %s started with %d horses over %s", self.id, len(self._horses), self._distance)

    def turn(self) -> None:
        """Run one turn: move every unfinished horse and record finishers.

        Events are queued in a fixed order: any HorseFinished events,
        then one TurnCompleted, then RaceFinished if this turn ended the
        race.

        Raises:
            RaceNotStartedError: If ``start`` has not been called
            RaceAlreadyFinishedError: If the race is over
        """
        if not self._is_started:
            raise RaceNotStartedError(self.id)
        if self.is_finished:
            raise RaceAlreadyFinishedError(self.id)

        self._turn_count += 1

        newly_finished: list[tuple[int, RunningHorse]] = []
        for index, horse in enumerate(self._horses):
            if horse.is_finished:
                continue
            horse.run(self.race_length, self.rng)
            if horse.is_finished:
                newly_finished.append((index, horse))

        # Simultaneous finishers all sit exactly on the line; gate order breaks the tie
        newly_finished.sort(key=lambda item: item[0])

        for _, horse in newly_finished:
            self._results.append(horse)
            place = len(self._results)
            self._add_domain_event(
                HorseFinished(
                    aggregate_id=self.id,
                    horse_id=horse.id,
                    horse_name=horse.name,
                    finish_position=horse.position,
                    place=place,
                )
            )
            logger.debug("Race %s: %s finished in place %d", self.id, horse.name, place)

        self._add_domain_event(
            TurnCompleted(
                aggregate_id=self.id,
                turn_number=self._turn_count,
                positions=tuple(
                    HorsePosition(
                        horse_id=h.id,
                        horse_name=h.name,
                        position=h.position,
                        is_finished=h.is_finished,
                    )
                    for h in self._horses
                ),
            )
        )

        if self.is_finished:
            self._add_domain_event(
                RaceFinished(
                    aggregate_id=self.id,
                    results=tuple(
                        PlacingResult(
                            place=place,
                            horse_id=h.id,
                            horse_name=h.name,
                            finish_position=h.position,
                        )
                        for place, h in enumerate(self._results, 1)
                    ),
                )
            )
            logger.debug("Race %s finished after %d turns", self.id, self._turn_count)

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        """Current standings, leader first.

        Horses level on position keep their gate order.
        """
        ordered = sorted(self._horses, key=lambda h: h.position, reverse=True)
        return [
            LeaderboardEntry(horse=horse, rank=rank, progress=horse.get_progress(self.race_length))
            for rank, horse in enumerate(ordered, 1)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "distance": self._distance.value,
            "horses": [h.to_dict() for h in self._horses],
            "results": [h.to_dict() for h in self._results],
            "is_started": self._is_started,
            "is_finished": self.is_finished,
            "turn_count": self._turn_count,
        }

    def __str__(self) -> str:
        if self.is_finished:
            status = "finished"
        elif self._is_started:
            status = f"turn {self._turn_count}"
        else:
            status = "not started"
        return f"Race {self.id} ({self._distance}): {status}"
