"""Application commands: generate a program, run it, pause it."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from horsesim.application.ports import EventPublisher, GameStateStore, Timer, TimerHandle
from horsesim.errors import RaceAlreadyFinishedError, RaceError, RaceNotFoundError, ValidationError
from horsesim.models import VALID_DISTANCES, Distance, Horse
from horsesim.simulation import Race

logger = logging.getLogger(__name__)

# Default interval between race turns in milliseconds
DEFAULT_TICK_INTERVAL_MS = 500


class StartRaceCommand:
    """Starts the current race and drives it turn by turn on a timer.

    When a race finishes the command advances the store to the next race
    and starts it, until the program runs out of races.
    """

    def __init__(
        self,
        timer: Timer,
        state_store: GameStateStore,
        event_publisher: EventPublisher,
        tick_interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
    ):
        """Initialize the command.

        Args:
            timer: Schedules the repeating turn step
            state_store: Source of truth for the current race
            event_publisher: Receives drained domain events
            tick_interval_ms: Interval between turns
        """
        self.timer = timer
        self.state_store = state_store
        self.event_publisher = event_publisher
        self.tick_interval_ms = tick_interval_ms
        self._handle: TimerHandle | None = None

    async def execute(self) -> None:
        """Start (or resume) the current race.

        Raises:
            RaceNotFoundError: If the store has no race at its current index
        """
        if self.state_store.is_running():
            return

        race = self.state_store.get_current_race()
        if race is None:
            raise RaceNotFoundError(self.state_store.get_current_race_index())

        try:
            race.start()
        except RaceAlreadyFinishedError:
            logger.debug("Race %s already finished, advancing", race.id)
            await self._handle_race_complete()
            return

        await self.event_publisher.publish_all(race.clear_domain_events())

        self.state_store.set_is_running(True)
        self._handle = self.timer.schedule_repeating(self._execute_turn, self.tick_interval_ms)
        logger.info(
            "Running race %d (%s, %d horses)",
            self.state_store.get_current_race_index() + 1,
            race.distance,
            len(race.horses),
        )

    async def _execute_turn(self) -> None:
        """Run one turn of the current race. Called by the timer."""
        # Re-read every tick: the store may have swapped the race out
        race = self.state_store.get_current_race()
        if race is None:
            self.stop()
            return

        try:
            race.turn()
        except RaceError as exc:
            logger.debug("Turn rejected (%s), treating race as complete", exc.code)
            await self._handle_race_complete()
            return

        self.state_store.increment_tick()
        await self.event_publisher.publish_all(race.clear_domain_events())

        if race.is_finished:
            logger.info("Race %s finished after %d turns", race.id, race.turn_count)
            await self._handle_race_complete()

    async def _handle_race_complete(self) -> None:
        """Stop the loop and start the next race if there is one."""
        self._clear_timer()
        self.state_store.set_is_running(False)

        if self.state_store.advance_to_next_race():
            self.state_store.reset_tick()
            await self.execute()
        else:
            logger.info("All races complete")

    def stop(self) -> None:
        """Stop the loop without advancing to the next race."""
        self._clear_timer()
        self.state_store.set_is_running(False)

    def _clear_timer(self) -> None:
        if self._handle is not None:
            self.timer.cancel_repeating(self._handle)
            self._handle = None

    def is_running(self) -> bool:
        """True while a turn timer is scheduled."""
        return self._handle is not None


class PauseRaceCommand:
    """Pauses the race loop; resume by executing the start command again."""

    def __init__(self, start_command: StartRaceCommand, state_store: GameStateStore):
        self.start_command = start_command
        self.state_store = state_store

    def execute(self) -> None:
        """Stop the timer but keep all race state. Safe when not running."""
        self.start_command.stop()
        self.state_store.set_is_running(False)
        logger.info("Race loop paused")


@dataclass
class ProgramResult:
    """Horses and races produced by GenerateProgramCommand."""

    horses: list[Horse]
    races: list[Race]


class GenerateProgramCommand:
    """Builds a race program from a roster and loads it into the store."""

    def __init__(self, state_store: GameStateStore, rng: np.random.Generator | None = None):
        """Initialize the command.

        Args:
            state_store: Store that receives the program
            rng: Random number generator for lineups, distances and races
        """
        self.state_store = state_store
        self.rng = rng if rng is not None else np.random.default_rng()

    def execute(
        self,
        roster: Sequence[Horse],
        race_count: int = 6,
        horses_per_race: int = 10,
    ) -> ProgramResult:
        """Generate ``race_count`` races drawn from ``roster``.

        Each race gets ``horses_per_race`` distinct horses and a random
        valid distance. The store is reset to the first race, not running.

        Args:
            roster: Horses available for selection
            race_count: Number of races in the program
            horses_per_race: Lineup size of every race

        Returns:
            The roster and the generated races

        Raises:
            ValidationError: If the counts cannot produce a valid program
        """
        if len(roster) < horses_per_race:
            raise ValidationError("horse_count", f"must be at least {horses_per_race} (horses_per_race)")
        if race_count < 1:
            raise ValidationError("race_count", "must be at least 1")
        if horses_per_race < 2:
            raise ValidationError("horses_per_race", "must be at least 2")

        horses = list(roster)
        races = []
        for _ in range(race_count):
            picks = self.rng.choice(len(horses), size=horses_per_race, replace=False)
            lineup = [horses[i] for i in picks]
            distance = Distance.create(int(self.rng.choice(VALID_DISTANCES)))
            race_rng = np.random.default_rng(self.rng.integers(0, 2**31))
            races.append(Race.create(lineup, distance, rng=race_rng))

        self.state_store.set_horses(horses)
        self.state_store.set_races(races)
        self.state_store.set_current_race_index(0)
        self.state_store.set_is_running(False)
        self.state_store.reset_tick()

        logger.info("Generated program: %d races from %d horses", race_count, len(horses))
        return ProgramResult(horses=horses, races=races)
