"""In-memory game state store."""

from collections.abc import Sequence

from horsesim.models import Horse
from horsesim.simulation import Race


class InMemoryGameStateStore:
    """Holds the program, the current race index, the tick and the run flag."""

    def __init__(self):
        self._horses: list[Horse] = []
        self._races: list[Race] = []
        self._current_race_index = 0
        self._is_running = False
        self._tick = 0

    def get_horses(self) -> tuple[Horse, ...]:
        return tuple(self._horses)

    def get_races(self) -> tuple[Race, ...]:
        return tuple(self._races)

    def get_current_race_index(self) -> int:
        return self._current_race_index

    def get_current_race(self) -> Race | None:
        if 0 <= self._current_race_index < len(self._races):
            return self._races[self._current_race_index]
        return None

    def is_running(self) -> bool:
        return self._is_running

    def get_tick(self) -> int:
        return self._tick

    def set_horses(self, horses: Sequence[Horse]) -> None:
        self._horses = list(horses)

    def set_races(self, races: Sequence[Race]) -> None:
        self._races = list(races)

    def set_current_race_index(self, index: int) -> None:
        self._current_race_index = index

    def set_is_running(self, running: bool) -> None:
        self._is_running = running

    def increment_tick(self) -> int:
        self._tick += 1
        return self._tick

    def reset_tick(self) -> None:
        self._tick = 0

    def advance_to_next_race(self) -> bool:
        """Move to the next race; False if already at the last one."""
        if self._current_race_index < len(self._races) - 1:
            self._current_race_index += 1
            return True
        return False

    def reset(self) -> None:
        self._horses = []
        self._races = []
        self._current_race_index = 0
        self._is_running = False
        self._tick = 0
