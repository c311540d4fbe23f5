"""Domain errors raised by the race simulation."""

from uuid import UUID


class HorseSimError(Exception):
    """Base class for expected, recoverable simulation errors."""

    code = "HORSESIM_ERROR"

    @property
    def user_message(self) -> str:
        """Short message suitable for showing to an end user."""
        return str(self)


class ValidationError(HorseSimError):
    """Input rejected by a command before any state was changed."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Validation failed for {field}: {reason}")

    @property
    def user_message(self) -> str:
        return f"Invalid {self.field}: {self.reason}"


class RaceError(HorseSimError):
    """Base class for race state-machine errors."""

    code = "RACE_ERROR"


class RaceAlreadyFinishedError(RaceError):
    code = "RACE_ALREADY_FINISHED"

    def __init__(self, race_id: UUID):
        self.race_id = race_id
        super().__init__(f"Race {race_id} has already finished")

    @property
    def user_message(self) -> str:
        return "This race has already finished."


class RaceNotStartedError(RaceError):
    code = "RACE_NOT_STARTED"

    def __init__(self, race_id: UUID):
        self.race_id = race_id
        super().__init__(f"Race {race_id} has not started yet")

    @property
    def user_message(self) -> str:
        return "The race has not started yet."


class HorseAlreadyFinishedError(RaceError):
    code = "HORSE_ALREADY_FINISHED"

    def __init__(self, horse_id: UUID):
        self.horse_id = horse_id
        super().__init__(f"Horse {horse_id} has already finished the race")

    @property
    def user_message(self) -> str:
        return "This horse has already finished the race."


class RaceNotFoundError(RaceError):
    code = "RACE_NOT_FOUND"

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Race not found at index {index}")

    @property
    def user_message(self) -> str:
        # Index is 0-based internally, 1-based for people
        return f"Race at position {self.index + 1} not found."


class NoHorsesError(RaceError):
    code = "NO_HORSES"

    def __init__(self):
        super().__init__("Cannot create a race with no horses")

    @property
    def user_message(self) -> str:
        return "A race must have at least one horse."
