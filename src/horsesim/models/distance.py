"""Race distance value object."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Valid race distances in meters
VALID_DISTANCES: tuple[int, ...] = (1200, 1400, 1600, 1800, 2000, 2200)


class Distance(BaseModel):
    """A race distance restricted to the predefined set of lengths."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(..., strict=True, description="Distance in meters")

    @field_validator("value")
    @classmethod
    def _check_valid(cls, value: int) -> int:
        if value not in VALID_DISTANCES:
            allowed = ", ".join(str(d) for d in VALID_DISTANCES)
            raise ValueError(f"must be one of: {allowed} meters")
        return value

    @classmethod
    def create(cls, value: int) -> "Distance":
        """Validate and build a Distance.

        Raises:
            pydantic.ValidationError: If value is not a valid distance
        """
        return cls(value=value)

    @classmethod
    def reconstitute(cls, value: int) -> "Distance":
        """Build a Distance from trusted data without validation."""
        return cls.model_construct(value=value)

    @classmethod
    def shortest(cls) -> "Distance":
        return cls(value=VALID_DISTANCES[0])

    @classmethod
    def longest(cls) -> "Distance":
        return cls(value=VALID_DISTANCES[-1])

    @property
    def meters(self) -> int:
        return self.value

    @property
    def kilometers(self) -> float:
        return self.value / 1000

    @property
    def label(self) -> str:
        """Race category for display."""
        if self.value <= 1400:
            return "Sprint"
        if self.value <= 1800:
            return "Middle Distance"
        return "Long Distance"

    def is_longer_than(self, other: "Distance") -> bool:
        return self.value > other.value

    def is_shorter_than(self, other: "Distance") -> bool:
        return self.value < other.value

    def __str__(self) -> str:
        return f"{self.value}m"
