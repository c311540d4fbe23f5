"""Horse condition (fitness) value object."""

from pydantic import BaseModel, ConfigDict, Field

MIN_CONDITION = 1
MAX_CONDITION = 100


class Condition(BaseModel):
    """A horse's fitness score.

    The value is the upper bound of the metres a horse can cover in one
    turn, so a higher condition means a faster horse on average.
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(
        ...,
        ge=MIN_CONDITION,
        le=MAX_CONDITION,
        strict=True,
        description="Fitness score (1-100)",
    )

    @classmethod
    def create(cls, value: int) -> "Condition":
        """Validate and build a Condition.

        Raises:
            pydantic.ValidationError: If value is not an integer in 1..100
        """
        return cls(value=value)

    @classmethod
    def reconstitute(cls, value: int) -> "Condition":
        """Build a Condition from trusted data without validation."""
        return cls.model_construct(value=value)

    def is_better_than(self, other: "Condition") -> bool:
        return self.value > other.value

    @property
    def label(self) -> str:
        """Descriptive bucket for display."""
        if self.value >= 90:
            return "Excellent"
        if self.value >= 70:
            return "Good"
        if self.value >= 50:
            return "Average"
        if self.value >= 30:
            return "Poor"
        return "Very Poor"

    def __str__(self) -> str:
        return str(self.value)
