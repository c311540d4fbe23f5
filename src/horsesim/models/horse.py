"""Horse model with display attributes and condition."""

import re
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .condition import Condition

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 30
NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-']+$")

RGB_PATTERN = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)
HEX_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


class Horse(BaseModel):
    """Represents a horse that can be entered into races.

    Immutable. Two horses are equal when their ids match; use
    ``deep_equals`` to compare every attribute.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="Unique horse identifier")
    name: str = Field(..., description="Display name")
    color: str = Field(..., description="Display color, normalized to #rrggbb")
    condition: Condition = Field(..., description="Fitness score")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        trimmed = value.strip()
        if len(trimmed) < NAME_MIN_LENGTH:
            raise ValueError(f"must be at least {NAME_MIN_LENGTH} characters")
        if len(trimmed) > NAME_MAX_LENGTH:
            raise ValueError(f"must be at most {NAME_MAX_LENGTH} characters")
        if not NAME_PATTERN.match(trimmed):
            raise ValueError("can only contain letters, numbers, spaces, hyphens, and apostrophes")
        return trimmed

    @field_validator("color")
    @classmethod
    def _normalize_color(cls, value: str) -> str:
        return normalize_color(value)

    @classmethod
    def create(cls, id: UUID | str, name: str, color: str, condition: int) -> "Horse":
        """Validate raw attributes and build a Horse.

        Args:
            id: UUID (or its string form)
            name: Display name
            color: ``#rgb``, ``#rrggbb`` or ``rgb(r,g,b)``
            condition: Fitness score (1-100)

        Raises:
            pydantic.ValidationError: If any attribute is invalid
        """
        return cls(id=id, name=name, color=color, condition=Condition.create(condition))

    @classmethod
    def reconstitute(cls, id: UUID, name: str, color: str, condition: Condition) -> "Horse":
        """Build a Horse from previously validated data."""
        return cls.model_construct(id=id, name=name, color=color, condition=condition)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Horse":
        return cls.create(data["id"], data["name"], data["color"], data["condition"])

    def with_condition(self, condition: Condition) -> "Horse":
        """Return a copy of this horse with a different condition."""
        return self.model_copy(update={"condition": condition})

    def deep_equals(self, other: "Horse") -> bool:
        return (
            self.id == other.id
            and self.name == other.name
            and self.color == other.color
            and self.condition == other.condition
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "color": self.color,
            "condition": self.condition.value,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Horse):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.condition.label})"


def normalize_color(value: str) -> str:
    """Normalize an rgb() or hex color string to lowercase #rrggbb.

    Raises:
        ValueError: If the string is not a recognised color format
    """
    trimmed = value.strip()

    rgb_match = RGB_PATTERN.match(trimmed)
    if rgb_match:
        r, g, b = (int(part) for part in rgb_match.groups())
        if r > 255 or g > 255 or b > 255:
            raise ValueError("RGB values must be between 0 and 255")
        return f"#{r:02x}{g:02x}{b:02x}"

    hex_match = HEX_PATTERN.match(trimmed)
    if hex_match:
        digits = hex_match.group(1).lower()
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits}"

    raise ValueError("must be in rgb(r,g,b) or #rrggbb/#rgb format")
