"""Direction policy and result classification.

Defines:
- Direction: default resolution direction for bare expressions
- ExprType: which components (date, time) a phrase determined
- ParseOptions: per-call configuration passed to the parser
"""

from __future__ import annotations

from enum import Enum, Flag

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    """Which way a bare expression ("monday", "2 hours") points.

    Only expressions without an explicit marker ("ago", "from now", "next",
    "last", "past", "previous") consult the direction.
    """

    PAST = "past"
    FUTURE = "future"


class ExprType(Flag):
    """Components a resolved expression actually specified.

    ``INVALID`` is the empty set and only ever appears on parse errors.
    """

    INVALID = 0
    DATE = 1
    TIME = 2

    @property
    def labels(self) -> list[str]:
        """Lower-case component names, date first."""
        return [member.name.lower() for member in (ExprType.DATE, ExprType.TIME) if member in self]


class ParseOptions(BaseModel):
    """Per-call parser configuration.

    Example:
        >>> ParseOptions(direction="future").direction
        <Direction.FUTURE: 'future'>
    """

    model_config = ConfigDict(frozen=True)

    direction: Direction = Field(
        default=Direction.PAST,
        description="Direction used for expressions without an explicit marker",
    )

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


__all__ = ["Direction", "ExprType", "ParseOptions"]
