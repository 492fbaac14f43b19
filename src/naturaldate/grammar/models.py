"""Token model for recognised date and time phrases.

Every phrase category the matcher understands maps to one frozen dataclass:
- Now: "now", "right now"
- RelativeOffset: "5 minutes ago", "in 2 days", "next month"
- RelativeDay: "yesterday", "today", "tomorrow"
- Weekday: "monday", "next friday", "previous tuesday"
- Month: "january", "last march", "december 23rd"
- DayOfRelativeMonth: "the 5th of next month"
- ClockTime: "10am", "5:25 pm", "17:25:30"
- Composite: a date-bearing phrase plus a clock time

The union is closed; the resolver handles every member. Construction
checks are assertions because out-of-range values can only come from a
grammar defect, never from user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Unit(str, Enum):
    """Duration unit of a relative offset."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def is_clock_unit(self) -> bool:
        """Minutes and hours move the clock, everything else the calendar."""
        return self in (Unit.MINUTE, Unit.HOUR)


class Modifier(str, Enum):
    """Directional marker attached to a phrase."""

    PAST = "past"    # ago, last, past, previous
    NEXT = "next"    # next, from now, in
    THIS = "this"    # "of this month" only
    BARE = "bare"    # no marker, the configured direction decides


class Meridiem(str, Enum):
    AM = "am"
    PM = "pm"


_DIRECTIONAL = (Modifier.PAST, Modifier.NEXT, Modifier.BARE)


# ---------------------------------------------------------------------------
# Phrase Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Now:
    """The reference instant itself."""


@dataclass(frozen=True)
class Quantity:
    """One ``amount unit`` term of a duration."""

    amount: int
    unit: Unit

    def __post_init__(self) -> None:
        assert self.amount >= 0, f"negative amount: {self.amount}"


@dataclass(frozen=True)
class RelativeOffset:
    """A duration applied to the reference instant.

    ``from_now`` marks the "in 2 days" / "2 days from now" phrasings, which
    keep the reference clock instead of snapping day and week offsets to
    midnight. ``extra`` carries further terms joined with "and".
    """

    amount: int
    unit: Unit
    direction: Modifier = Modifier.BARE
    from_now: bool = False
    extra: Tuple[Quantity, ...] = ()

    def __post_init__(self) -> None:
        assert self.amount >= 0, f"negative amount: {self.amount}"
        assert self.direction in _DIRECTIONAL, f"bad direction: {self.direction}"

    @property
    def quantities(self) -> Tuple[Quantity, ...]:
        return (Quantity(self.amount, self.unit),) + self.extra


@dataclass(frozen=True)
class RelativeDay:
    """yesterday (-1), today (0), tomorrow (+1)."""

    offset: int

    def __post_init__(self) -> None:
        assert self.offset in (-1, 0, 1), f"bad day offset: {self.offset}"


@dataclass(frozen=True)
class Weekday:
    """A named weekday; Monday is 0, Sunday is 6."""

    weekday: int
    modifier: Modifier = Modifier.BARE

    def __post_init__(self) -> None:
        assert 0 <= self.weekday <= 6, f"bad weekday: {self.weekday}"
        assert self.modifier in _DIRECTIONAL, f"bad modifier: {self.modifier}"


@dataclass(frozen=True)
class Month:
    """A named month, optionally with a day of month ("december 23rd")."""

    month: int
    modifier: Modifier = Modifier.BARE
    day: Optional[int] = None

    def __post_init__(self) -> None:
        assert 1 <= self.month <= 12, f"bad month: {self.month}"
        assert self.modifier in _DIRECTIONAL, f"bad modifier: {self.modifier}"
        assert self.day is None or 1 <= self.day <= 31, f"bad day: {self.day}"


@dataclass(frozen=True)
class DayOfRelativeMonth:
    """A day of the previous, current or next month ("the 5th of next month")."""

    day: int
    modifier: Modifier

    def __post_init__(self) -> None:
        assert 1 <= self.day <= 31, f"bad day: {self.day}"
        assert self.modifier in (Modifier.PAST, Modifier.THIS, Modifier.NEXT), (
            f"bad modifier: {self.modifier}"
        )


@dataclass(frozen=True)
class ClockTime:
    """A time of day, 24-hour unless a meridiem is given."""

    hour: int
    minute: Optional[int] = None
    second: Optional[int] = None
    meridiem: Optional[Meridiem] = None

    def __post_init__(self) -> None:
        if self.meridiem is None:
            assert 0 <= self.hour <= 23, f"bad hour: {self.hour}"
        else:
            assert 1 <= self.hour <= 12, f"bad 12-hour clock hour: {self.hour}"
        assert self.minute is None or 0 <= self.minute <= 59, f"bad minute: {self.minute}"
        assert self.second is None or 0 <= self.second <= 59, f"bad second: {self.second}"

    @property
    def hour24(self) -> int:
        if self.meridiem is Meridiem.AM:
            return 0 if self.hour == 12 else self.hour
        if self.meridiem is Meridiem.PM:
            return self.hour if self.hour == 12 else self.hour + 12
        return self.hour


DatePart = Union[RelativeOffset, RelativeDay, Weekday, Month, DayOfRelativeMonth]


@dataclass(frozen=True)
class Composite:
    """A date-bearing phrase with an explicit clock time."""

    date: DatePart
    clock: ClockTime


ParsedExpression = Union[
    Now,
    RelativeOffset,
    RelativeDay,
    Weekday,
    Month,
    DayOfRelativeMonth,
    ClockTime,
    Composite,
]


__all__ = [
    "Unit",
    "Modifier",
    "Meridiem",
    "Now",
    "Quantity",
    "RelativeOffset",
    "RelativeDay",
    "Weekday",
    "Month",
    "DayOfRelativeMonth",
    "ClockTime",
    "Composite",
    "DatePart",
    "ParsedExpression",
]
