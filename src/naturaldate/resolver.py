"""Resolve a parsed expression against a reference instant.

Calendar arithmetic goes through ``dateutil.relativedelta`` so month and
year shifts keep the day of month and clamp it to the last day of shorter
months (January 31st plus one month is February 28th or 29th). Results keep
the reference's ``tzinfo``. Calendar units are wall-clock arithmetic on the
reference; minutes and hours are elapsed time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Tuple

from dateutil.relativedelta import relativedelta

from naturaldate.grammar.models import (
    ClockTime,
    Composite,
    DatePart,
    DayOfRelativeMonth,
    Modifier,
    Month,
    Now,
    ParsedExpression,
    RelativeDay,
    RelativeOffset,
    Unit,
    Weekday,
)
from naturaldate.types import Direction, ExprType

DATE_AND_TIME = ExprType.DATE | ExprType.TIME

# Month shift for "the 5th of last/this/next month"
RELATIVE_MONTH_SHIFT = {
    Modifier.PAST: -1,
    Modifier.THIS: 0,
    Modifier.NEXT: 1,
}


def resolve(
    expr: ParsedExpression,
    reference: datetime,
    direction: Direction = Direction.PAST,
) -> Tuple[datetime, ExprType]:
    """Turn a parsed expression into an absolute instant.

    Args:
        expr: Expression produced by the phrase matcher
        reference: Anchor instant; never modified
        direction: Direction for expressions without an explicit marker

    Returns:
        Tuple of the resolved instant and the components it specifies

    Raises:
        OverflowError: The result falls outside the datetime range
        ValueError: The result falls outside the datetime range
    """
    if isinstance(expr, Now):
        return reference, DATE_AND_TIME
    if isinstance(expr, ClockTime):
        return _at_clock(reference, expr), ExprType.TIME
    if isinstance(expr, Composite):
        day, _ = _resolve_date(expr.date, reference, direction)
        return _at_clock(day, expr.clock), DATE_AND_TIME
    return _resolve_date(expr, reference, direction)


def _resolve_date(
    expr: DatePart,
    reference: datetime,
    direction: Direction,
) -> Tuple[datetime, ExprType]:
    if isinstance(expr, RelativeOffset):
        return _resolve_offset(expr, reference, direction)
    if isinstance(expr, RelativeDay):
        return _midnight(reference) + timedelta(days=expr.offset), ExprType.DATE
    if isinstance(expr, Weekday):
        return _resolve_weekday(expr, reference, direction), ExprType.DATE
    if isinstance(expr, Month):
        return _resolve_month(expr, reference, direction), ExprType.DATE
    if isinstance(expr, DayOfRelativeMonth):
        shift = RELATIVE_MONTH_SHIFT[expr.modifier]
        return reference + relativedelta(months=shift, day=expr.day), ExprType.DATE
    raise TypeError(f"Unsupported expression: {expr!r}")


def _sign(modifier: Modifier, direction: Direction) -> int:
    if modifier is Modifier.NEXT:
        return 1
    if modifier is Modifier.PAST:
        return -1
    return 1 if direction is Direction.FUTURE else -1


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _at_clock(value: datetime, clock: ClockTime) -> datetime:
    """Same calendar date, with the clock's time of day."""
    return value.replace(
        hour=clock.hour24,
        minute=clock.minute or 0,
        second=clock.second or 0,
        microsecond=0,
    )


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


def _resolve_offset(
    expr: RelativeOffset,
    reference: datetime,
    direction: Direction,
) -> Tuple[datetime, ExprType]:
    """Apply every duration term with one sign.

    Minutes and hours move the clock (TIME). Days and weeks snap to midnight
    (DATE) unless the phrase was "in ..." or "... from now", which keep the
    reference clock. Months and years keep the reference clock (DATE). A
    duration mixing both kinds keeps the clock and is DATE | TIME.
    """
    sign = _sign(expr.direction, direction)
    delta = relativedelta()
    for quantity in expr.quantities:
        delta += relativedelta(**{f"{quantity.unit.value}s": sign * quantity.amount})

    units = {quantity.unit for quantity in expr.quantities}
    clock_units = {unit for unit in units if unit.is_clock_unit}
    if clock_units == units:
        return _elapsed(reference, delta), ExprType.TIME

    result = reference + delta
    if clock_units:
        return result, DATE_AND_TIME
    if units <= {Unit.DAY, Unit.WEEK} and not expr.from_now:
        result = _midnight(result)
    return result, ExprType.DATE


def _elapsed(reference: datetime, delta: relativedelta) -> datetime:
    """Add minutes and hours as elapsed time.

    Aware references step through UTC so a daylight-saving change between
    the two instants does not stretch or shrink the duration.
    """
    if reference.utcoffset() is None:
        return reference + delta
    return (reference.astimezone(timezone.utc) + delta).astimezone(reference.tzinfo)


def _resolve_weekday(expr: Weekday, reference: datetime, direction: Direction) -> datetime:
    """Nearest matching weekday strictly before or after the reference date.

    The reference date itself never matches: "monday" on a Monday is a week
    away in either direction.
    """
    if _sign(expr.modifier, direction) > 0:
        days = (expr.weekday - reference.weekday()) % 7 or 7
    else:
        days = -((reference.weekday() - expr.weekday) % 7 or 7)
    return _midnight(reference) + timedelta(days=days)


def _resolve_month(expr: Month, reference: datetime, direction: Direction) -> datetime:
    """Nearest named month, starting from the month adjacent to the reference.

    The reference month itself never matches: "november" in November is a
    year away. The day of month comes from the phrase or the reference and
    is clamped to the length of the target month; the clock is kept.
    """
    sign = _sign(expr.modifier, direction)
    months = sign * (((expr.month - reference.month) * sign) % 12 or 12)
    return reference + relativedelta(months=months, day=expr.day)


__all__ = ["resolve"]
