"""Phrase matcher for natural-language date and time expressions.

The input is split into word, number and punctuation tokens and scanned
left to right. At every token position the rules below are tried in
priority order; the first position where any rule matches wins, and the
composite rules come first so the longest phrasing is preferred.

    expression      := clock-first / date-then-clock / now / clock
    clock-first     := ["at"] clock ["on"] date-part
    date-then-clock := date-part [["at"] clock]
    date-part       := "in" duration ["from" "now"]
                     / modifier (weekday / month-phrase / duration / unit)
                     / duration ["ago" / "from" "now"]
                     / ["the"] day "of" (month-phrase / month-modifier "month")
                     / month-phrase / weekday / relative-day
    duration        := quantity ("and" quantity)*
    quantity        := (digits / number-word / "a" / "an") unit
    clock           := hour [":" mm [":" ss]] ["am" / "pm"]

Without "at", a clock next to a date part needs a colon or a meridiem,
otherwise "december 23rd 2019" would read the year as a clock.

A clock that has consumed a colon or a meridiem is committed: malformed
continuations such as "10:am" or "13pm" raise ParseError instead of
backtracking.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from naturaldate.errors import ParseError
from naturaldate.grammar.models import (
    ClockTime,
    Composite,
    DayOfRelativeMonth,
    Modifier,
    Month,
    Now,
    ParsedExpression,
    Quantity,
    RelativeDay,
    RelativeOffset,
    Weekday,
)
from naturaldate.grammar.tables import (
    MERIDIEM_WORDS,
    MODIFIER_WORDS,
    ORDINAL_SUFFIXES,
    RELATIVE_DAY_WORDS,
    UNIT_WORDS,
    month_value,
    number_value,
    weekday_value,
)

logger = logging.getLogger(__name__)


TOKEN_PATTERN = re.compile(r"[a-z]+|[0-9]+|[^\sa-z0-9]", re.IGNORECASE)

# Longer digit runs are never amounts, days or clock fields.
MAX_NUMBER_DIGITS = 9

# Rule results are (node, index of the first unconsumed token).
_Result = Optional[Tuple[Any, int]]


@dataclass(frozen=True)
class Token:
    """A lower-cased token with its character span in the input."""

    text: str
    start: int
    end: int

    @property
    def is_number(self) -> bool:
        return self.text.isdigit()


@dataclass(frozen=True)
class PhraseMatch:
    """The recognised expression and where it sits in the input."""

    expression: ParsedExpression
    start: int    # character offset of the first matched token
    end: int      # character offset just past the last matched token
    text: str     # literal matched input


def tokenize(text: str) -> List[Token]:
    """Split text into word, number and single punctuation tokens."""
    return [
        Token(match.group().lower(), match.start(), match.end())
        for match in TOKEN_PATTERN.finditer(text)
    ]


def _is_explicit(clock: ClockTime) -> bool:
    return clock.minute is not None or clock.meridiem is not None


def _offset(quantities: Sequence[Quantity], direction: Modifier, from_now: bool = False) -> RelativeOffset:
    head = quantities[0]
    return RelativeOffset(
        amount=head.amount,
        unit=head.unit,
        direction=direction,
        from_now=from_now,
        extra=tuple(quantities[1:]),
    )


class PhraseMatcher:
    """Find the first date/time expression in a piece of text.

    A matcher is built per input and holds nothing but the input and its
    tokens, so separate instances can run concurrently.

    Example:
        >>> PhraseMatcher("Remind me in 2 hours").match().expression
        RelativeOffset(amount=2, unit=<Unit.HOUR: 'hour'>, ...)
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)

    def match(self) -> PhraseMatch:
        """Return the first expression in the text.

        Raises:
            ParseError: No expression was found, or one could not be completed
        """
        for index in range(len(self.tokens)):
            if not self._starts_phrase(index):
                continue
            result = self._expression(index)
            if result is None:
                continue
            expression, after = result
            start = self.tokens[index].start
            end = self.tokens[after - 1].end
            logger.debug(f"Matched {self.text[start:end]!r} as {expression!r}")
            return PhraseMatch(expression, start, end, self.text[start:end])

        logger.debug(f"No date/time expression found in {self.text!r}")
        stripped = self.text.strip()
        start = len(self.text) - len(self.text.lstrip()) if stripped else 0
        raise ParseError.at(self.text, start, start + len(stripped))

    # -----------------------------------------------------------------------
    # Token Helpers
    # -----------------------------------------------------------------------

    def _token(self, index: int) -> Optional[Token]:
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def _text(self, index: int) -> Optional[str]:
        token = self._token(index)
        return token.text if token is not None else None

    def _word(self, index: int, words) -> Optional[str]:
        text = self._text(index)
        if text is not None and text in words:
            return text
        return None

    def _glued(self, index: int) -> bool:
        """True when the token directly follows the previous one."""
        token = self._token(index)
        return token is not None and index > 0 and self.tokens[index - 1].end == token.start

    def _number(self, index: int) -> Optional[int]:
        token = self._token(index)
        if token is None or not token.is_number or len(token.text) > MAX_NUMBER_DIGITS:
            return None
        return int(token.text)

    def _colon(self, index: int) -> bool:
        return self._text(index) == ":" and self._glued(index)

    def _starts_phrase(self, index: int) -> bool:
        if index == 0:
            return True
        previous = self.tokens[index - 1]
        return previous.end < self.tokens[index].start or not previous.text.isalnum()

    def _error(self, first: int, last: int) -> ParseError:
        last = min(last, len(self.tokens) - 1)
        return ParseError.at(self.text, self.tokens[first].start, self.tokens[last].end)

    # -----------------------------------------------------------------------
    # Top-level Rules
    # -----------------------------------------------------------------------

    def _expression(self, index: int) -> _Result:
        return (
            self._clock_first(index)
            or self._date_then_clock(index)
            or self._now(index)
            or self._clock(index)
        )

    def _clock_first(self, index: int) -> _Result:
        at = self._word(index, ("at",)) is not None
        clock = self._clock(index + 1 if at else index)
        if clock is None:
            return None
        time, after = clock
        if not at and not _is_explicit(time):
            return None
        if self._word(after, ("on",)):
            after += 1
        date = self._date_part(after)
        if date is None:
            return None
        return Composite(date[0], time), date[1]

    def _date_then_clock(self, index: int) -> _Result:
        date = self._date_part(index)
        if date is None:
            return None
        expression, after = date
        at = self._word(after, ("at",)) is not None
        clock = self._clock(after + 1 if at else after)
        if clock is None or not (at or _is_explicit(clock[0])):
            return date
        return Composite(expression, clock[0]), clock[1]

    def _now(self, index: int) -> _Result:
        after = index + 1 if self._word(index, ("right",)) else index
        if self._word(after, ("now",)):
            return Now(), after + 1
        return None

    # -----------------------------------------------------------------------
    # Date Parts
    # -----------------------------------------------------------------------

    def _date_part(self, index: int) -> _Result:
        return (
            self._in_duration(index)
            or self._modified(index)
            or self._bare_duration(index)
            or self._day_of_month(index)
            or self._month_phrase(index, Modifier.BARE)
            or self._weekday(index, Modifier.BARE)
            or self._relative_day(index)
        )

    def _in_duration(self, index: int) -> _Result:
        if not self._word(index, ("in",)):
            return None
        duration = self._duration(index + 1)
        if duration is None:
            return None
        quantities, after = duration
        end = self._from_now(after)
        if end is not None:
            after = end
        return _offset(quantities, Modifier.NEXT, from_now=True), after

    def _modified(self, index: int) -> _Result:
        word = self._word(index, MODIFIER_WORDS)
        if word is None:
            return None
        modifier = MODIFIER_WORDS[word]
        after = index + 1
        return (
            self._weekday(after, modifier)
            or self._month_phrase(after, modifier)
            or self._modified_duration(after, modifier)
            or self._single_unit(after, modifier)
        )

    def _modified_duration(self, index: int, modifier: Modifier) -> _Result:
        duration = self._duration(index)
        if duration is None:
            return None
        quantities, after = duration
        return _offset(quantities, modifier), after

    def _single_unit(self, index: int, modifier: Modifier) -> _Result:
        word = self._word(index, UNIT_WORDS)
        if word is None:
            return None
        return RelativeOffset(1, UNIT_WORDS[word], modifier), index + 1

    def _bare_duration(self, index: int) -> _Result:
        duration = self._duration(index)
        if duration is None:
            return None
        quantities, after = duration
        if self._word(after, ("ago",)):
            return _offset(quantities, Modifier.PAST), after + 1
        end = self._from_now(after)
        if end is not None:
            return _offset(quantities, Modifier.NEXT, from_now=True), end
        return _offset(quantities, Modifier.BARE), after

    def _day_of_month(self, index: int) -> _Result:
        after = index + 1 if self._word(index, ("the",)) else index
        day = self._day(after)
        if day is None:
            return None
        value, after = day
        if not self._word(after, ("of",)):
            return None
        after += 1

        month = month_value(self._text(after) or "")
        if month is not None:
            return Month(month, Modifier.BARE, value), after + 1

        word = self._word(after, ("this",) + tuple(MODIFIER_WORDS))
        if word is None:
            return None
        modifier = Modifier.THIS if word == "this" else MODIFIER_WORDS[word]
        if self._word(after + 1, ("month",)):
            return DayOfRelativeMonth(value, modifier), after + 2
        month = month_value(self._text(after + 1) or "")
        if month is not None and modifier is not Modifier.THIS:
            return Month(month, modifier, value), after + 2
        return None

    def _month_phrase(self, index: int, modifier: Modifier) -> _Result:
        month = month_value(self._text(index) or "")
        if month is None:
            return None
        day = self._day(index + 1)
        if day is None:
            return Month(month, modifier), index + 1
        return Month(month, modifier, day[0]), day[1]

    def _weekday(self, index: int, modifier: Modifier) -> _Result:
        weekday = weekday_value(self._text(index) or "")
        if weekday is None:
            return None
        return Weekday(weekday, modifier), index + 1

    def _relative_day(self, index: int) -> _Result:
        word = self._word(index, RELATIVE_DAY_WORDS)
        if word is None:
            return None
        return RelativeDay(RELATIVE_DAY_WORDS[word]), index + 1

    # -----------------------------------------------------------------------
    # Durations and Numbers
    # -----------------------------------------------------------------------

    def _duration(self, index: int) -> _Result:
        first = self._quantity(index)
        if first is None:
            return None
        quantities = [first[0]]
        after = first[1]
        while self._word(after, ("and",)):
            following = self._quantity(after + 1)
            if following is None:
                break
            quantities.append(following[0])
            after = following[1]
        return tuple(quantities), after

    def _quantity(self, index: int) -> _Result:
        amount = self._number(index)
        if amount is None:
            amount = number_value(self._text(index) or "")
        if amount is None:
            return None
        word = self._word(index + 1, UNIT_WORDS)
        if word is None:
            return None
        return Quantity(amount, UNIT_WORDS[word]), index + 2

    def _from_now(self, index: int) -> Optional[int]:
        if self._word(index, ("from",)) and self._word(index + 1, ("now",)):
            return index + 2
        return None

    def _day(self, index: int) -> _Result:
        value = self._number(index)
        if value is None:
            return None
        if not 1 <= value <= 31:
            return None
        if self._word(index + 1, ORDINAL_SUFFIXES) and self._glued(index + 1):
            return value, index + 2
        if self._colon(index + 1) or self._word(index + 1, MERIDIEM_WORDS):
            return None
        return value, index + 1

    # -----------------------------------------------------------------------
    # Clock Times
    # -----------------------------------------------------------------------

    def _clock(self, index: int) -> _Result:
        hour = self._number(index)
        if hour is None or len(self.tokens[index].text) > 2:
            return None
        # "15th" is a day, not a clock
        if self._word(index + 1, ORDINAL_SUFFIXES) and self._glued(index + 1):
            return None
        after = index + 1
        minute = second = None
        if self._colon(after):
            minute = self._clock_field(index, after + 1)
            after += 2
            if self._colon(after):
                second = self._clock_field(index, after + 1)
                after += 2

        meridiem = None
        word = self._word(after, MERIDIEM_WORDS)
        if word is not None:
            meridiem = MERIDIEM_WORDS[word]
            after += 1

        if meridiem is not None:
            valid = 1 <= hour <= 12
        elif minute is not None:
            valid = hour <= 23
        elif hour > 23:
            return None
        else:
            valid = True
        if not valid:
            raise self._error(index, after - 1)
        return ClockTime(hour, minute, second, meridiem), after

    def _clock_field(self, start: int, index: int) -> int:
        """Two-digit minute or second field following a colon."""
        token = self._token(index)
        if token is None or not token.is_number or len(token.text) != 2 or not self._glued(index):
            raise self._error(start, index)
        value = int(token.text)
        if value > 59:
            raise self._error(start, index)
        return value


def match_phrase(text: str) -> PhraseMatch:
    """Convenience function returning the first expression in ``text``."""
    return PhraseMatcher(text).match()


__all__ = ["PhraseMatch", "PhraseMatcher", "Token", "match_phrase", "tokenize"]
