"""Static vocabulary for the phrase grammar.

Names are stored in tuples indexed by their small-integer value so that
lookups never depend on runtime-built state.
"""

from __future__ import annotations

from typing import Optional, Tuple

from naturaldate.grammar.models import Meridiem, Modifier, Unit


# ---------------------------------------------------------------------------
# Name Tables
# ---------------------------------------------------------------------------

# value = index + 1
NUMBER_WORDS: Tuple[str, ...] = (
    "one", "two", "three", "four", "five", "six",
    "seven", "eight", "nine", "ten", "eleven", "twelve",
)

# value = index, matches datetime.weekday()
WEEKDAY_NAMES: Tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

# value = index + 1
MONTH_NAMES: Tuple[str, ...] = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

# "a day", "an hour"
ARTICLES: Tuple[str, ...] = ("a", "an")

ORDINAL_SUFFIXES: Tuple[str, ...] = ("st", "nd", "rd", "th")


# ---------------------------------------------------------------------------
# Word Mappings
# ---------------------------------------------------------------------------

UNIT_WORDS = {
    "minute": Unit.MINUTE,
    "minutes": Unit.MINUTE,
    "hour": Unit.HOUR,
    "hours": Unit.HOUR,
    "day": Unit.DAY,
    "days": Unit.DAY,
    "week": Unit.WEEK,
    "weeks": Unit.WEEK,
    "month": Unit.MONTH,
    "months": Unit.MONTH,
    "year": Unit.YEAR,
    "years": Unit.YEAR,
}

MODIFIER_WORDS = {
    "next": Modifier.NEXT,
    "last": Modifier.PAST,
    "past": Modifier.PAST,
    "previous": Modifier.PAST,
}

RELATIVE_DAY_WORDS = {
    "yesterday": -1,
    "today": 0,
    "tomorrow": 1,
}

MERIDIEM_WORDS = {
    "am": Meridiem.AM,
    "pm": Meridiem.PM,
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def number_value(word: str) -> Optional[int]:
    """Value of a spelled-out number one..twelve, or an article meaning one."""
    if word in ARTICLES:
        return 1
    if word in NUMBER_WORDS:
        return NUMBER_WORDS.index(word) + 1
    return None


def weekday_value(word: str) -> Optional[int]:
    if word in WEEKDAY_NAMES:
        return WEEKDAY_NAMES.index(word)
    return None


def month_value(word: str) -> Optional[int]:
    if word in MONTH_NAMES:
        return MONTH_NAMES.index(word) + 1
    return None
