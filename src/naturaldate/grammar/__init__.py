"""Phrase grammar for natural-language dates.

- models: closed token model for each recognised phrase category
- tables: static vocabulary (numbers, units, weekdays, months)
- matcher: tokenizer and ordered-choice phrase matcher
"""

from naturaldate.grammar.models import (
    ClockTime,
    Composite,
    DatePart,
    DayOfRelativeMonth,
    Meridiem,
    Modifier,
    Month,
    Now,
    ParsedExpression,
    Quantity,
    RelativeDay,
    RelativeOffset,
    Unit,
    Weekday,
)
from naturaldate.grammar.matcher import PhraseMatch, PhraseMatcher, match_phrase

__all__ = [
    # Enums
    "Unit",
    "Modifier",
    "Meridiem",
    # Phrase variants
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
    # Matching
    "PhraseMatch",
    "PhraseMatcher",
    "match_phrase",
]
