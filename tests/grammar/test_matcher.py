"""Tests for the tokenizer and phrase matcher."""

from __future__ import annotations

import time

import pytest

from naturaldate.errors import ParseError
from naturaldate.grammar.matcher import PhraseMatcher, match_phrase, tokenize
from naturaldate.grammar.models import (
    ClockTime,
    Composite,
    DayOfRelativeMonth,
    Meridiem,
    Modifier,
    Month,
    Now,
    Quantity,
    RelativeDay,
    RelativeOffset,
    Unit,
    Weekday,
)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


class TestTokenize:
    def test_splits_words_numbers_and_punctuation(self):
        tokens = tokenize("At 10:25PM, Dec 3rd")

        assert [token.text for token in tokens] == [
            "at", "10", ":", "25", "pm", ",", "dec", "3", "rd",
        ]

    def test_spans_point_into_original_text(self):
        text = "  next   Friday"

        tokens = tokenize(text)

        assert [(token.start, token.end) for token in tokens] == [(2, 6), (9, 15)]
        assert text[tokens[1].start:tokens[1].end] == "Friday"

    def test_empty_input(self):
        assert tokenize("") == []
        assert tokenize(" \t\n ") == []


# ---------------------------------------------------------------------------
# Phrase Categories
# ---------------------------------------------------------------------------


class TestPhraseCategories:
    """Each phrase form produces the expected token model."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("now", Now()),
            ("right now", Now()),
            ("5 minutes ago", RelativeOffset(5, Unit.MINUTE, Modifier.PAST)),
            ("five minutes", RelativeOffset(5, Unit.MINUTE, Modifier.BARE)),
            ("an hour from now", RelativeOffset(1, Unit.HOUR, Modifier.NEXT, from_now=True)),
            ("in a week", RelativeOffset(1, Unit.WEEK, Modifier.NEXT, from_now=True)),
            ("next month", RelativeOffset(1, Unit.MONTH, Modifier.NEXT)),
            ("last year", RelativeOffset(1, Unit.YEAR, Modifier.PAST)),
            ("past 3 days", RelativeOffset(3, Unit.DAY, Modifier.PAST)),
            ("next 2 months", RelativeOffset(2, Unit.MONTH, Modifier.NEXT)),
            ("yesterday", RelativeDay(-1)),
            ("today", RelativeDay(0)),
            ("tomorrow", RelativeDay(1)),
            ("sunday", Weekday(6)),
            ("previous tuesday", Weekday(1, Modifier.PAST)),
            ("next monday", Weekday(0, Modifier.NEXT)),
            ("march", Month(3)),
            ("last january", Month(1, Modifier.PAST)),
            ("december 23rd", Month(12, Modifier.BARE, 23)),
            ("december 23", Month(12, Modifier.BARE, 23)),
            ("the 25th of december", Month(12, Modifier.BARE, 25)),
            ("1st of next june", Month(6, Modifier.NEXT, 1)),
            ("the 5th of next month", DayOfRelativeMonth(5, Modifier.NEXT)),
            ("the 2nd of last month", DayOfRelativeMonth(2, Modifier.PAST)),
            ("the 1st of this month", DayOfRelativeMonth(1, Modifier.THIS)),
            ("10am", ClockTime(10, meridiem=Meridiem.AM)),
            ("5:25 pm", ClockTime(5, 25, meridiem=Meridiem.PM)),
            ("17:25:30", ClockTime(17, 25, 30)),
            ("17", ClockTime(17)),
        ],
    )
    def test_expression(self, text, expected):
        assert match_phrase(text).expression == expected

    def test_and_joined_duration(self):
        expression = match_phrase("1 hour and 3 minutes from now").expression

        assert expression.quantities == (
            Quantity(1, Unit.HOUR),
            Quantity(3, Unit.MINUTE),
        )
        assert expression.from_now is True

    def test_dangling_and_is_not_consumed(self):
        phrase = match_phrase("2 days and then some")

        assert phrase.expression == RelativeOffset(2, Unit.DAY)
        assert phrase.text == "2 days"


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


class TestComposites:
    def test_date_then_clock(self):
        phrase = match_phrase("tomorrow at 10:15am")

        assert phrase.expression == Composite(RelativeDay(1), ClockTime(10, 15, meridiem=Meridiem.AM))
        assert phrase.text == "tomorrow at 10:15am"

    def test_clock_first(self):
        phrase = match_phrase("Remind me at 7am on the 5th of next month")

        assert phrase.expression == Composite(
            DayOfRelativeMonth(5, Modifier.NEXT),
            ClockTime(7, meridiem=Meridiem.AM),
        )
        assert phrase.text == "at 7am on the 5th of next month"

    def test_clock_suffix_without_at_needs_colon_or_meridiem(self):
        assert match_phrase("yesterday 10").expression == RelativeDay(-1)
        assert match_phrase("yesterday 10pm").expression == Composite(
            RelativeDay(-1), ClockTime(10, meridiem=Meridiem.PM)
        )
        assert match_phrase("yesterday 10:30").expression == Composite(
            RelativeDay(-1), ClockTime(10, 30)
        )

    def test_at_allows_bare_hour(self):
        assert match_phrase("yesterday at 10").expression == Composite(RelativeDay(-1), ClockTime(10))

    def test_bare_hour_before_date_is_not_composite(self):
        phrase = match_phrase("10 tomorrow")

        assert phrase.expression == ClockTime(10)
        assert phrase.text == "10"


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


class TestScanning:
    def test_first_position_wins(self):
        phrase = match_phrase("tuesday, or was it wednesday")

        assert phrase.expression == Weekday(1)
        assert phrase.start == 0

    def test_phrase_inside_sentence(self):
        text = "Please restart the server in 2 days from now, thanks"

        phrase = match_phrase(text)

        assert phrase.text == "in 2 days from now"
        assert text[phrase.start:phrase.end] == phrase.text

    def test_does_not_start_inside_a_word(self):
        phrase = match_phrase("room b12 on friday")

        assert phrase.expression == Weekday(4)

    def test_case_insensitive(self):
        assert match_phrase("NEXT Friday").expression == Weekday(4, Modifier.NEXT)

    def test_matcher_instances_are_independent(self):
        first = PhraseMatcher("today")
        second = PhraseMatcher("5pm")

        assert second.match().expression == ClockTime(5, meridiem=Meridiem.PM)
        assert first.match().expression == RelativeDay(0)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.parametrize(
        "text,snippet",
        [
            ("10:am", "10:am"),
            ("meet at 10:7", "10:7"),
            ("13pm", "13pm"),
            ("25:00", "25:00"),
            ("at 9:99", "9:99"),
        ],
    )
    def test_committed_clock_reports_clock_span(self, text, snippet):
        with pytest.raises(ParseError) as exc_info:
            match_phrase(text)

        assert exc_info.value.snippet == snippet

    def test_oversized_numbers_are_not_amounts(self):
        with pytest.raises(ParseError):
            match_phrase("12345678901 days")

    def test_unknown_words(self):
        with pytest.raises(ParseError) as exc_info:
            match_phrase("  lorem ipsum ")

        assert exc_info.value.snippet == "lorem ipsum"
        assert exc_info.value.column == 3

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_blank_input_points_at_start(self, text):
        with pytest.raises(ParseError) as exc_info:
            match_phrase(text)

        error = exc_info.value
        assert error.offset == 0
        assert error.line == 1
        assert error.column == 1
        assert error.snippet == ""


# ---------------------------------------------------------------------------
# Matching Cost
# ---------------------------------------------------------------------------


class TestMatchingCost:
    """Long adversarial inputs stay fast; no rule backtracks exponentially."""

    @pytest.mark.parametrize(
        "text",
        [
            "and " * 20000,
            "99 " * 40000,
            "the 5th of " * 5000,
            "next " * 20000,
            "32nd " * 20000,
        ],
    )
    def test_long_input_without_expression(self, text):
        started = time.perf_counter()

        with pytest.raises(ParseError):
            match_phrase(text)

        assert time.perf_counter() - started < 5.0

    def test_long_and_chain(self):
        text = "1 minute and " * 5000
        started = time.perf_counter()

        phrase = match_phrase(text)

        assert time.perf_counter() - started < 5.0
        assert len(phrase.expression.quantities) == 5000
        assert phrase.text == text.rstrip()[: -len(" and")]
