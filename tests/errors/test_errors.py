"""Tests for the error hierarchy and user-facing messages."""

from __future__ import annotations

import pytest

from naturaldate.errors import (
    ConfigurationError,
    InvalidConfigError,
    NaturalDateError,
    ParseError,
    handle_error,
    is_recoverable,
)
from naturaldate.errors.user_messages import (
    ERROR_MESSAGES,
    RECOVERY_SUGGESTIONS,
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)
from naturaldate.types import ExprType


class TestParseError:
    def test_position_from_text(self):
        error = ParseError.at("go\nat 10:am", 6, 11)

        assert error.line == 2
        assert error.column == 4
        assert error.offset == 6
        assert error.snippet == "10:am"
        assert str(error) == 'parse error near "10:am" (line 2, column 4)'

    def test_offset_is_in_bytes(self):
        text = "naïve 13pm"

        error = ParseError.at(text, 6, 10)

        assert error.column == 7
        assert error.offset == 7
        assert error.snippet == "13pm"

    def test_end_defaults_to_end_of_text(self):
        assert ParseError.at("hello there", 6).snippet == "there"

    def test_details_carry_position(self):
        error = ParseError.at("x 25:00", 2, 7, details={"reason": "hour out of range"})

        assert error.details == {
            "offset": 2,
            "line": 1,
            "column": 3,
            "snippet": "25:00",
            "reason": "hour out of range",
        }

    def test_expr_type_is_invalid(self):
        assert ParseError.at("x", 0).expr_type == ExprType.INVALID
        assert not ExprType.INVALID

    def test_to_dict(self):
        payload = ParseError.at("10:am", 0).to_dict()

        assert payload["code"] == "PARSE_ERROR"
        assert payload["message"] == 'parse error near "10:am" (line 1, column 1)'
        assert payload["user_message"] == ERROR_MESSAGES["PARSE_ERROR"]
        assert payload["recoverable"] is True
        assert payload["details"]["snippet"] == "10:am"

    def test_is_naturaldate_error(self):
        with pytest.raises(NaturalDateError):
            raise ParseError.at("x", 0)


class TestHierarchy:
    def test_configuration_errors(self):
        error = InvalidConfigError(details={"path": "/tmp/config.json"})

        assert isinstance(error, ConfigurationError)
        assert error.code == "INVALID_CONFIG"
        assert error.message == "Invalid configuration"
        assert error.details == {"path": "/tmp/config.json"}

    def test_user_message_override(self):
        error = NaturalDateError("boom", user_message="Try again later")

        assert error.user_message == "Try again later"
        assert error.recovery_suggestion == RECOVERY_SUGGESTIONS["NATURALDATE_ERROR"]

    def test_is_recoverable(self):
        assert is_recoverable(ParseError.at("x", 0))
        assert not is_recoverable(RuntimeError("boom"))


class TestUserMessages:
    def test_unknown_codes_fall_back(self):
        assert get_user_message(KeyError("x")) == ERROR_MESSAGES["UNKNOWN_ERROR"]
        assert get_recovery_suggestion("NOPE") == RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"]

    def test_codes_as_strings(self):
        assert get_user_message("PARSE_ERROR") == ERROR_MESSAGES["PARSE_ERROR"]

    def test_format_for_user(self):
        message = handle_error(InvalidConfigError())

        assert message == format_error_for_user(InvalidConfigError())
        assert ERROR_MESSAGES["INVALID_CONFIG"] in message
        assert "Suggestion: " in message

    def test_format_for_cli(self):
        output = format_error_for_cli(ParseError.at("at 13pm", 3, 7))

        assert output.startswith("Error [PARSE_ERROR]: ")
        assert "Suggestion: " in output
        assert "Details:" in output
        assert "  snippet: 13pm" in output
        assert "  column: 4" in output
