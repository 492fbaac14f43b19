"""Shared fixtures for naturaldate tests.

Provides:
- The reference instant used by the golden tables (Monday 2019-11-25 13:07:18 UTC)
- Parsers configured for each direction
- An isolated config path with environment overrides cleared
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from naturaldate import Direction, NaturalDateParser, ParseOptions


@pytest.fixture
def reference() -> datetime:
    return datetime(2019, 11, 25, 13, 7, 18, tzinfo=timezone.utc)


@pytest.fixture
def past_parser() -> NaturalDateParser:
    return NaturalDateParser(ParseOptions(direction=Direction.PAST))


@pytest.fixture
def future_parser() -> NaturalDateParser:
    return NaturalDateParser(ParseOptions(direction=Direction.FUTURE))


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("NATURALDATE_DIRECTION", raising=False)
    return tmp_path / "naturaldate" / "config.json"
