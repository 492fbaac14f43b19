"""Natural-language date parsing entry points.

Combines the phrase matcher and the resolver:

    text -> PhraseMatcher -> ParsedExpression -> resolve() -> (datetime, ExprType)

Example:
    >>> from datetime import datetime, timezone
    >>> reference = datetime(2019, 11, 25, 13, 7, 18, tzinfo=timezone.utc)
    >>> parse("Remind me in one month from now at 7am", reference)
    (datetime.datetime(2019, 12, 25, 7, 0, tzinfo=datetime.timezone.utc), <ExprType.DATE|TIME: 3>)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Tuple

from naturaldate.errors import ParseError
from naturaldate.grammar.matcher import PhraseMatch, PhraseMatcher
from naturaldate.resolver import resolve
from naturaldate.types import ExprType, ParseOptions

logger = logging.getLogger(__name__)


class NaturalDateParser:
    """Parse free text into an absolute instant.

    The parser only holds its options, so one instance can be shared across
    threads; every call builds its own matcher.

    Example:
        >>> parser = NaturalDateParser(ParseOptions(direction="future"))
        >>> when, expr_type = parser.parse("friday at 9am", reference)
    """

    def __init__(self, options: Optional[ParseOptions] = None) -> None:
        self.options = options or ParseOptions()

    def match(self, text: str) -> PhraseMatch:
        """Find the first expression in ``text`` without resolving it.

        Raises:
            ParseError: No expression could be recognised
        """
        return PhraseMatcher(text).match()

    def parse(self, text: str, reference: datetime) -> Tuple[datetime, ExprType]:
        """Resolve the first expression in ``text`` relative to ``reference``.

        Args:
            text: Free-form text containing one date/time expression
            reference: Anchor instant; the result shares its tzinfo

        Returns:
            Tuple of the resolved instant and the components it specifies

        Raises:
            ParseError: No expression could be recognised or resolved
        """
        phrase = self.match(text)
        try:
            value, expr_type = resolve(phrase.expression, reference, self.options.direction)
        except (OverflowError, ValueError) as exc:
            logger.debug(f"Could not resolve {phrase.text!r}: {exc}")
            raise ParseError.at(
                text, phrase.start, phrase.end, details={"reason": str(exc)}
            ) from exc

        logger.debug(
            f"Resolved {phrase.text!r} to {value.isoformat()} "
            f"({expr_type}, direction={self.options.direction.value})"
        )
        return value, expr_type


def parse(
    text: str,
    reference: datetime,
    options: Optional[ParseOptions] = None,
) -> Tuple[datetime, ExprType]:
    """Convenience function for one-off parsing.

    Args:
        text: Free-form text containing one date/time expression
        reference: Anchor instant
        options: Parser options (defaults to the past direction)

    Returns:
        Tuple of the resolved instant and the components it specifies
    """
    return NaturalDateParser(options).parse(text, reference)


__all__ = ["NaturalDateParser", "parse"]
