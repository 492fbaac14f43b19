"""naturaldate: resolve natural-language date and time expressions.

Finds one expression such as "Remind me in one month from now at 7am" in
free text and resolves it against a caller-supplied reference instant.

Usage:
    from naturaldate import Direction, ParseOptions, parse

    when, expr_type = parse("next friday at 9am", reference)
    when, expr_type = parse("monday", reference, ParseOptions(direction=Direction.FUTURE))
"""

from naturaldate.errors import NaturalDateError, ParseError
from naturaldate.parser import NaturalDateParser, parse
from naturaldate.resolver import resolve
from naturaldate.types import Direction, ExprType, ParseOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Direction",
    "ExprType",
    "ParseOptions",
    "NaturalDateError",
    "ParseError",
    "NaturalDateParser",
    "parse",
    "resolve",
]
