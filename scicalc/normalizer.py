"""Character-set validation and shorthand substitution for raw input."""

import logging
import re

from .errors import InvalidCharacterError

logger = logging.getLogger(__name__)

# ASCII whitespace only; other control characters are rejected.
_ALLOWED = re.compile(r"[0-9A-Za-z+\-*/().,^%! \t\n\r\f\vπ]*")
_WHITESPACE = re.compile(r"[ \t\n\r\f\v]")

# Applied in order; '%' must expand after '^' so the inserted '/' is untouched.
_SUBSTITUTIONS = (
    ("π", "pi"),
    ("^", "**"),
    ("%", "/100"),
)


def normalize(raw: str) -> str:
    """Validate ``raw`` and rewrite its shorthand notations into canonical text."""
    if not _ALLOWED.fullmatch(raw):
        raise InvalidCharacterError("Expression contains disallowed character")
    text = raw
    for symbol, replacement in _SUBSTITUTIONS:
        text = text.replace(symbol, replacement)
    text = _WHITESPACE.sub("", text)
    logger.debug(f"Normalized {raw!r} to {text!r}")
    return text
