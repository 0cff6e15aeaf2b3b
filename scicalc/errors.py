"""Exception hierarchy shared by every stage of the calculator pipeline."""


class CalculatorError(Exception):
    """Base class for calculator errors.

    ``kind`` names the failure category so callers can report it without
    depending on the concrete class.
    """
    kind = "CalculatorError"


class InvalidCharacterError(CalculatorError):
    """Raised when the raw input contains a character outside the permitted set."""
    kind = "InvalidCharacter"


class ParseError(CalculatorError):
    """Raised for malformed expressions (unbalanced parentheses, missing operands...)."""
    kind = "SyntaxError"


class UnknownIdentifierError(CalculatorError):
    """Raised when a referenced name has no suitable binding."""
    kind = "UnknownIdentifier"


class ArityMismatchError(CalculatorError):
    """Raised when a function is called with the wrong number of arguments."""
    kind = "ArityMismatch"


class NonFiniteResultError(CalculatorError):
    """Raised when the final value is NaN or infinite."""
    kind = "NonFiniteResult"


class LexerError(ParseError):
    """Raised for errors during tokenization, e.g. malformed numeric literals."""
