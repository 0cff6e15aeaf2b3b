"""Scientific calculator: expression pipeline plus session, REPL and HTTP front ends."""

from .calculator import Calculation, calculate, canonicalize, compute
from .errors import (
    ArityMismatchError,
    CalculatorError,
    InvalidCharacterError,
    NonFiniteResultError,
    ParseError,
    UnknownIdentifierError,
)
from .evaluator import AngleMode, Environment, environment_for, evaluate
from .factorial import rewrite_factorials
from .formatter import format_result
from .normalizer import normalize
from .parser import parse

__all__ = [
    "AngleMode",
    "ArityMismatchError",
    "Calculation",
    "CalculatorError",
    "Environment",
    "InvalidCharacterError",
    "NonFiniteResultError",
    "ParseError",
    "UnknownIdentifierError",
    "calculate",
    "canonicalize",
    "compute",
    "environment_for",
    "evaluate",
    "format_result",
    "normalize",
    "parse",
    "rewrite_factorials",
]
