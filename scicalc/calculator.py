"""Entry point of the expression pipeline.

raw text -> normalize -> rewrite_factorials -> parse -> evaluate -> format_result
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import CalculatorError, ParseError
from .evaluator import AngleMode, environment_for, evaluate
from .factorial import rewrite_factorials
from .formatter import format_result
from .normalizer import normalize
from .parser import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Calculation:
    """A successful evaluation: the input as typed, its value and its display text."""
    expression: str
    value: float
    display: str


def canonicalize(raw: str) -> str:
    """Return the parser-ready form of ``raw``."""
    return rewrite_factorials(normalize(raw))


def _evaluate_text(raw: str, angle_mode: AngleMode) -> float:
    try:
        tree = parse(canonicalize(raw))
        return evaluate(tree, environment_for(angle_mode))
    except RecursionError:
        raise ParseError("Expression is nested too deeply") from None


def calculate(raw: str, angle_mode: AngleMode = AngleMode.DEGREES) -> Calculation:
    """Evaluate ``raw`` and return the full Calculation.

    Raises a CalculatorError subclass describing the first stage that failed.
    """
    try:
        value = _evaluate_text(raw, AngleMode(angle_mode))
    except CalculatorError as e:
        logger.info(f"Evaluation of {raw!r} failed ({e.kind}): {e}")
        raise
    return Calculation(raw, value, format_result(value))


def compute(raw: str, angle_mode: AngleMode = AngleMode.DEGREES) -> str:
    """Evaluate ``raw`` and return the display string."""
    return calculate(raw, angle_mode).display
