"""Rewrite of postfix ``!`` into explicit ``factorial(...)`` calls.

The rewrite works on canonical text before parsing. For each ``!``, the
leftmost first, the operand is found by scanning backward with a nesting
depth: ``)`` opens a level, ``(`` closes one and the scan stops at the ``(``
that brings the depth back to zero. At depth zero any character other than
a digit or ``.`` ends the operand, so ``2**3!`` binds to ``3`` only. An
unmatched ``(`` leaves the depth negative and the scan runs on to the start
of the text (``sin(3!)`` -> ``factorial(sin(3))``).

A ``-`` opening the text belongs to a numeric operand: ``-1!`` is
``factorial(-1)``.
"""

import logging

logger = logging.getLogger(__name__)

_NUMERIC_CHARS = frozenset("0123456789.")


def operand_start(text: str, bang: int) -> int:
    """Return the index where the operand of the ``!`` at ``bang`` begins."""
    depth = 0
    index = bang - 1
    while index >= 0:
        char = text[index]
        if char == ")":
            depth += 1
        elif char == "(":
            depth -= 1
            if depth == 0:
                return index
        elif depth == 0 and char not in _NUMERIC_CHARS:
            after_boundary = index + 1
            if index == 0 and char == "-" and after_boundary < bang:
                return 0
            return after_boundary
        index -= 1
    return 0


def rewrite_factorials(expr: str) -> str:
    """Replace every postfix ``!`` in ``expr`` with a ``factorial(...)`` call."""
    text = expr
    while "!" in text:
        bang = text.index("!")
        start = operand_start(text, bang)
        text = f"{text[:start]}factorial({text[start:bang]}){text[bang + 1:]}"
    if text != expr:
        logger.debug(f"Rewrote factorials: {expr!r} -> {text!r}")
    return text
