"""Precedence-climbing parser turning canonical text into an AST.

Grammar, loosest binding first::

    expression := term (('+' | '-') term)*
    term       := unary (('*' | '/') unary)*
    unary      := ('-' | '+') unary | power
    power      := primary ('**' unary)?
    primary    := NUMBER | IDENT | IDENT '(' [expression (',' expression)*] ')'
                | '(' expression ')'

Unary minus binds looser than '**' on its left (``-2**2 == -4``) while the
exponent may carry its own sign (``2**-1``).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .errors import ParseError
from .lexer import COMMA, EOF, IDENT, LPAREN, NUMBER, OP, RPAREN, Token, tokenize
from .nodes import ASTNode, BinaryOp, Call, ConstantRef, NumberLiteral, UnaryMinus

logger = logging.getLogger(__name__)

# Infix operators: map to (binding_power, right_assoc). Higher binds tighter.
INFIX_BP: Dict[str, Tuple[int, bool]] = {
    '**': (30, True),
    '*': (20, False),
    '/': (20, False),
    '+': (10, False),
    '-': (10, False),
}

# Operand of a prefix sign stops before '*' and '/' but swallows '**'.
PREFIX_BP = 25


class Parser:
    """Parser over a token list produced by the lexer."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != EOF:
            self.pos += 1
        return tok

    def _expect(self, typ: str) -> Token:
        tok = self._current()
        if tok.type != typ:
            raise ParseError(f"Expected {typ} at pos {tok.pos}; got {_describe(tok)}")
        return self._advance()

    def parse(self) -> ASTNode:
        node = self.parse_expression(0)
        tok = self._current()
        if tok.type != EOF:
            raise ParseError(f"Unexpected {_describe(tok)} at pos {tok.pos}")
        return node

    def parse_expression(self, rbp: int = 0) -> ASTNode:
        left = self.nud(self._advance())
        while True:
            cur = self._current()
            if cur.type == LPAREN:
                raise ParseError(f"Unexpected '(' after expression at pos {cur.pos}")
            if cur.type != OP:
                break
            bp, right_assoc = INFIX_BP[cur.value]
            if bp <= rbp:
                break
            self._advance()
            right = self.parse_expression(bp - 1 if right_assoc else bp)
            left = BinaryOp(cur.value, left, right)
        return left

    def nud(self, tok: Token) -> ASTNode:
        """Null denotation (prefix/primary)."""
        if tok.type == NUMBER:
            return NumberLiteral(float(tok.value))
        if tok.type == IDENT:
            if self._current().type == LPAREN:
                return Call(tok.value, tuple(self._parse_argument_list()))
            return ConstantRef(tok.value)
        if tok.type == LPAREN:
            expr = self.parse_expression(0)
            self._expect(RPAREN)
            return expr
        if tok.type == OP and tok.value in ('-', '+'):
            operand = self.parse_expression(PREFIX_BP)
            return UnaryMinus(operand) if tok.value == '-' else operand
        if tok.type == EOF:
            raise ParseError("Unexpected end of expression")
        raise ParseError(f"Unexpected {_describe(tok)} at pos {tok.pos}")

    def _parse_argument_list(self) -> List[ASTNode]:
        """Parse '(' expr (, expr)* ')'. An empty list is allowed; arity is checked on evaluation."""
        self._expect(LPAREN)
        args: List[ASTNode] = []
        if self._current().type == RPAREN:
            self._advance()
            return args
        while True:
            args.append(self.parse_expression(0))
            cur = self._current()
            if cur.type == COMMA:
                self._advance()
                continue
            if cur.type == RPAREN:
                self._advance()
                break
            raise ParseError(f"Expected ',' or ')' in argument list at pos {cur.pos}")
        return args


def _describe(tok: Token) -> str:
    if tok.type == EOF:
        return "end of expression"
    return f"{tok.type} {tok.value!r}"


def parse(expr: str) -> ASTNode:
    """Parse canonical expression text into an AST, raising ParseError on malformed input."""
    tree = Parser(tokenize(expr)).parse()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Parsed {expr!r} into {tree!r}")
    return tree
