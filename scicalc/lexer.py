"""Tokenizer for canonical calculator expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import LexerError

# --------------------------
# Tokens
# --------------------------

NUMBER = 'NUMBER'
IDENT = 'IDENT'
OP = 'OP'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
COMMA = 'COMMA'
EOF = 'EOF'

POWER = '**'
_DIGITS = frozenset('0123456789')
_SINGLE_OPS = set('+-*/')
_PUNCTUATION = {'(': LPAREN, ')': RPAREN, ',': COMMA}


@dataclass(frozen=True)
class Token:
    """A token with its type, literal text and index in the source."""
    type: str
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


# --------------------------
# Lexer
# --------------------------

class Lexer:
    """Splits canonical text into NUMBER, IDENT, OP, LPAREN, RPAREN, COMMA and EOF tokens.

    '-' is always an operator; negative numbers are produced by the parser's
    unary minus. Numbers keep their literal text.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _read_number(self) -> Token:
        start = self.pos
        has_dot = False
        while True:
            ch = self._peek()
            if ch in _DIGITS:
                self.pos += 1
            elif ch == '.' and not has_dot:
                has_dot = True
                self.pos += 1
            else:
                break
        if self._peek() in ('e', 'E'):
            self.pos += 1
            if self._peek() in ('+', '-'):
                self.pos += 1
            # require at least one digit after e/E
            if self._peek() not in _DIGITS:
                raise LexerError(f"Invalid numeric literal: {self.text[start:self.pos]}")
            while self._peek() in _DIGITS:
                self.pos += 1
        return Token(NUMBER, self.text[start:self.pos], start)

    def _read_ident(self) -> Token:
        start = self.pos
        while self._peek().isascii() and self._peek().isalnum():
            self.pos += 1
        return Token(IDENT, self.text[start:self.pos], start)

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.pos < self.len:
            ch = self._peek()
            if ch in _DIGITS or (ch == '.' and self._peek(1) in _DIGITS):
                tokens.append(self._read_number())
            elif ch.isascii() and ch.isalpha():
                tokens.append(self._read_ident())
            elif ch in _PUNCTUATION:
                tokens.append(Token(_PUNCTUATION[ch], ch, self.pos))
                self.pos += 1
            elif self.text.startswith(POWER, self.pos):
                tokens.append(Token(OP, POWER, self.pos))
                self.pos += 2
            elif ch in _SINGLE_OPS:
                tokens.append(Token(OP, ch, self.pos))
                self.pos += 1
            else:
                raise LexerError(f"Unexpected character at pos {self.pos}: {ch!r}")
        tokens.append(Token(EOF, '', self.pos))
        return tokens


def tokenize(text: str) -> List[Token]:
    return Lexer(text).tokenize()
