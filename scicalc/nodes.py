"""AST node types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ASTNode:
    """Base AST node."""
    pass


@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    value: float


@dataclass(frozen=True)
class ConstantRef(ASTNode):
    name: str


@dataclass(frozen=True)
class Call(ASTNode):
    name: str
    args: Tuple[ASTNode, ...]


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    op: str
    left: ASTNode
    right: ASTNode


@dataclass(frozen=True)
class UnaryMinus(ASTNode):
    operand: ASTNode
