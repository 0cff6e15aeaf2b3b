"""Tree-walking evaluator and the binding environment it runs against."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache, wraps
from types import MappingProxyType
from typing import Callable, Mapping, Union

from .errors import ArityMismatchError, NonFiniteResultError, UnknownIdentifierError
from .nodes import ASTNode, BinaryOp, Call, ConstantRef, NumberLiteral, UnaryMinus

logger = logging.getLogger(__name__)


class AngleMode(str, Enum):
    """Unit used by the trigonometric bindings."""
    DEGREES = "DEG"
    RADIANS = "RAD"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if key in (member.value, member.name):
                    return member
        return None

    def toggled(self) -> "AngleMode":
        return AngleMode.RADIANS if self is AngleMode.DEGREES else AngleMode.DEGREES


# --------------------------
# Bindings
# --------------------------

@dataclass(frozen=True)
class Function:
    """A callable binding with a fixed number of arguments."""
    arity: int
    impl: Callable[..., float]

    def __call__(self, *args: float) -> float:
        return self.impl(*args)


Binding = Union[float, Function]


def _ieee(func: Callable[..., float]) -> Callable[..., float]:
    """Map math-module exceptions onto IEEE-754 results (NaN for domain errors, inf for overflow)."""
    @wraps(func)
    def wrapper(*args: float) -> float:
        try:
            return float(func(*args))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return wrapper


def power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # zero to a negative power, or a negative base to a fractional power
        return math.inf if base == 0 else math.nan


def divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_log10 = _ieee(math.log10)
_ln = _ieee(math.log)


def log10(value: float) -> float:
    if value == 0:
        return -math.inf
    return _log10(value)


def ln(value: float) -> float:
    if value == 0:
        return -math.inf
    return _ln(value)


# 171! exceeds the largest double.
_MAX_FACTORIAL = 170


def factorial(n: float) -> float:
    """Product 1*2*...*n for non-negative integers; NaN otherwise."""
    if not math.isfinite(n) or n < 0 or not float(n).is_integer():
        return math.nan
    if n > _MAX_FACTORIAL:
        return math.inf
    return float(math.factorial(int(n)))


def _trig_bindings(mode: AngleMode) -> dict:
    if mode is AngleMode.DEGREES:
        def to_radians(value: float) -> float:
            return value * math.pi / 180

        def from_radians(value: float) -> float:
            return value * 180 / math.pi
    else:
        def to_radians(value: float) -> float:
            return value

        def from_radians(value: float) -> float:
            return value

    def forward(func):
        return _ieee(lambda value: func(to_radians(value)))

    def inverse(func):
        return _ieee(lambda value: from_radians(func(value)))

    return {
        'sin': Function(1, forward(math.sin)),
        'cos': Function(1, forward(math.cos)),
        'tan': Function(1, forward(math.tan)),
        'asin': Function(1, inverse(math.asin)),
        'acos': Function(1, inverse(math.acos)),
        'atan': Function(1, inverse(math.atan)),
    }


@dataclass(frozen=True)
class Environment:
    """Read-only name bindings plus the angle mode the trig functions were built for."""
    bindings: Mapping[str, Binding]
    angle_mode: AngleMode

    def constant(self, name: str) -> float:
        value = self.bindings.get(name)
        if value is None:
            raise UnknownIdentifierError(f"Unknown identifier: {name}")
        if isinstance(value, Function):
            raise UnknownIdentifierError(f"'{name}' is a function and must be called")
        return value

    def function(self, name: str) -> Function:
        value = self.bindings.get(name)
        if value is None:
            raise UnknownIdentifierError(f"Unknown function: {name}")
        if not isinstance(value, Function):
            raise UnknownIdentifierError(f"'{name}' is a constant, not a function")
        return value

    def names(self):
        return sorted(self.bindings)


@lru_cache(maxsize=None)
def environment_for(angle_mode: AngleMode) -> Environment:
    """Return the standard binding environment for ``angle_mode``."""
    mode = AngleMode(angle_mode)
    bindings: dict = dict(_trig_bindings(mode))
    bindings.update({
        'sqrt': Function(1, _ieee(math.sqrt)),
        'abs': Function(1, _ieee(math.fabs)),
        'log': Function(1, log10),
        'ln': Function(1, ln),
        'pow': Function(2, power),
        'factorial': Function(1, factorial),
        'pi': math.pi,
        'e': math.e,
    })
    return Environment(MappingProxyType(bindings), mode)


# --------------------------
# Evaluator
# --------------------------

_BINARY_OPS: Mapping[str, Callable[[float, float], float]] = MappingProxyType({
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': divide,
    '**': power,
})


class Evaluator:
    """Evaluates AST nodes against an environment.

    Intermediate values follow floating-point rules and may be NaN or
    infinite; only ``evaluate`` checks the final value.
    """

    def __init__(self, env: Environment):
        self.env = env

    def eval(self, node: ASTNode) -> float:
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, ConstantRef):
            return self.env.constant(node.name)
        if isinstance(node, UnaryMinus):
            return -self.eval(node.operand)
        if isinstance(node, BinaryOp):
            left = self.eval(node.left)
            right = self.eval(node.right)
            return _BINARY_OPS[node.op](left, right)
        if isinstance(node, Call):
            args = [self.eval(arg) for arg in node.args]
            func = self.env.function(node.name)
            if len(args) != func.arity:
                raise ArityMismatchError(
                    f"{node.name}() takes {func.arity} argument(s), got {len(args)}"
                )
            return func(*args)
        raise TypeError(f"Unsupported AST node: {type(node).__name__}")


def evaluate(ast: ASTNode, env: Environment) -> float:
    """Evaluate ``ast`` and return a finite float, or raise NonFiniteResultError."""
    value = Evaluator(env).eval(ast)
    if not math.isfinite(value):
        raise NonFiniteResultError(f"Result is not finite: {value}")
    logger.debug(f"Evaluated to {value!r} ({env.angle_mode.name})")
    return value
